"""Multi-chunk generation pipeline."""

from .pipeline import (
    WorldGenerator,
    GenerationResult,
    GenerationProgress,
    ChunkResult,
    ChunkGenerationError,
    ProgressCallback,
    generate_region,
    biome_share,
)

__all__ = [
    "WorldGenerator",
    "GenerationResult",
    "GenerationProgress",
    "ChunkResult",
    "ChunkGenerationError",
    "ProgressCallback",
    "generate_region",
    "biome_share",
]
