"""Top-down biome map previews."""

from pathlib import Path

import numpy as np
from PIL import Image

from .config import GenerationConfig
from .terrain import BiomeType, biomes_noise, classify_plane
from .terrain.biome import BIOME_COLORS
from .world.chunk import ChunkKey

_PALETTE = np.array([BIOME_COLORS[biome] for biome in BiomeType], dtype=np.uint8)


def biome_map(config: GenerationConfig) -> np.ndarray:
    """Biome codes for every column of the configured region.

    Returns:
        Array of shape (depth, width) in blocks, rows along Z from the
        region's minimum corner
    """
    config.validate()
    shape = config.shape
    edge = shape.edge
    lo, hi = config.min_chunk, config.max_chunk
    width = (hi.x - lo.x + 1) * edge
    depth = (hi.z - lo.z + 1) * edge
    codes = np.zeros((depth, width), dtype=np.uint8)
    for cz in range(lo.z, hi.z + 1):
        for cx in range(lo.x, hi.x + 1):
            attrs = biomes_noise(
                ChunkKey(cx, 0, cz),
                config.seed,
                shape,
                frequency=config.noise_frequency,
                distance_function=config.distance_function,
                return_type=config.return_type,
            )
            row = (cz - lo.z) * edge
            col = (cx - lo.x) * edge
            codes[row:row + edge, col:col + edge] = classify_plane(attrs).reshape(edge, edge)
    return codes


def render_biome_map(config: GenerationConfig, path: Path) -> Path:
    """Write the region's biome map as an RGB PNG, one pixel per column."""
    codes = biome_map(config)
    image = Image.fromarray(_PALETTE[codes])
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path)
    return path
