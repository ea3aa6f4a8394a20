"""Biome attribute noise, biome selection and column generation."""

from .noise import (
    WorleyNoise,
    DistanceFunction,
    ReturnType,
    biomes_noise,
    chunk_plane_bounds,
)
from .generators import (
    BiomeGenerator,
    BasicLandBiome,
    DryLandBiome,
    SnowLandBiome,
    SandLandBiome,
    BlueLandBiome,
    gen_land,
    column_height,
    paint_layers,
)
from .biome import (
    BiomeType,
    BIOME_BANDS,
    GENERATORS,
    select_biome,
    get_generator,
    get_generator_by_attr,
    classify_plane,
    biome_from_code,
)
from .biomes import biomes_generate
from .surface import HeightField, fill_terrain, find_surface_indices, open_above_chunk

__all__ = [
    # Noise
    "WorleyNoise",
    "DistanceFunction",
    "ReturnType",
    "biomes_noise",
    "chunk_plane_bounds",
    # Generators
    "BiomeGenerator",
    "BasicLandBiome",
    "DryLandBiome",
    "SnowLandBiome",
    "SandLandBiome",
    "BlueLandBiome",
    "gen_land",
    "column_height",
    "paint_layers",
    # Selection
    "BiomeType",
    "BIOME_BANDS",
    "GENERATORS",
    "select_biome",
    "get_generator",
    "get_generator_by_attr",
    "classify_plane",
    "biome_from_code",
    # Orchestration
    "biomes_generate",
    # Surface pass
    "HeightField",
    "fill_terrain",
    "find_surface_indices",
    "open_above_chunk",
]
