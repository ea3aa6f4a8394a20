"""Biome selection from the noise-derived biome attribute.

Selection uses ordered half-open bands over the attribute value; the first
band whose upper bound is greater than the value wins. A value sitting
exactly on a threshold therefore belongs to the upper band.
"""

from enum import Enum
from typing import Dict, Tuple
import math

import numpy as np

from .generators import (
    BiomeGenerator,
    BasicLandBiome,
    DryLandBiome,
    SnowLandBiome,
    SandLandBiome,
    BlueLandBiome,
)


class BiomeType(Enum):
    """Closed set of biome variants."""
    BASIC_LAND = 0
    DRY_LAND = 1
    SNOW_LAND = 2
    SAND_LAND = 3
    BLUE_LAND = 4


# (exclusive upper bound, biome); the first band is unbounded below.
BIOME_BANDS: Tuple[Tuple[float, BiomeType], ...] = (
    (0.1, BiomeType.BASIC_LAND),
    (0.4, BiomeType.DRY_LAND),
    (0.6, BiomeType.SNOW_LAND),
    (0.8, BiomeType.SAND_LAND),
    (math.inf, BiomeType.BLUE_LAND),
)

GENERATORS: Dict[BiomeType, BiomeGenerator] = {
    BiomeType.BASIC_LAND: BasicLandBiome(),
    BiomeType.DRY_LAND: DryLandBiome(),
    BiomeType.SNOW_LAND: SnowLandBiome(),
    BiomeType.SAND_LAND: SandLandBiome(),
    BiomeType.BLUE_LAND: BlueLandBiome(),
}

# One-letter map symbols and preview colours
BIOME_SYMBOLS: Dict[BiomeType, str] = {
    BiomeType.BASIC_LAND: "B",
    BiomeType.DRY_LAND: "D",
    BiomeType.SNOW_LAND: "S",
    BiomeType.SAND_LAND: "A",
    BiomeType.BLUE_LAND: "W",
}

BIOME_COLORS: Dict[BiomeType, Tuple[int, int, int]] = {
    BiomeType.BASIC_LAND: (96, 160, 64),
    BiomeType.DRY_LAND: (150, 110, 70),
    BiomeType.SNOW_LAND: (235, 240, 245),
    BiomeType.SAND_LAND: (220, 200, 130),
    BiomeType.BLUE_LAND: (60, 110, 200),
}

_UPPER_BOUNDS = np.array([upper for upper, _ in BIOME_BANDS[:-1]], dtype=np.float64)
_BAND_BIOMES = [biome for _, biome in BIOME_BANDS]


def select_biome(value: float) -> BiomeType:
    """Get the biome for one attribute value.

    Raises:
        ValueError: If the value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Biome attribute must be finite: {value}")
    for upper, biome in BIOME_BANDS:
        if value < upper:
            return biome
    # Unreachable: the last band is unbounded above.
    return BIOME_BANDS[-1][1]


def get_generator(biome: BiomeType) -> BiomeGenerator:
    """Get the singleton generator of a biome."""
    return GENERATORS[biome]


def get_generator_by_attr(value: float) -> BiomeGenerator:
    """Get the generator governing a column with attribute ``value``."""
    return GENERATORS[select_biome(value)]


def classify_plane(attrs: np.ndarray) -> np.ndarray:
    """Vectorised select_biome.

    Returns:
        Array of ``BiomeType.value`` codes with the shape of ``attrs``
    """
    attrs = np.asarray(attrs, dtype=np.float64)
    if not np.all(np.isfinite(attrs)):
        raise ValueError("Biome attribute field contains non-finite values")
    return np.searchsorted(_UPPER_BOUNDS, attrs, side="right").astype(np.uint8)


def biome_from_code(code: int) -> BiomeType:
    """Convert a classify_plane code back to a BiomeType."""
    return _BAND_BIOMES[int(code)]
