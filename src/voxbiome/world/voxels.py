"""Voxel catalogue used by terrain and biome generation.

Voxels are stored as ``uint16`` values in chunk buffers. ``Voxel.EMPTY`` (0)
is both air and "not set by any pass yet"; every other value marks a cell
that a previous pass has already filled.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict

import numpy as np

VOXEL_DTYPE = np.uint16


class Voxel(IntEnum):
    """Known voxel materials."""
    EMPTY = 0
    STONE = 1
    DIRT = 2
    GRASS = 3
    SAND = 4
    SANDSTONE = 5
    SNOW = 6
    ICE = 7
    WATER = 8
    CLAY = 9
    DRY_DIRT = 10


@dataclass(frozen=True)
class VoxelInfo:
    """Static properties of a voxel material."""
    voxel: Voxel
    name: str
    is_solid: bool = True
    is_transparent: bool = False


VOXEL_INFO: Dict[Voxel, VoxelInfo] = {
    Voxel.EMPTY: VoxelInfo(Voxel.EMPTY, "Empty", is_solid=False, is_transparent=True),
    Voxel.STONE: VoxelInfo(Voxel.STONE, "Stone"),
    Voxel.DIRT: VoxelInfo(Voxel.DIRT, "Dirt"),
    Voxel.GRASS: VoxelInfo(Voxel.GRASS, "Grass"),
    Voxel.SAND: VoxelInfo(Voxel.SAND, "Sand"),
    Voxel.SANDSTONE: VoxelInfo(Voxel.SANDSTONE, "Sandstone"),
    Voxel.SNOW: VoxelInfo(Voxel.SNOW, "Snow"),
    Voxel.ICE: VoxelInfo(Voxel.ICE, "Ice", is_transparent=True),
    Voxel.WATER: VoxelInfo(Voxel.WATER, "Water", is_solid=False, is_transparent=True),
    Voxel.CLAY: VoxelInfo(Voxel.CLAY, "Clay"),
    Voxel.DRY_DIRT: VoxelInfo(Voxel.DRY_DIRT, "Dry Dirt"),
}


def is_solid(value: int) -> bool:
    """Check whether a voxel value is a solid material."""
    try:
        return VOXEL_INFO[Voxel(int(value))].is_solid
    except ValueError:
        return False


def is_set(value: int) -> bool:
    """Check whether a previous pass has written this cell."""
    return int(value) != Voxel.EMPTY


def voxel_name(value: int) -> str:
    """Get the display name of a voxel value, 'Unknown' if not catalogued."""
    try:
        return VOXEL_INFO[Voxel(int(value))].name
    except ValueError:
        return "Unknown"
