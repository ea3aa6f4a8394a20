"""Chunk addressing, voxel catalogue and buffer layout."""

from .constants import (
    CHUNK_SIZE,
    CHUNK_AREA,
    CHUNK_VOLUME,
    SEA_LEVEL,
    HIGH_ALTITUDE_LEVEL,
    MOUNTAIN_LEVEL,
    SNOW_LEVEL,
    BIOME_NOISE_FREQUENCY,
)
from .shape import (
    ChunkShape,
    DEFAULT_SHAPE,
    linearize3d,
    delinearize3d,
    linearize2d,
    delinearize2d,
)
from .voxels import Voxel, VoxelInfo, VOXEL_INFO, is_solid, is_set, voxel_name
from .chunk import ChunkKey, new_voxel_buffer, check_voxel_buffer

__all__ = [
    # Constants
    "CHUNK_SIZE",
    "CHUNK_AREA",
    "CHUNK_VOLUME",
    "SEA_LEVEL",
    "HIGH_ALTITUDE_LEVEL",
    "MOUNTAIN_LEVEL",
    "SNOW_LEVEL",
    "BIOME_NOISE_FREQUENCY",
    # Shape
    "ChunkShape",
    "DEFAULT_SHAPE",
    "linearize3d",
    "delinearize3d",
    "linearize2d",
    "delinearize2d",
    # Voxels
    "Voxel",
    "VoxelInfo",
    "VOXEL_INFO",
    "is_solid",
    "is_set",
    "voxel_name",
    # Chunk
    "ChunkKey",
    "new_voxel_buffer",
    "check_voxel_buffer",
]
