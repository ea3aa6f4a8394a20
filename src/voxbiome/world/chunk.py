"""Chunk keys and voxel buffers."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .shape import ChunkShape, DEFAULT_SHAPE
from .voxels import VOXEL_DTYPE


@dataclass(frozen=True, order=True)
class ChunkKey:
    """Position of a chunk in chunk-space (not world units).

    Attributes:
        x: Chunk X coordinate
        y: Chunk Y coordinate
        z: Chunk Z coordinate
    """
    x: int
    y: int
    z: int

    def world_origin(self, edge: int = DEFAULT_SHAPE.edge) -> Tuple[int, int, int]:
        """Get the world position of local voxel (0, 0, 0)."""
        return (self.x * edge, self.y * edge, self.z * edge)

    def to_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


def new_voxel_buffer(shape: ChunkShape = DEFAULT_SHAPE) -> np.ndarray:
    """Allocate an empty voxel buffer for one chunk generation call."""
    return np.zeros(shape.volume, dtype=VOXEL_DTYPE)


def check_voxel_buffer(voxels: np.ndarray, shape: ChunkShape = DEFAULT_SHAPE) -> None:
    """Validate that ``voxels`` is a flat buffer of ``shape.volume`` cells."""
    if not isinstance(voxels, np.ndarray):
        raise ValueError(f"Voxel buffer must be a numpy array, got {type(voxels).__name__}")
    if voxels.ndim != 1:
        raise ValueError(f"Voxel buffer must be flat, got {voxels.ndim} dimensions")
    if voxels.shape[0] != shape.volume:
        raise ValueError(
            f"Voxel buffer has {voxels.shape[0]} cells, expected {shape.volume} for edge {shape.edge}"
        )
