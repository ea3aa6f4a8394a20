"""Linear index <-> local coordinate mapping for chunk buffers.

A chunk buffer is a flat array of ``edge**3`` voxels. The layout is fixed:

- 3D: ``index = x + edge * (y + edge * z)`` (x fastest, then y, then z)
- 2D: ``index = x + edge * z`` (x fastest, then z)

Every generator, the surface pass and the noise sampler rely on this order.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import CHUNK_SIZE


@dataclass(frozen=True)
class ChunkShape:
    """Cubic chunk shape with edge length ``edge``."""
    edge: int = CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.edge <= 0:
            raise ValueError(f"Chunk edge must be positive: {self.edge}")

    @property
    def area(self) -> int:
        """Number of columns (entries in a planar field)."""
        return self.edge * self.edge

    @property
    def volume(self) -> int:
        """Number of voxels in the chunk buffer."""
        return self.edge * self.edge * self.edge

    def linearize3d(self, x: int, y: int, z: int) -> int:
        """Get the buffer index of local coordinates (x, y, z)."""
        e = self.edge
        if not (0 <= x < e and 0 <= y < e and 0 <= z < e):
            raise IndexError(f"Coordinates out of range for edge {e}: ({x}, {y}, {z})")
        return x + e * (y + e * z)

    def delinearize3d(self, index: int) -> Tuple[int, int, int]:
        """Get local coordinates (x, y, z) of a buffer index."""
        if not 0 <= index < self.volume:
            raise IndexError(f"Chunk index out of range [0, {self.volume}): {index}")
        e = self.edge
        x = index % e
        y = (index // e) % e
        z = index // (e * e)
        return (x, y, z)

    def linearize2d(self, x: int, z: int) -> int:
        """Get the planar index of column (x, z)."""
        e = self.edge
        if not (0 <= x < e and 0 <= z < e):
            raise IndexError(f"Column out of range for edge {e}: ({x}, {z})")
        return x + e * z

    def delinearize2d(self, index: int) -> Tuple[int, int]:
        """Get column coordinates (x, z) of a planar index."""
        if not 0 <= index < self.area:
            raise IndexError(f"Plane index out of range [0, {self.area}): {index}")
        return (index % self.edge, index // self.edge)

    def plane_index_of(self, index: int) -> int:
        """Project a buffer index onto the planar index of its column."""
        x, _, z = self.delinearize3d(index)
        return x + self.edge * z

    def column_indices(self, x: int, z: int) -> np.ndarray:
        """Buffer indices of column (x, z), bottom to top."""
        base = self.linearize3d(x, 0, z)
        return base + self.edge * np.arange(self.edge, dtype=np.int64)

    def delinearize3d_array(self, indices: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Vectorised delinearize3d for an array of buffer indices."""
        indices = np.asarray(indices, dtype=np.int64)
        if indices.size and (indices.min() < 0 or indices.max() >= self.volume):
            raise IndexError(f"Chunk indices out of range [0, {self.volume})")
        e = self.edge
        return (indices % e, (indices // e) % e, indices // (e * e))

    def as_grid(self, voxels: np.ndarray) -> np.ndarray:
        """View a flat buffer as a ``[z, y, x]`` array (no copy)."""
        return voxels.reshape((self.edge, self.edge, self.edge))


DEFAULT_SHAPE = ChunkShape(CHUNK_SIZE)


def linearize3d(x: int, y: int, z: int) -> int:
    """linearize3d for the default 32-voxel chunk."""
    return DEFAULT_SHAPE.linearize3d(x, y, z)


def delinearize3d(index: int) -> Tuple[int, int, int]:
    """delinearize3d for the default 32-voxel chunk."""
    return DEFAULT_SHAPE.delinearize3d(index)


def linearize2d(x: int, z: int) -> int:
    """linearize2d for the default 32-voxel chunk."""
    return DEFAULT_SHAPE.linearize2d(x, z)


def delinearize2d(index: int) -> Tuple[int, int]:
    """delinearize2d for the default 32-voxel chunk."""
    return DEFAULT_SHAPE.delinearize2d(index)
