"""Base terrain and surface detection feeding the biome pass.

The biome pass only needs the surface voxels of a chunk. This module fills a
chunk with stone up to a fractal OpenSimplex height field and then finds the
topmost solid voxel of every column.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from opensimplex import OpenSimplex

from ..world.chunk import ChunkKey, check_voxel_buffer
from ..world.constants import (
    DEFAULT_BASE_HEIGHT,
    DEFAULT_HEIGHT_AMPLITUDE,
    DEFAULT_HEIGHT_FREQUENCY,
    DEFAULT_HEIGHT_OCTAVES,
)
from ..world.shape import ChunkShape, DEFAULT_SHAPE
from ..world.voxels import Voxel, is_solid

_NON_SOLID = np.array([v for v in Voxel if not is_solid(v)], dtype=np.uint16)


@dataclass
class HeightField:
    """Fractal OpenSimplex height field in world-space block heights."""
    seed: int
    base_height: int = DEFAULT_BASE_HEIGHT
    amplitude: float = DEFAULT_HEIGHT_AMPLITUDE
    frequency: float = DEFAULT_HEIGHT_FREQUENCY
    octaves: int = DEFAULT_HEIGHT_OCTAVES
    lacunarity: float = 2.0
    gain: float = 0.5

    def __post_init__(self) -> None:
        if self.octaves <= 0:
            raise ValueError(f"octaves must be positive: {self.octaves}")
        # Offset from the biome seed so terrain and biomes are uncorrelated.
        self._simplex = OpenSimplex(seed=int(self.seed) + 7919)

    def sample(self, xs: np.ndarray, zs: np.ndarray) -> np.ndarray:
        """Integer heights on the grid spanned by ``xs`` and ``zs``.

        Returns:
            Array of shape (len(zs), len(xs))
        """
        freq = self.frequency
        amp = 1.0
        total = np.zeros((len(zs), len(xs)), dtype=np.float64)
        norm = 0.0
        for _ in range(self.octaves):
            total += self._simplex.noise2array(xs * freq, zs * freq) * amp
            norm += amp
            freq *= self.lacunarity
            amp *= self.gain
        total /= max(norm, 1e-9)
        return np.floor(self.base_height + total * self.amplitude).astype(np.int64)

    def chunk_heights(self, chunk_key: ChunkKey, shape: ChunkShape = DEFAULT_SHAPE) -> np.ndarray:
        """Surface heights for a chunk footprint, flat and indexed by linearize2d."""
        x0, _, z0 = chunk_key.world_origin(shape.edge)
        xs = np.arange(x0, x0 + shape.edge, dtype=np.float64)
        zs = np.arange(z0, z0 + shape.edge, dtype=np.float64)
        return self.sample(xs, zs).reshape(shape.area)


def fill_terrain(
    chunk_key: ChunkKey,
    voxels: np.ndarray,
    heights: np.ndarray,
    shape: ChunkShape = DEFAULT_SHAPE,
    material: Voxel = Voxel.STONE,
) -> None:
    """Fill every column with ``material`` up to and including its height.

    Args:
        chunk_key: Chunk being filled
        voxels: Flat chunk buffer, mutated in place
        heights: Flat per-column world heights (``shape.area`` values)
        shape: Chunk shape
        material: Voxel written below the surface
    """
    check_voxel_buffer(voxels, shape)
    heights = np.asarray(heights).reshape(-1)
    if heights.shape[0] != shape.area:
        raise ValueError(f"Expected {shape.area} column heights, got {heights.shape[0]}")
    edge = shape.edge
    base_y = chunk_key.y * edge
    world_y = base_y + np.arange(edge)
    # [z, y, x] mask against [z, x] heights
    mask = world_y[None, :, None] <= heights.reshape(edge, edge)[:, None, :]
    grid = shape.as_grid(voxels)
    grid[mask] = material


def find_surface_indices(
    voxels: np.ndarray,
    shape: ChunkShape = DEFAULT_SHAPE,
    open_above: Optional[np.ndarray] = None,
) -> List[int]:
    """Find the topmost solid voxel of each column.

    A voxel counts as surface when it is solid and the cell above it is not.
    For the top row the cell above lives in the next chunk up; ``open_above``
    says per column whether that cell is open. Without it the chunk is
    treated as having nothing above it. Columns without a surface voxel are
    skipped.

    Args:
        voxels: Flat chunk buffer
        shape: Chunk shape
        open_above: Optional flat bool array of ``shape.area`` values indexed
            by ``linearize2d``

    Returns:
        Buffer indices ordered by column (x fastest, then z)
    """
    check_voxel_buffer(voxels, shape)
    edge = shape.edge
    grid = shape.as_grid(voxels)
    solid = ~np.isin(grid, _NON_SOLID)
    solid_above = np.zeros_like(solid)
    solid_above[:, :-1, :] = solid[:, 1:, :]
    if open_above is not None:
        open_above = np.asarray(open_above, dtype=bool).reshape(-1)
        if open_above.shape[0] != shape.area:
            raise ValueError(f"Expected {shape.area} open-above flags, got {open_above.shape[0]}")
        solid_above[:, -1, :] = ~open_above.reshape(edge, edge)
    surface = solid & ~solid_above

    flipped = surface[:, ::-1, :]
    has_surface = flipped.any(axis=1)
    top_y = edge - 1 - flipped.argmax(axis=1)

    zs, xs = np.nonzero(has_surface)
    ys = top_y[zs, xs]
    return (xs + edge * (ys + edge * zs)).tolist()


def open_above_chunk(chunk_key: ChunkKey, heights: np.ndarray, shape: ChunkShape = DEFAULT_SHAPE) -> np.ndarray:
    """Per-column flags: is the cell just above this chunk's top row open air?

    ``heights`` are the flat world surface heights used by ``fill_terrain``.
    """
    top = (chunk_key.y + 1) * shape.edge
    return np.asarray(heights).reshape(-1) < top
