"""Cellular (Worley) noise and the per-chunk biome attribute sampler.

The noise is a pure function of world coordinates and seed: every chunk
samples the same underlying field through a window offset by its world
position, so values line up across chunk borders without reseeding.
"""

from enum import Enum
from typing import Tuple, Union

import numpy as np

from ..world.chunk import ChunkKey
from ..world.constants import BIOME_NOISE_FREQUENCY
from ..world.shape import ChunkShape, DEFAULT_SHAPE

_U32 = np.uint32
_VALUE_SALT = 0x9E3779B9


class DistanceFunction(Enum):
    """Metric used to find the nearest feature point."""
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"


class ReturnType(Enum):
    """What a Worley sample reports."""
    VALUE = "value"  # random value of the nearest feature cell, in [-1, 1]
    DISTANCE = "distance"  # distance to the nearest feature point, rescaled


def _avalanche(h: np.ndarray) -> np.ndarray:
    h ^= h >> _U32(16)
    h *= _U32(0x7FEB352D)
    h ^= h >> _U32(15)
    h *= _U32(0x846CA68B)
    h ^= h >> _U32(16)
    return h


def _hash_cells(cell_x: np.ndarray, cell_z: np.ndarray, seed: int) -> np.ndarray:
    """Vectorised integer hash of lattice cells -> uint32."""
    h = (cell_x.astype(_U32) * _U32(374761393)) ^ (cell_z.astype(_U32) * _U32(668265263))
    h ^= _U32(seed)
    return _avalanche(h)


def _distance(dx: np.ndarray, dz: np.ndarray, metric: DistanceFunction) -> np.ndarray:
    if metric is DistanceFunction.MANHATTAN:
        return np.abs(dx) + np.abs(dz)
    if metric is DistanceFunction.CHEBYSHEV:
        return np.maximum(np.abs(dx), np.abs(dz))
    return np.sqrt(dx * dx + dz * dz)


class WorleyNoise:
    """Seeded 2D Worley noise with one jittered feature point per cell.

    Args:
        seed: World seed; reduced to 32 bits
        frequency: Sampling frequency applied to world coordinates
        distance_function: Metric for the nearest-point search
        return_type: Report the nearest cell's value or its distance
    """

    def __init__(
        self,
        seed: int,
        frequency: float = BIOME_NOISE_FREQUENCY,
        distance_function: Union[DistanceFunction, str] = DistanceFunction.EUCLIDEAN,
        return_type: Union[ReturnType, str] = ReturnType.VALUE,
    ):
        if not frequency > 0:
            raise ValueError(f"Noise frequency must be positive: {frequency}")
        self.seed = int(seed) & 0xFFFFFFFF
        self.frequency = float(frequency)
        self.distance_function = DistanceFunction(distance_function)
        self.return_type = ReturnType(return_type)

    def sample(self, x: np.ndarray, z: np.ndarray) -> np.ndarray:
        """Evaluate the noise at world coordinates (same-shaped arrays)."""
        px = np.asarray(x, dtype=np.float64) * self.frequency
        pz = np.asarray(z, dtype=np.float64) * self.frequency
        base_x = np.floor(px).astype(np.int64)
        base_z = np.floor(pz).astype(np.int64)

        best = np.full(px.shape, np.inf)
        best_hash = np.zeros(px.shape, dtype=_U32)

        for oz in (-1, 0, 1):
            for ox in (-1, 0, 1):
                cell_x = base_x + ox
                cell_z = base_z + oz
                h = _hash_cells(cell_x, cell_z, self.seed)
                feature_x = cell_x + (h & _U32(0xFFFF)).astype(np.float64) / 65536.0
                feature_z = cell_z + (h >> _U32(16)).astype(np.float64) / 65536.0
                dist = _distance(feature_x - px, feature_z - pz, self.distance_function)
                closer = dist < best
                best = np.where(closer, dist, best)
                best_hash = np.where(closer, h, best_hash)

        if self.return_type is ReturnType.DISTANCE:
            return best * 2.0 - 1.0

        value = _avalanche(best_hash ^ _U32(_VALUE_SALT)) & _U32(0xFFFFFF)
        return value.astype(np.float64) / float(0xFFFFFF) * 2.0 - 1.0

    def get(self, x: float, z: float) -> float:
        """Evaluate the noise at a single world position."""
        return float(self.sample(np.array([x]), np.array([z]))[0])

    def sample_plane(
        self,
        x_bounds: Tuple[float, float],
        z_bounds: Tuple[float, float],
        width: int,
        height: int,
    ) -> np.ndarray:
        """Sample a uniform ``height x width`` grid over a world rectangle.

        Column ``i`` of the result sits at ``x0 + i * (x1 - x0) / width`` and
        row ``j`` at ``z0 + j * (z1 - z0) / height``; the upper bounds are
        exclusive.

        Returns:
            Array of shape (height, width), rows along Z and columns along X
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Plane size must be positive: {width}x{height}")
        x0, x1 = x_bounds
        z0, z1 = z_bounds
        xs = x0 + np.arange(width, dtype=np.float64) * ((x1 - x0) / width)
        zs = z0 + np.arange(height, dtype=np.float64) * ((z1 - z0) / height)
        grid_x, grid_z = np.meshgrid(xs, zs)
        return self.sample(grid_x, grid_z)


def chunk_plane_bounds(chunk_key: ChunkKey, shape: ChunkShape = DEFAULT_SHAPE) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """World-space rectangle covered by a chunk's horizontal footprint."""
    edge = shape.edge
    x_offset = float(chunk_key.x * edge)
    z_offset = float(chunk_key.z * edge)
    return (x_offset, x_offset + edge), (z_offset, z_offset + edge)


def biomes_noise(
    chunk_key: ChunkKey,
    seed: int,
    shape: ChunkShape = DEFAULT_SHAPE,
    frequency: float = BIOME_NOISE_FREQUENCY,
    distance_function: Union[DistanceFunction, str] = DistanceFunction.EUCLIDEAN,
    return_type: Union[ReturnType, str] = ReturnType.VALUE,
) -> np.ndarray:
    """Sample the biome attribute field for one chunk.

    Args:
        chunk_key: Chunk whose footprint is sampled; Y is ignored
        seed: World seed
        shape: Chunk shape
        frequency: Noise frequency, low enough that regions span many chunks

    Returns:
        Flat float64 array of ``shape.area`` values indexed by ``linearize2d``
    """
    noise = WorleyNoise(seed, frequency, distance_function, return_type)
    x_bounds, z_bounds = chunk_plane_bounds(chunk_key, shape)
    plane = noise.sample_plane(x_bounds, z_bounds, shape.edge, shape.edge)
    return plane.reshape(shape.area)
