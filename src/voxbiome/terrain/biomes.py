"""Chunk biome pass: noise sampling, biome selection and column painting."""

from typing import Callable, Sequence
import logging

import numpy as np

from .biome import get_generator_by_attr
from .generators import gen_land
from .noise import biomes_noise
from ..world.chunk import ChunkKey, check_voxel_buffer
from ..world.shape import ChunkShape, DEFAULT_SHAPE

logger = logging.getLogger(__name__)

# (chunk_key, seed, shape) -> flat attribute field of shape.area values
NoiseSampler = Callable[[ChunkKey, int, ChunkShape], np.ndarray]


def _default_sampler(chunk_key: ChunkKey, seed: int, shape: ChunkShape) -> np.ndarray:
    return biomes_noise(chunk_key, seed, shape)


def biomes_generate(
    chunk_key: ChunkKey,
    seed: int,
    surface_indices: Sequence[int],
    voxels: np.ndarray,
    shape: ChunkShape = DEFAULT_SHAPE,
    sampler: NoiseSampler = _default_sampler,
) -> None:
    """Apply biomes to every surface column of one chunk.

    The buffer is mutated in place. If any index or the sampled field is
    invalid the call raises before the first voxel is written; a buffer from
    a call that raised must still be discarded by the caller.

    Args:
        chunk_key: Chunk being generated
        seed: World seed
        surface_indices: Buffer indices of each column's topmost solid voxel
        voxels: Flat chunk buffer of ``shape.volume`` cells
        shape: Chunk shape
        sampler: Biome attribute sampler, called once per chunk

    Raises:
        IndexError: If a surface index lies outside the buffer
        ValueError: If the buffer, the index list or the sampled field is malformed
    """
    if len(surface_indices) == 0:
        return

    check_voxel_buffer(voxels, shape)
    indices = np.asarray(surface_indices)
    if indices.ndim != 1:
        raise ValueError(f"Surface indices must be a flat sequence, got {indices.ndim} dimensions")
    if indices.dtype.kind not in "iu":
        raise ValueError(f"Surface indices must be integers, got dtype {indices.dtype}")
    indices = indices.astype(np.int64)
    bad = (indices < 0) | (indices >= shape.volume)
    if bad.any():
        raise IndexError(
            f"Surface index {int(indices[bad][0])} outside chunk buffer of {shape.volume} cells "
            f"(chunk {chunk_key})"
        )

    attrs = np.asarray(sampler(chunk_key, seed, shape), dtype=np.float64).reshape(-1)
    if attrs.shape[0] != shape.area:
        raise ValueError(f"Biome field has {attrs.shape[0]} values, expected {shape.area}")
    if not np.all(np.isfinite(attrs)):
        raise ValueError(f"Biome field for chunk {chunk_key} contains non-finite values")

    for index in indices.tolist():
        plane_index = shape.plane_index_of(index)
        generator = get_generator_by_attr(attrs[plane_index])
        gen_land(generator, chunk_key, voxels, index, plane_index, shape)

    logger.debug("Chunk %s: painted %d surface columns", chunk_key, len(indices))
