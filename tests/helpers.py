"""Buffer helpers shared by the test modules."""

import numpy as np

from voxbiome.world import DEFAULT_SHAPE, Voxel


def stone_column(voxels, x, z, top, shape=DEFAULT_SHAPE, bottom=0):
    """Fill local column (x, z) with stone from ``bottom`` to ``top`` inclusive."""
    for y in range(bottom, top + 1):
        voxels[shape.linearize3d(x, y, z)] = Voxel.STONE


def column_values(voxels, x, z, shape=DEFAULT_SHAPE):
    return [int(v) for v in voxels[shape.column_indices(x, z)]]


def changed_indices(before, after):
    return np.flatnonzero(before != after).tolist()
