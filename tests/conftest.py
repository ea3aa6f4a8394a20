import pytest

from voxbiome.world import ChunkShape, DEFAULT_SHAPE, new_voxel_buffer


@pytest.fixture
def shape():
    return DEFAULT_SHAPE


@pytest.fixture
def small_shape():
    return ChunkShape(8)


@pytest.fixture
def voxels(shape):
    return new_voxel_buffer(shape)
