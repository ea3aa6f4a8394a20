import numpy as np
import pytest

from voxbiome.terrain import HeightField, fill_terrain, find_surface_indices, open_above_chunk
from voxbiome.world import ChunkKey, Voxel, new_voxel_buffer

from helpers import column_values, stone_column


def test_surface_of_simple_columns(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 0, 0, 3, small_shape)
    stone_column(voxels, 5, 2, 0, small_shape)
    assert find_surface_indices(voxels, small_shape) == [
        small_shape.linearize3d(0, 3, 0),
        small_shape.linearize3d(5, 0, 2),
    ]


def test_columns_are_ordered_x_fastest(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 0, 1, 2, small_shape)
    stone_column(voxels, 1, 0, 2, small_shape)
    assert find_surface_indices(voxels, small_shape) == [
        small_shape.linearize3d(1, 2, 0),
        small_shape.linearize3d(0, 2, 1),
    ]


def test_overhang_reports_topmost_surface(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 2, 2, 2, small_shape)
    stone_column(voxels, 2, 2, 6, small_shape, bottom=5)
    assert find_surface_indices(voxels, small_shape) == [small_shape.linearize3d(2, 6, 2)]


def test_full_column_surfaces_at_chunk_top(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 3, 4, 7, small_shape)
    assert find_surface_indices(voxels, small_shape) == [small_shape.linearize3d(3, 7, 4)]


def test_water_is_not_surface(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 1, 1, 2, small_shape)
    for y in (3, 4):
        voxels[small_shape.linearize3d(1, y, 1)] = Voxel.WATER
    assert find_surface_indices(voxels, small_shape) == [small_shape.linearize3d(1, 2, 1)]


def test_empty_chunk_has_no_surface(small_shape):
    assert find_surface_indices(new_voxel_buffer(small_shape), small_shape) == []


def test_fill_terrain_respects_chunk_height(small_shape):
    heights = np.full(small_shape.area, 3)
    heights[small_shape.linearize2d(7, 7)] = 10

    low = new_voxel_buffer(small_shape)
    fill_terrain(ChunkKey(0, 0, 0), low, heights, small_shape)
    assert column_values(low, 0, 0, small_shape) == [Voxel.STONE] * 4 + [Voxel.EMPTY] * 4
    assert column_values(low, 7, 7, small_shape) == [Voxel.STONE] * 8

    high = new_voxel_buffer(small_shape)
    fill_terrain(ChunkKey(0, 1, 0), high, heights, small_shape)
    assert column_values(high, 0, 0, small_shape) == [Voxel.EMPTY] * 8
    assert column_values(high, 7, 7, small_shape) == [Voxel.STONE] * 3 + [Voxel.EMPTY] * 5


def test_fill_terrain_rejects_wrong_height_count(small_shape):
    with pytest.raises(ValueError):
        fill_terrain(ChunkKey(0, 0, 0), new_voxel_buffer(small_shape), np.zeros(10), small_shape)


def test_height_field_is_deterministic(shape):
    a = HeightField(seed=42).chunk_heights(ChunkKey(1, 0, 1), shape)
    b = HeightField(seed=42).chunk_heights(ChunkKey(1, 0, 1), shape)
    assert a.shape == (shape.area,)
    assert np.array_equal(a, b)


def test_height_field_stays_within_amplitude(shape):
    field = HeightField(seed=3, base_height=20, amplitude=10.0)
    heights = field.chunk_heights(ChunkKey(-2, 0, 5), shape)
    assert heights.min() >= 10
    assert heights.max() <= 30


def test_height_field_rejects_zero_octaves():
    with pytest.raises(ValueError):
        HeightField(seed=0, octaves=0)


def test_buried_top_row_is_not_surface(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 3, 4, 7, small_shape)
    stone_column(voxels, 0, 0, 7, small_shape)
    open_above = np.ones(small_shape.area, dtype=bool)
    open_above[small_shape.linearize2d(3, 4)] = False
    assert find_surface_indices(voxels, small_shape, open_above) == [small_shape.linearize3d(0, 7, 0)]


def test_buried_column_with_cave_keeps_cave_floor(small_shape):
    voxels = new_voxel_buffer(small_shape)
    stone_column(voxels, 1, 1, 2, small_shape)
    stone_column(voxels, 1, 1, 7, small_shape, bottom=5)
    closed = np.zeros(small_shape.area, dtype=bool)
    assert find_surface_indices(voxels, small_shape, closed) == [small_shape.linearize3d(1, 2, 1)]


def test_open_above_chunk_follows_heights(small_shape):
    heights = np.full(small_shape.area, 7)
    heights[1] = 8
    heights[2] = -3
    flags = open_above_chunk(ChunkKey(0, 0, 0), heights, small_shape)
    assert flags.shape == (small_shape.area,)
    assert flags[0] and not flags[1] and flags[2]
    assert not open_above_chunk(ChunkKey(0, -1, 0), heights, small_shape)[0]


def test_open_above_flags_must_cover_every_column(small_shape):
    with pytest.raises(ValueError):
        find_surface_indices(new_voxel_buffer(small_shape), small_shape, np.ones(3, dtype=bool))
