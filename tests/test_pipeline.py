import time

import numpy as np
import pytest

from voxbiome.config import GenerationConfig
from voxbiome.generator import (
    ChunkGenerationError,
    GenerationProgress,
    WorldGenerator,
    biome_share,
    generate_region,
)
from voxbiome.terrain import BiomeType
from voxbiome.world import ChunkKey, ChunkShape, Voxel


def flat_config(**kwargs):
    """Region whose terrain surface is at height 10 everywhere."""
    defaults = dict(
        name="flat",
        min_chunk=ChunkKey(0, 0, 0),
        max_chunk=ChunkKey(1, 0, 1),
        seed=42,
        base_height=10,
        height_amplitude=0.0,
    )
    defaults.update(kwargs)
    return GenerationConfig(**defaults)


class NaNWorldGenerator(WorldGenerator):
    def sample_attributes(self, key):
        field = super().sample_attributes(key)
        field[0] = np.nan
        return field


def test_generate_chunk_paints_every_column():
    generator = WorldGenerator(flat_config())
    chunk = generator.generate_chunk(ChunkKey(0, 0, 0))
    shape = generator.shape

    assert chunk.voxels.shape == (shape.volume,)
    assert len(chunk.surface_indices) == shape.area
    assert all(shape.delinearize3d(i)[1] == 10 for i in chunk.surface_indices)
    assert sum(chunk.biome_counts.values()) == shape.area
    # No surface voxel is left as bare stone below high altitude.
    assert all(chunk.voxels[i] != Voxel.STONE for i in chunk.surface_indices)


def test_chunk_above_terrain_is_empty():
    generator = WorldGenerator(flat_config())
    chunk = generator.generate_chunk(ChunkKey(0, 1, 0))
    assert chunk.surface_indices == []
    assert not chunk.voxels.any()
    assert not chunk.biome_counts


def test_run_collects_every_chunk():
    config = flat_config()
    result = WorldGenerator(config).run()
    assert set(result.chunks) == set(config.chunk_keys())
    assert result.surface_columns == config.chunk_count * config.shape.area
    assert sum(result.biome_counts.values()) == result.surface_columns


def test_parallel_matches_sequential():
    sequential = WorldGenerator(flat_config(height_amplitude=20.0, max_chunk=ChunkKey(1, 1, 1))).run()
    parallel = WorldGenerator(
        flat_config(height_amplitude=20.0, max_chunk=ChunkKey(1, 1, 1), parallel=True, parallel_workers=4)
    ).run()

    assert set(sequential.chunks) == set(parallel.chunks)
    for key, voxels in sequential.chunks.items():
        assert np.array_equal(voxels, parallel.chunks[key])
    assert sequential.biome_counts == parallel.biome_counts


def test_progress_reports_reach_total():
    reports = []
    config = flat_config()
    WorldGenerator(config).run(reports.append)

    assert all(isinstance(r, GenerationProgress) for r in reports)
    assert reports[0].current == 0
    assert reports[-1].current == reports[-1].total == config.chunk_count
    assert reports[-1].percent == 100.0


@pytest.mark.parametrize("parallel", [False, True])
def test_invalid_field_raises_chunk_generation_error(parallel):
    generator = NaNWorldGenerator(flat_config(parallel=parallel, parallel_workers=2))
    with pytest.raises(ChunkGenerationError) as excinfo:
        generator.run()
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.chunk_key in set(generator.config.chunk_keys())


def test_invalid_config_is_rejected():
    with pytest.raises(ValueError):
        WorldGenerator(flat_config(min_chunk=ChunkKey(2, 0, 0)))


def test_small_chunk_shape():
    result = WorldGenerator(flat_config(chunk_size=8, base_height=3, max_chunk=ChunkKey(0, 0, 0))).run()
    voxels = result.chunks[ChunkKey(0, 0, 0)]
    assert voxels.shape == (ChunkShape(8).volume,)
    assert result.surface_columns == 64


def test_generate_region():
    result = generate_region("demo", ChunkKey(0, 0, 0), ChunkKey(0, 0, 0), seed=7, base_height=12, height_amplitude=0.0)
    assert list(result.chunks) == [ChunkKey(0, 0, 0)]
    assert result.surface_columns == 1024


def test_biome_share():
    share = biome_share({BiomeType.DRY_LAND: 3, BiomeType.BLUE_LAND: 1})
    assert list(share) == list(BiomeType)
    assert share[BiomeType.DRY_LAND] == 0.75
    assert share[BiomeType.BASIC_LAND] == 0.0
    assert biome_share({}) == {biome: 0.0 for biome in BiomeType}


def test_terrain_above_chunk_seam_stays_buried():
    config = flat_config(max_chunk=ChunkKey(0, 1, 0), base_height=40)
    result = WorldGenerator(config).run()
    lower = result.chunks[ChunkKey(0, 0, 0)]
    upper = result.chunks[ChunkKey(0, 1, 0)]
    shape = config.shape

    assert np.all(lower == Voxel.STONE)
    assert upper[shape.linearize3d(0, 0, 0)] == Voxel.STONE
    assert result.surface_columns == shape.area
    surface = WorldGenerator(config).generate_chunk(ChunkKey(0, 1, 0)).surface_indices
    assert all(shape.delinearize3d(i)[1] == 8 for i in surface)


def test_buried_chunk_below_origin_has_no_surface():
    generator = WorldGenerator(flat_config(min_chunk=ChunkKey(0, -1, 0), max_chunk=ChunkKey(0, -1, 0)))
    chunk = generator.generate_chunk(ChunkKey(0, -1, 0))
    assert chunk.surface_indices == []
    assert np.all(chunk.voxels == Voxel.STONE)


def test_surface_on_top_row_of_chunk():
    config = flat_config(max_chunk=ChunkKey(0, 1, 0), base_height=31)
    generator = WorldGenerator(config)
    lower = generator.generate_chunk(ChunkKey(0, 0, 0))
    upper = generator.generate_chunk(ChunkKey(0, 1, 0))
    assert len(lower.surface_indices) == config.shape.area
    assert all(config.shape.delinearize3d(i)[1] == 31 for i in lower.surface_indices)
    assert upper.surface_indices == []


def test_surface_materials_count_painted_columns():
    result = WorldGenerator(flat_config()).run()
    assert sum(result.surface_materials.values()) == result.surface_columns
    assert Voxel.STONE not in result.surface_materials
    assert Voxel.EMPTY not in result.surface_materials


class ChunkFailure(Exception):
    pass


class FailingWorldGenerator(WorldGenerator):
    """Fails on the first chunk and records every chunk it starts."""

    def __init__(self, config):
        super().__init__(config)
        self.started = []
        self.first = next(iter(config.chunk_keys()))

    def generate_chunk(self, key):
        self.started.append(key)
        if key == self.first:
            raise ChunkFailure(str(key))
        time.sleep(0.2)
        return super().generate_chunk(key)


def test_unexpected_error_cancels_queued_chunks():
    config = flat_config(max_chunk=ChunkKey(3, 0, 1), parallel=True, parallel_workers=1)
    generator = FailingWorldGenerator(config)
    with pytest.raises(ChunkFailure):
        generator.run()
    assert len(generator.started) < config.chunk_count
