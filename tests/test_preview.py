import numpy as np
from PIL import Image

from voxbiome.config import GenerationConfig
from voxbiome.preview import biome_map, render_biome_map
from voxbiome.terrain import biomes_noise, classify_plane
from voxbiome.world import ChunkKey


def test_biome_map_covers_region():
    config = GenerationConfig(name="map", min_chunk=ChunkKey(0, 0, 0), max_chunk=ChunkKey(1, 0, 0), seed=9)
    codes = biome_map(config)
    assert codes.shape == (32, 64)
    assert codes.max() <= 4

    right = classify_plane(biomes_noise(ChunkKey(1, 0, 0), 9)).reshape(32, 32)
    assert np.array_equal(codes[:, 32:], right)


def test_render_biome_map(tmp_path):
    config = GenerationConfig(name="map", min_chunk=ChunkKey(0, 0, 0), max_chunk=ChunkKey(0, 0, 1), seed=1)
    path = render_biome_map(config, tmp_path / "out" / "map.png")
    with Image.open(path) as image:
        assert image.size == (32, 64)
        assert image.mode == "RGB"
