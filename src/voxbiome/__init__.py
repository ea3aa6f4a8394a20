"""VoxBiome: chunk-addressed biome generation for voxel worlds."""

__version__ = "0.1.0"
