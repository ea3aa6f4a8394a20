"""World-wide constants shared by every chunk generation call."""

# Chunk dimensions
CHUNK_SIZE = 32  # 32x32x32 voxels per chunk
CHUNK_AREA = 1024  # 32*32 columns per chunk
CHUNK_VOLUME = 32768  # 32*32*32

# Height bands (world-space Y, relative to a -60 baseline)
SEA_LEVEL = -60 + 76
HIGH_ALTITUDE_LEVEL = -60 + 100
# Mountain line and snow line coincide; both follow the high-altitude band.
MOUNTAIN_LEVEL = HIGH_ALTITUDE_LEVEL
SNOW_LEVEL = HIGH_ALTITUDE_LEVEL

# Biome noise
BIOME_NOISE_FREQUENCY = 0.008  # biome regions span many chunks

# Surface pass defaults
DEFAULT_BASE_HEIGHT = SEA_LEVEL + 4
DEFAULT_HEIGHT_AMPLITUDE = 28.0
DEFAULT_HEIGHT_FREQUENCY = 0.006
DEFAULT_HEIGHT_OCTAVES = 4
