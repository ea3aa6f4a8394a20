"""Configuration classes for VoxBiome world generation."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, Iterator, List
import json

from .world.chunk import ChunkKey
from .world.constants import (
    CHUNK_SIZE,
    BIOME_NOISE_FREQUENCY,
    DEFAULT_BASE_HEIGHT,
    DEFAULT_HEIGHT_AMPLITUDE,
    DEFAULT_HEIGHT_FREQUENCY,
    DEFAULT_HEIGHT_OCTAVES,
)
from .world.shape import ChunkShape
from .terrain.noise import DistanceFunction, ReturnType


@dataclass
class GenerationConfig:
    """Configuration for generating a region of chunks."""
    # World name
    name: str

    # Region corners in chunk-space (inclusive)
    min_chunk: ChunkKey = field(default_factory=lambda: ChunkKey(0, 0, 0))
    max_chunk: ChunkKey = field(default_factory=lambda: ChunkKey(0, 0, 0))

    # World seed, shared read-only by every chunk
    seed: int = 0

    # Chunk edge length in voxels
    chunk_size: int = CHUNK_SIZE

    # Biome noise
    noise_frequency: float = BIOME_NOISE_FREQUENCY
    distance_function: str = DistanceFunction.EUCLIDEAN.value
    return_type: str = ReturnType.VALUE.value

    # Surface pass
    base_height: int = DEFAULT_BASE_HEIGHT
    height_amplitude: float = DEFAULT_HEIGHT_AMPLITUDE
    height_frequency: float = DEFAULT_HEIGHT_FREQUENCY
    height_octaves: int = DEFAULT_HEIGHT_OCTAVES

    # Processing options
    parallel: bool = False
    parallel_workers: Optional[int] = None

    def validate(self) -> None:
        """Validate the configuration."""
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")
        if self.noise_frequency <= 0:
            raise ValueError(f"noise_frequency must be positive: {self.noise_frequency}")
        if self.height_frequency <= 0:
            raise ValueError(f"height_frequency must be positive: {self.height_frequency}")
        if self.height_octaves <= 0:
            raise ValueError(f"height_octaves must be positive: {self.height_octaves}")
        if self.parallel_workers is not None and self.parallel_workers <= 0:
            raise ValueError(f"parallel_workers must be positive: {self.parallel_workers}")
        for axis in ("x", "y", "z"):
            lo = getattr(self.min_chunk, axis)
            hi = getattr(self.max_chunk, axis)
            if lo > hi:
                raise ValueError(f"min_chunk.{axis} ({lo}) must not exceed max_chunk.{axis} ({hi})")
        try:
            DistanceFunction(self.distance_function)
        except ValueError:
            raise ValueError(f"Unknown distance function: {self.distance_function}") from None
        try:
            ReturnType(self.return_type)
        except ValueError:
            raise ValueError(f"Unknown return type: {self.return_type}") from None

    @property
    def shape(self) -> ChunkShape:
        """Chunk shape for this world."""
        return ChunkShape(self.chunk_size)

    @property
    def chunk_count(self) -> int:
        """Number of chunks in the region."""
        return (
            (self.max_chunk.x - self.min_chunk.x + 1)
            * (self.max_chunk.y - self.min_chunk.y + 1)
            * (self.max_chunk.z - self.min_chunk.z + 1)
        )

    def chunk_keys(self) -> Iterator[ChunkKey]:
        """Iterate the region's chunk keys, z-major, then y, then x."""
        for z in range(self.min_chunk.z, self.max_chunk.z + 1):
            for y in range(self.min_chunk.y, self.max_chunk.y + 1):
                for x in range(self.min_chunk.x, self.max_chunk.x + 1):
                    yield ChunkKey(x, y, z)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "min_chunk": list(self.min_chunk.to_tuple()),
            "max_chunk": list(self.max_chunk.to_tuple()),
            "seed": self.seed,
            "chunk_size": self.chunk_size,
            "noise_frequency": self.noise_frequency,
            "distance_function": self.distance_function,
            "return_type": self.return_type,
            "base_height": self.base_height,
            "height_amplitude": self.height_amplitude,
            "height_frequency": self.height_frequency,
            "height_octaves": self.height_octaves,
            "parallel": self.parallel,
            "parallel_workers": self.parallel_workers,
        }

    def save(self, filepath: Path) -> None:
        """Save configuration to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path) -> "GenerationConfig":
        """Load configuration from JSON file."""
        with open(filepath) as f:
            data = json.load(f)

        return cls(
            name=data["name"],
            min_chunk=ChunkKey(*data.get("min_chunk", (0, 0, 0))),
            max_chunk=ChunkKey(*data.get("max_chunk", (0, 0, 0))),
            seed=data.get("seed", 0),
            chunk_size=data.get("chunk_size", CHUNK_SIZE),
            noise_frequency=data.get("noise_frequency", BIOME_NOISE_FREQUENCY),
            distance_function=data.get("distance_function", DistanceFunction.EUCLIDEAN.value),
            return_type=data.get("return_type", ReturnType.VALUE.value),
            base_height=data.get("base_height", DEFAULT_BASE_HEIGHT),
            height_amplitude=data.get("height_amplitude", DEFAULT_HEIGHT_AMPLITUDE),
            height_frequency=data.get("height_frequency", DEFAULT_HEIGHT_FREQUENCY),
            height_octaves=data.get("height_octaves", DEFAULT_HEIGHT_OCTAVES),
            parallel=data.get("parallel", False),
            parallel_workers=data.get("parallel_workers"),
        )


@dataclass(frozen=True)
class RegionPreset:
    """A named chunk region."""
    min_chunk: ChunkKey
    max_chunk: ChunkKey
    description: str = ""


# Preset regions for quick runs
PRESET_REGIONS = {
    "single": RegionPreset(ChunkKey(0, 0, 0), ChunkKey(0, 0, 0), "One chunk at the origin"),
    "origin_3x3": RegionPreset(ChunkKey(-1, 0, -1), ChunkKey(1, 1, 1), "3x3 columns, two chunks tall"),
    "valley": RegionPreset(ChunkKey(-4, 0, -4), ChunkKey(3, 1, 3), "8x8 columns around the origin"),
    "continent": RegionPreset(ChunkKey(-16, 0, -16), ChunkKey(15, 1, 15), "32x32 columns, several biome regions"),
}


def get_preset(name: str) -> Optional[RegionPreset]:
    """Get a preset region by name."""
    return PRESET_REGIONS.get(name.lower().replace("-", "_").replace(" ", "_"))


def list_presets() -> List[str]:
    """Get list of available preset names."""
    return list(PRESET_REGIONS.keys())
