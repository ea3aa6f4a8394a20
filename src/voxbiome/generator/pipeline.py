"""Region generation pipeline: surface pass, biome pass, statistics."""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
import logging
import os
import time

import numpy as np

from ..config import GenerationConfig
from ..terrain import (
    BiomeType,
    HeightField,
    biome_from_code,
    biomes_generate,
    biomes_noise,
    classify_plane,
    fill_terrain,
    find_surface_indices,
    open_above_chunk,
)
from ..world.chunk import ChunkKey, new_voxel_buffer
from ..world.shape import ChunkShape

logger = logging.getLogger(__name__)


class ChunkGenerationError(RuntimeError):
    """A chunk could not be generated; its buffer has been discarded."""

    def __init__(self, chunk_key: ChunkKey, message: str):
        super().__init__(f"Chunk {chunk_key}: {message}")
        self.chunk_key = chunk_key


@dataclass
class GenerationProgress:
    """Progress information for generation."""
    phase: str
    current: int
    total: int
    message: str = ""

    @property
    def percent(self) -> float:
        if self.total == 0:
            return 0.0
        return 100.0 * self.current / self.total


ProgressCallback = Callable[[GenerationProgress], None]


@dataclass
class ChunkResult:
    """Output of one successful chunk generation call."""
    key: ChunkKey
    voxels: np.ndarray
    surface_indices: List[int]
    biome_counts: Counter
    surface_materials: Counter


@dataclass
class GenerationResult:
    """All chunks of a generated region."""
    chunks: Dict[ChunkKey, np.ndarray] = field(default_factory=dict)
    biome_counts: Counter = field(default_factory=Counter)
    surface_materials: Counter = field(default_factory=Counter)
    surface_columns: int = 0

    def add(self, chunk: ChunkResult) -> None:
        self.chunks[chunk.key] = chunk.voxels
        self.biome_counts.update(chunk.biome_counts)
        self.surface_materials.update(chunk.surface_materials)
        self.surface_columns += len(chunk.surface_indices)


class WorldGenerator:
    """Generates every chunk of a configured region."""

    def __init__(self, config: GenerationConfig):
        """Initialize the generator.

        Args:
            config: Generation configuration
        """
        self.config = config
        config.validate()
        self.shape: ChunkShape = config.shape
        self._height_field = HeightField(
            seed=config.seed,
            base_height=config.base_height,
            amplitude=config.height_amplitude,
            frequency=config.height_frequency,
            octaves=config.height_octaves,
        )

    def sample_attributes(self, key: ChunkKey) -> np.ndarray:
        """Biome attribute field of a chunk, using the configured noise."""
        return biomes_noise(
            key,
            self.config.seed,
            self.shape,
            frequency=self.config.noise_frequency,
            distance_function=self.config.distance_function,
            return_type=self.config.return_type,
        )

    def generate_chunk(self, key: ChunkKey) -> ChunkResult:
        """Generate a single chunk into a freshly allocated buffer.

        Args:
            key: Chunk key

        Returns:
            ChunkResult owning the new buffer
        """
        voxels = new_voxel_buffer(self.shape)
        heights = self._height_field.chunk_heights(key, self.shape)
        fill_terrain(key, voxels, heights, self.shape)
        surface = find_surface_indices(voxels, self.shape, open_above_chunk(key, heights, self.shape))

        counts: Counter = Counter()
        materials: Counter = Counter()
        if surface:
            attrs = self.sample_attributes(key)
            xs, _, zs = self.shape.delinearize3d_array(surface)
            codes = classify_plane(attrs)[xs + self.shape.edge * zs]
            for code, n in zip(*np.unique(codes, return_counts=True)):
                counts[biome_from_code(code)] = int(n)
            biomes_generate(key, self.config.seed, surface, voxels, self.shape, sampler=lambda *_: attrs)
            materials.update(voxels[surface].tolist())

        return ChunkResult(
            key=key,
            voxels=voxels,
            surface_indices=surface,
            biome_counts=counts,
            surface_materials=materials,
        )

    def _generate_checked(self, key: ChunkKey) -> ChunkResult:
        try:
            return self.generate_chunk(key)
        except (IndexError, ValueError) as exc:
            logger.error("Generation of chunk %s failed: %s", key, exc)
            raise ChunkGenerationError(key, str(exc)) from exc

    def run(self, progress_callback: Optional[ProgressCallback] = None) -> GenerationResult:
        """Generate the whole region.

        Args:
            progress_callback: Optional callback for progress updates

        Returns:
            GenerationResult with one buffer per chunk

        Raises:
            ChunkGenerationError: If a chunk violates the generation contract
            Exception: Any other error from a chunk, unchanged; queued chunks
                are cancelled and nothing is returned
        """
        def report_progress(phase: str, current: int, total: int, message: str = ""):
            if progress_callback:
                progress_callback(GenerationProgress(phase, current, total, message))

        keys = list(self.config.chunk_keys())
        total = len(keys)
        result = GenerationResult()
        start = time.perf_counter()
        logger.info(
            "Generating %d chunks for world '%s' (seed %d, edge %d)",
            total, self.config.name, self.config.seed, self.shape.edge,
        )
        report_progress("generate", 0, total, "Generating chunks...")

        if self.config.parallel:
            workers = self.config.parallel_workers or os.cpu_count() or 1
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {executor.submit(self._generate_checked, key): key for key in keys}
                try:
                    for done, future in enumerate(as_completed(futures), start=1):
                        chunk = future.result()
                        result.add(chunk)
                        report_progress("generate", done, total, f"Chunk {chunk.key} done")
                except Exception:
                    # Queued chunks must not start once the run has failed.
                    for future in futures:
                        future.cancel()
                    raise
        else:
            for done, key in enumerate(keys, start=1):
                chunk_start = time.perf_counter()
                chunk = self._generate_checked(key)
                result.add(chunk)
                elapsed = time.perf_counter() - chunk_start
                report_progress("generate", done, total, f"Chunk {key} done in {elapsed:.2f}s")

        logger.info(
            "Generated %d chunks (%d surface columns) in %.2fs",
            len(result.chunks), result.surface_columns, time.perf_counter() - start,
        )
        return result


def generate_region(
    name: str,
    min_chunk: ChunkKey,
    max_chunk: ChunkKey,
    seed: int = 0,
    progress_callback: Optional[ProgressCallback] = None,
    **kwargs
) -> GenerationResult:
    """Convenience function to generate a chunk region.

    Args:
        name: World name
        min_chunk: Lowest chunk corner (inclusive)
        max_chunk: Highest chunk corner (inclusive)
        seed: World seed
        progress_callback: Optional progress callback
        **kwargs: Additional GenerationConfig options

    Returns:
        GenerationResult
    """
    config = GenerationConfig(
        name=name,
        min_chunk=min_chunk,
        max_chunk=max_chunk,
        seed=seed,
        **kwargs
    )
    return WorldGenerator(config).run(progress_callback)


def biome_share(counts: Counter) -> Dict[BiomeType, float]:
    """Fraction of surface columns per biome, in band order."""
    total = sum(counts.values())
    return {
        biome: (counts.get(biome, 0) / total if total else 0.0)
        for biome in BiomeType
    }
