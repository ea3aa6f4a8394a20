"""Per-biome column painters.

Each biome variant is a stateless singleton implementing
``gen_land_with_info``. The shared entry point is the free function
``gen_land``, which derives the column's world height and local coordinates
once for every variant.

Generators only touch the column they are given and never leave the chunk:
layers below the surface stop at local y = 0, water above it stops at the
top of the chunk.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from ..world.chunk import ChunkKey
from ..world.constants import SEA_LEVEL, HIGH_ALTITUDE_LEVEL
from ..world.shape import ChunkShape, DEFAULT_SHAPE
from ..world.voxels import Voxel, is_set

# Sand band above sea level where water-side land turns into beach.
BEACH_HEIGHT = 3


class BiomeGenerator(ABC):
    """Capability every biome variant provides."""

    @abstractmethod
    def gen_land_with_info(
        self,
        chunk_key: ChunkKey,
        voxels: np.ndarray,
        chunk_index: int,
        plane_index: int,
        height: float,
        xyz: Tuple[int, int, int],
        shape: ChunkShape = DEFAULT_SHAPE,
    ) -> None:
        """Paint one surface column.

        Args:
            chunk_key: Chunk being generated
            voxels: Chunk buffer, mutated in place
            chunk_index: Buffer index of the column's surface voxel
            plane_index: Planar index of the column
            height: World-space Y of the surface voxel
            xyz: Local coordinates of the surface voxel
            shape: Chunk shape of ``voxels``
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def paint_layers(
    voxels: np.ndarray,
    xyz: Tuple[int, int, int],
    layers: Tuple[Voxel, ...],
    shape: ChunkShape = DEFAULT_SHAPE,
) -> int:
    """Overwrite solid cells directly below the surface with ``layers``.

    Painting stops at the first empty cell or at the chunk floor, so it never
    creates material where a previous pass left air.

    Returns:
        Number of cells written
    """
    x, y, z = xyz
    written = 0
    for depth, voxel in enumerate(layers, start=1):
        ly = y - depth
        if ly < 0:
            break
        index = shape.linearize3d(x, ly, z)
        if not is_set(voxels[index]):
            break
        voxels[index] = voxel
        written += 1
    return written


class BasicLandBiome(BiomeGenerator):
    """Grassland; only the surface voxel changes."""

    def gen_land_with_info(self, chunk_key, voxels, chunk_index, plane_index, height, xyz, shape=DEFAULT_SHAPE):
        if height >= HIGH_ALTITUDE_LEVEL:
            voxels[chunk_index] = Voxel.SNOW
        else:
            voxels[chunk_index] = Voxel.GRASS


class DryLandBiome(BiomeGenerator):
    """Dry dirt over a thin dirt layer, bare stone on high ground."""

    subsurface = (Voxel.DIRT, Voxel.DIRT)

    def gen_land_with_info(self, chunk_key, voxels, chunk_index, plane_index, height, xyz, shape=DEFAULT_SHAPE):
        if height >= HIGH_ALTITUDE_LEVEL:
            voxels[chunk_index] = Voxel.STONE
            return
        voxels[chunk_index] = Voxel.DRY_DIRT
        paint_layers(voxels, xyz, self.subsurface, shape)


class SnowLandBiome(BiomeGenerator):
    """Snow cover; frozen ground below sea level."""

    subsurface = (Voxel.DIRT,)

    def gen_land_with_info(self, chunk_key, voxels, chunk_index, plane_index, height, xyz, shape=DEFAULT_SHAPE):
        voxels[chunk_index] = Voxel.ICE if height < SEA_LEVEL else Voxel.SNOW
        paint_layers(voxels, xyz, self.subsurface, shape)


class SandLandBiome(BiomeGenerator):
    """Desert sand over sandstone."""

    subsurface = (Voxel.SAND, Voxel.SAND, Voxel.SAND, Voxel.SANDSTONE)

    def gen_land_with_info(self, chunk_key, voxels, chunk_index, plane_index, height, xyz, shape=DEFAULT_SHAPE):
        if height >= HIGH_ALTITUDE_LEVEL:
            voxels[chunk_index] = Voxel.SANDSTONE
            return
        voxels[chunk_index] = Voxel.SAND
        paint_layers(voxels, xyz, self.subsurface, shape)


class BlueLandBiome(BiomeGenerator):
    """Water-side land: flooded clay beds, beaches, then grass."""

    def gen_land_with_info(self, chunk_key, voxels, chunk_index, plane_index, height, xyz, shape=DEFAULT_SHAPE):
        if height < SEA_LEVEL:
            voxels[chunk_index] = Voxel.CLAY
            self._flood(voxels, xyz, height, shape)
        elif height < SEA_LEVEL + BEACH_HEIGHT:
            voxels[chunk_index] = Voxel.SAND
        else:
            voxels[chunk_index] = Voxel.GRASS
            paint_layers(voxels, xyz, (Voxel.DIRT,), shape)

    @staticmethod
    def _flood(voxels: np.ndarray, xyz: Tuple[int, int, int], height: float, shape: ChunkShape) -> None:
        """Fill empty cells above the surface with water, up to sea level."""
        x, y, z = xyz
        depth = int(SEA_LEVEL - height)
        for index in shape.column_indices(x, z)[y + 1:y + depth]:
            if is_set(voxels[index]):
                break
            voxels[index] = Voxel.WATER


def column_height(chunk_key: ChunkKey, local_y: int, shape: ChunkShape = DEFAULT_SHAPE) -> float:
    """World-space height of local row ``local_y`` in ``chunk_key``."""
    return float(chunk_key.y * shape.edge + local_y)


def gen_land(
    generator: BiomeGenerator,
    chunk_key: ChunkKey,
    voxels: np.ndarray,
    chunk_index: int,
    plane_index: int,
    shape: ChunkShape = DEFAULT_SHAPE,
) -> None:
    """Derive height and local coordinates, then let ``generator`` paint."""
    x, y, z = shape.delinearize3d(chunk_index)
    height = column_height(chunk_key, y, shape)
    generator.gen_land_with_info(
        chunk_key,
        voxels,
        chunk_index,
        plane_index,
        height,
        (x, y, z),
        shape,
    )
