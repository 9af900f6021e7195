"""Cubic chunks of blocks and the vertical columns they are stacked in."""

from __future__ import annotations

from voxelcraft.block import BlockType, make_block
from voxelcraft.mesh import MeshBuilder
from voxelcraft.noise import noise2d

CHUNK_SIZE = 16
BLOCK_COUNT = CHUNK_SIZE * CHUNK_SIZE * CHUNK_SIZE
CHUNK_COLUMN_HEIGHT = 16
HEIGHT_OFFSET = 50
STONE_LEVEL = 20

_AIR = make_block(BlockType.AIR)


def _in_bounds(x, y, z):
    return all(0 <= c < CHUNK_SIZE for c in (x, y, z))


def _linearize(x, y, z):
    if not _in_bounds(x, y, z):
        raise IndexError(f"Coordinates out of bounds: ({x}, {y}, {z})")
    return x + y * CHUNK_SIZE + z * CHUNK_SIZE * CHUNK_SIZE


class Chunk:
    """A cube of ``CHUNK_SIZE`` blocks per side and the mesh of its visible faces."""

    def __init__(self, position, atlas):
        self.position = tuple(float(c) for c in position)
        self.atlas = atlas
        self._blocks = [_AIR] * BLOCK_COUNT
        self.dirty = False
        self.mesh = None
        self._rebuild_mesh()

    @property
    def origin(self):
        """World coordinates of the chunk's local origin."""
        return tuple(c * CHUNK_SIZE for c in self.position)

    @property
    def blocks(self):
        return tuple(self._blocks)

    def set_block(self, x, y, z, block):
        self._blocks[_linearize(x, y, z)] = block
        self.dirty = True

    def block_at(self, x, y, z):
        return self._blocks[_linearize(x, y, z)]

    def update(self):
        """Rebuild the mesh if any block changed since the last build."""
        if self.dirty:
            self._rebuild_mesh()

    def unload(self):
        """Drop the mesh and reset every block to air."""
        self.mesh = None
        self._blocks = [_AIR] * BLOCK_COUNT
        self.dirty = False

    def delinearize(self, index):
        """Local (x, y, z) of the block stored at ``index``."""
        x = index % CHUNK_SIZE
        y = (index // CHUNK_SIZE) % CHUNK_SIZE
        z = index // (CHUNK_SIZE * CHUNK_SIZE)
        return x, y, z

    def _neighbor(self, x, y, z, face):
        nx, ny, nz = (int(c + n) for c, n in zip((x, y, z), face.direction.normal()))
        if not _in_bounds(nx, ny, nz):
            return None
        return self._blocks[_linearize(nx, ny, nz)]

    def _rebuild_mesh(self):
        builder = MeshBuilder(self.atlas)
        for index, block in enumerate(self._blocks):
            if block.visibility.is_empty():
                continue
            x, y, z = self.delinearize(index)
            center = (float(x), float(y), float(z))
            for face in block.faces:
                neighbor = self._neighbor(x, y, z, face)
                if neighbor is None or neighbor.visibility.is_empty():
                    builder.add_face(face, center)
        self.mesh = builder.build()
        self.dirty = False


def _max_height(x, z):
    return int(noise2d(x, z) + HEIGHT_OFFSET)


def _type_for_height(y, max_height):
    if y < STONE_LEVEL:
        return BlockType.STONE
    if y < max_height - 1:
        return BlockType.DIRT
    if y == max_height - 1:
        return BlockType.GRASS
    return BlockType.AIR


class ChunkColumn:
    """A vertical stack of chunks at chunk coordinates (x, z)."""

    def __init__(self, x, z, atlas):
        self.x = x
        self.z = z
        self.chunks = [
            Chunk((float(x), float(i), float(z)), atlas)
            for i in range(CHUNK_COLUMN_HEIGHT)
        ]

    def generate(self):
        """Fill every chunk with terrain from the height noise."""
        heights = {}
        for i, chunk in enumerate(self.chunks):
            for index in range(BLOCK_COUNT):
                cx, cy, cz = chunk.delinearize(index)
                gx, gy, gz = self.local_to_global(cx, cy, cz, i)
                height = heights.get((gx, gz))
                if height is None:
                    height = heights[(gx, gz)] = _max_height(gx, gz)
                chunk.set_block(cx, cy, cz, make_block(_type_for_height(gy, height)))

    def update(self):
        for chunk in self.chunks:
            chunk.update()

    def unload(self):
        for chunk in self.chunks:
            chunk.unload()

    def block_for_position(self, x, y, z):
        """The terrain block at global block coordinates (x, y, z)."""
        return make_block(_type_for_height(y, _max_height(x, z)))

    def local_to_global(self, x, y, z, i):
        """Global coordinates of local (x, y, z) in the ``i``-th chunk."""
        return (
            self.x * CHUNK_SIZE + x,
            i * CHUNK_SIZE + y,
            self.z * CHUNK_SIZE + z,
        )