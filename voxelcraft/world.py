"""The set of chunk columns loaded around the player."""

from __future__ import annotations

import re

from voxelcraft.chunk import CHUNK_SIZE, ChunkColumn

RENDER_DISTANCE = 4

_KEY = re.compile(r"\s*([+-]?\d+)_([+-]?\d+)")


def _trunc_div(a, b):
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def pos_to_key(x, z):
    return f"{x}_{z}"


def key_to_pos(key):
    match = _KEY.match(key)
    if match is None:
        raise ValueError(f"Invalid key format: {key}")
    return int(match.group(1)), int(match.group(2))


class World:
    """Chunk columns keyed by their chunk coordinates."""

    def __init__(self, atlas):
        self.atlas = atlas
        self.columns: dict[str, ChunkColumn] = {}
        self.render_distance = RENDER_DISTANCE

    def update(self, position):
        """Load the columns around ``position`` and rebuild changed meshes."""
        x, _, z = position
        self.load_around(int(x), int(z))
        for column in self.columns.values():
            column.update()

    def load_around(self, px, pz):
        """Generate columns within render distance of block (px, pz); drop the rest."""
        chunk_x = _trunc_div(px, CHUNK_SIZE)
        chunk_z = _trunc_div(pz, CHUNK_SIZE)
        distance = self.render_distance

        keep = set()
        for x in range(chunk_x - distance, chunk_x + distance + 1):
            for z in range(chunk_z - distance, chunk_z + distance + 1):
                key = pos_to_key(x, z)
                keep.add(key)
                if key not in self.columns:
                    column = ChunkColumn(x, z, self.atlas)
                    column.generate()
                    self.columns[key] = column

        for key in [k for k in self.columns if k not in keep]:
            self.columns.pop(key).unload()