"""Block types, their faces and the per-vertex data of a face."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import NamedTuple

from voxelcraft.texture import DIRT, GRASS_SIDE, GRASS_TOP, STONE


class BlockType(IntEnum):
    AIR = 0
    STONE = 1
    DIRT = 2
    GRASS = 3


class Visibility(IntEnum):
    EMPTY = 0
    TRANSPARENT = 1
    OPAQUE = 2

    def is_empty(self):
        return self is Visibility.EMPTY


class FacingDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FRONT = "front"
    BACK = "back"
    RIGHT = "right"
    LEFT = "left"

    def normal(self):
        """Unit vector pointing out of a face with this direction."""
        return _NORMALS[self]


_NORMALS = {
    FacingDirection.UP: (0.0, 1.0, 0.0),
    FacingDirection.DOWN: (0.0, -1.0, 0.0),
    FacingDirection.FRONT: (0.0, 0.0, 1.0),
    FacingDirection.BACK: (0.0, 0.0, -1.0),
    FacingDirection.RIGHT: (1.0, 0.0, 0.0),
    FacingDirection.LEFT: (-1.0, 0.0, 0.0),
}

_AXES = {
    (1.0, 0.0, 0.0): ((0.0, 0.0, -1.0), (0.0, 1.0, 0.0)),
    (-1.0, 0.0, 0.0): ((0.0, 0.0, 1.0), (0.0, 1.0, 0.0)),
    (0.0, 1.0, 0.0): ((1.0, 0.0, 0.0), (0.0, 0.0, -1.0)),
    (0.0, -1.0, 0.0): ((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)),
    (0.0, 0.0, 1.0): ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    (0.0, 0.0, -1.0): ((-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
}


def face_axes(normal):
    """The in-plane (u, v) axes of the face with the given normal."""
    try:
        return _AXES[tuple(float(c) for c in normal)]
    except (KeyError, TypeError, ValueError):
        raise ValueError(f"unknown normal vector: {normal}") from None


class Color(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 255


_F32 = struct.Struct("f")


def _f32(value):
    return _F32.unpack(_F32.pack(value))[0]


def modulate_color(color, factor):
    """Scale the RGB channels of ``color`` by ``factor`` clamped to [0, 1]."""
    factor = _f32(min(max(factor, 0.0), 1.0))
    r, g, b = (int(_f32(channel * factor)) for channel in color[:3])
    return Color(r, g, b, color.a)


_LIGHTING = {
    FacingDirection.UP: Color(255, 255, 255, 255),
    FacingDirection.DOWN: Color(100, 100, 100, 255),
    FacingDirection.FRONT: Color(200, 200, 200, 255),
    FacingDirection.BACK: Color(200, 200, 200, 255),
    FacingDirection.LEFT: Color(150, 150, 150, 255),
    FacingDirection.RIGHT: Color(150, 150, 150, 255),
}


def lighting_color(direction):
    """Base light level of a face pointing in ``direction``."""
    return _LIGHTING.get(direction, Color(255, 255, 255, 255))


# Brightness of each corner: bottom-left, bottom-right, top-right, top-left.
_GRADIENTS = {
    FacingDirection.UP: (0.9, 0.95, 1.0, 0.85),
    FacingDirection.DOWN: (1.0, 0.9, 0.8, 0.95),
    FacingDirection.FRONT: (0.8, 0.85, 1.0, 0.95),
    FacingDirection.BACK: (0.8, 0.85, 1.0, 0.95),
    FacingDirection.LEFT: (0.75, 0.8, 0.95, 0.9),
    FacingDirection.RIGHT: (0.75, 0.8, 0.95, 0.9),
}

_CORNERS = ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0))


@dataclass(frozen=True)
class BlockFace:
    direction: FacingDirection
    texture_name: str

    def vertex_coords(self, block_center):
        """Corner positions, counter-clockwise from bottom-left, flattened."""
        normal = self.direction.normal()
        face_center = tuple(c + 0.5 * n for c, n in zip(block_center, normal))
        u, v = face_axes(normal)
        half_u = tuple(0.5 * c for c in u)
        half_v = tuple(0.5 * c for c in v)
        return [
            f + su * hu + sv * hv
            for su, sv in _CORNERS
            for f, hu, hv in zip(face_center, half_u, half_v)
        ]

    def vertex_normals(self):
        return list(self.direction.normal()) * 4

    def texture_coords(self, atlas):
        """Texture coordinates of the four corners within ``atlas``."""
        uv = atlas.uv(self.texture_name)
        return [
            uv.x, uv.y + uv.height,
            uv.x + uv.width, uv.y + uv.height,
            uv.x + uv.width, uv.y,
            uv.x, uv.y,
        ]

    def vertex_colors(self):
        """RGBA colours of the four corners, flattened."""
        base = lighting_color(self.direction)
        factors = _GRADIENTS.get(self.direction, (1.0, 1.0, 1.0, 1.0))
        return [channel for factor in factors for channel in modulate_color(base, factor)]


@dataclass(frozen=True)
class Block:
    kind: BlockType
    visibility: Visibility
    faces: tuple = ()


_FACE_ORDER = (
    FacingDirection.UP,
    FacingDirection.DOWN,
    FacingDirection.FRONT,
    FacingDirection.BACK,
    FacingDirection.LEFT,
    FacingDirection.RIGHT,
)

_FACE_TEXTURES = {
    BlockType.AIR: (),
    BlockType.STONE: (STONE,) * 6,
    BlockType.DIRT: (DIRT,) * 6,
    BlockType.GRASS: (GRASS_TOP, DIRT, GRASS_SIDE, GRASS_SIDE, GRASS_SIDE, GRASS_SIDE),
}


def _block_type(block_type):
    try:
        return BlockType(block_type)
    except ValueError:
        raise ValueError(f"unknown block type: {block_type}") from None


def visibility_from_type(block_type):
    if _block_type(block_type) is BlockType.AIR:
        return Visibility.EMPTY
    return Visibility.OPAQUE


@lru_cache(maxsize=None)
def _make(block_type):
    faces = tuple(
        BlockFace(direction, name)
        for direction, name in zip(_FACE_ORDER, _FACE_TEXTURES[block_type])
    )
    return Block(block_type, visibility_from_type(block_type), faces)


def make_block(block_type):
    """The block of the given type, with its faces."""
    return _make(_block_type(block_type))