import pytest
from PIL import Image

from voxelcraft.block import (
    Block,
    BlockFace,
    BlockType,
    Color,
    FacingDirection,
    Visibility,
    face_axes,
    lighting_color,
    make_block,
    modulate_color,
    visibility_from_type,
)
from voxelcraft.texture import DIRT, GRASS_SIDE, GRASS_TOP, STONE, TextureAtlas


def _cross(a, b):
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _sub(a, b):
    return tuple(x - y for x, y in zip(a, b))


@pytest.mark.parametrize(
    "kind, expected",
    [
        (BlockType.AIR, Visibility.EMPTY),
        (BlockType.STONE, Visibility.OPAQUE),
        (BlockType.DIRT, Visibility.OPAQUE),
        (BlockType.GRASS, Visibility.OPAQUE),
    ],
)
def test_visibility_from_type(kind, expected):
    assert visibility_from_type(kind) is expected


def test_unknown_block_type_raises():
    with pytest.raises(ValueError):
        visibility_from_type(99)
    with pytest.raises(ValueError):
        make_block(42)


def test_is_empty():
    assert Visibility.EMPTY.is_empty()
    assert not Visibility.OPAQUE.is_empty()
    assert not Visibility.TRANSPARENT.is_empty()


def test_air_has_no_faces():
    air = make_block(BlockType.AIR)
    assert air == Block(BlockType.AIR, Visibility.EMPTY, ())


def test_face_order():
    faces = make_block(BlockType.STONE).faces
    assert tuple(f.direction for f in faces) == (
        FacingDirection.UP,
        FacingDirection.DOWN,
        FacingDirection.FRONT,
        FacingDirection.BACK,
        FacingDirection.LEFT,
        FacingDirection.RIGHT,
    )
    assert {f.texture_name for f in faces} == {STONE}


def test_grass_textures():
    textures = {f.direction: f.texture_name for f in make_block(BlockType.GRASS).faces}
    assert textures == {
        FacingDirection.UP: GRASS_TOP,
        FacingDirection.DOWN: DIRT,
        FacingDirection.FRONT: GRASS_SIDE,
        FacingDirection.BACK: GRASS_SIDE,
        FacingDirection.LEFT: GRASS_SIDE,
        FacingDirection.RIGHT: GRASS_SIDE,
    }


def test_normals():
    assert FacingDirection.UP.normal() == (0, 1, 0)
    assert FacingDirection.BACK.normal() == (0, 0, -1)
    assert FacingDirection.LEFT.normal() == (-1, 0, 0)


@pytest.mark.parametrize("direction", list(FacingDirection))
def test_face_axes_form_right_handed_frame(direction):
    normal = direction.normal()
    u, v = face_axes(normal)
    assert _dot(u, normal) == 0
    assert _dot(v, normal) == 0
    assert _dot(u, v) == 0
    assert _cross(u, v) == normal


def test_face_axes_unknown_normal():
    with pytest.raises(ValueError):
        face_axes((1, 1, 0))


@pytest.mark.parametrize("direction", list(FacingDirection))
def test_vertex_coords_lie_on_face(direction):
    center = (3.0, 4.0, 5.0)
    normal = direction.normal()
    coords = BlockFace(direction, DIRT).vertex_coords(center)
    corners = [tuple(coords[k:k + 3]) for k in range(0, 12, 3)]
    for corner in corners:
        offset = _sub(corner, center)
        assert _dot(offset, normal) == 0.5
        assert all(abs(c) == 0.5 for c in offset)
    bl, br, tr, _ = corners
    assert _dot(_cross(_sub(br, bl), _sub(tr, bl)), normal) > 0


def test_vertex_normals_repeat_normal():
    face = BlockFace(FacingDirection.FRONT, DIRT)
    assert face.vertex_normals() == list(FacingDirection.FRONT.normal()) * 4


def test_modulate_color_clamps():
    color = Color(100, 150, 200, 255)
    assert modulate_color(color, 2.0) == color
    assert modulate_color(color, -1.0) == Color(0, 0, 0, 255)
    assert modulate_color(Color(10, 20, 30, 7), 0.5).a == 7


def test_lighting_colors():
    assert lighting_color(FacingDirection.UP) == Color(255, 255, 255, 255)
    assert lighting_color(FacingDirection.DOWN) == Color(100, 100, 100, 255)
    assert lighting_color(FacingDirection.FRONT) == lighting_color(FacingDirection.BACK)
    assert lighting_color(FacingDirection.LEFT) == lighting_color(FacingDirection.RIGHT)


@pytest.mark.parametrize("direction", list(FacingDirection))
def test_vertex_colors_bounded_by_base(direction):
    colors = BlockFace(direction, DIRT).vertex_colors()
    base = lighting_color(direction)
    assert len(colors) == 16
    for k in range(0, 16, 4):
        assert colors[k + 3] == 255
        assert all(0 <= c <= b for c, b in zip(colors[k:k + 3], base[:3]))


def test_top_face_brightest_corner_is_full():
    colors = BlockFace(FacingDirection.UP, DIRT).vertex_colors()
    assert colors[8:12] == [255, 255, 255, 255]


def test_texture_coords_span_tile():
    atlas = TextureAtlas()
    atlas.add(STONE, Image.new("RGBA", (16, 16), (1, 1, 1, 255)))
    atlas.add(DIRT, Image.new("RGBA", (16, 16), (2, 2, 2, 255)))
    uv = atlas.uv(DIRT)
    coords = BlockFace(FacingDirection.UP, DIRT).texture_coords(atlas)
    assert coords[0:2] == [uv.x, uv.y + uv.height]
    assert set(coords[0::2]) == {uv.x, uv.x + uv.width}
    assert set(coords[1::2]) == {uv.y, uv.y + uv.height}


def test_texture_coords_missing_texture_are_zero():
    coords = BlockFace(FacingDirection.UP, GRASS_TOP).texture_coords(TextureAtlas())
    assert coords == [0.0] * 8