import pytest

from voxelcraft.texture import TextureAtlas
from voxelcraft.world import RENDER_DISTANCE, World, key_to_pos, pos_to_key


def _small_world():
    world = World(TextureAtlas())
    world.render_distance = 0
    return world


@pytest.mark.parametrize("pos", [(0, 0), (-3, 7), (12, -4), (-100, -250)])
def test_key_round_trip(pos):
    assert key_to_pos(pos_to_key(*pos)) == pos


def test_key_format():
    assert pos_to_key(-3, 7) == "-3_7"


@pytest.mark.parametrize("key", ["", "x_y", "3-4", "_5"])
def test_invalid_key_raises(key):
    with pytest.raises(ValueError):
        key_to_pos(key)


def test_default_render_distance():
    assert World(TextureAtlas()).render_distance == RENDER_DISTANCE


def test_load_around_and_truncation_toward_zero():
    world = _small_world()
    world.load_around(0, 0)
    assert set(world.columns) == {pos_to_key(0, 0)}
    column = world.columns[pos_to_key(0, 0)]
    world.load_around(-15, 15)
    assert set(world.columns) == {pos_to_key(0, 0)}
    assert world.columns[pos_to_key(0, 0)] is column


def test_moving_away_unloads_old_column():
    world = _small_world()
    world.load_around(0, 0)
    old = world.columns[pos_to_key(0, 0)]
    world.load_around(16, -17)
    assert set(world.columns) == {pos_to_key(1, -1)}
    assert all(chunk.mesh is None for chunk in old.chunks)


def test_update_builds_meshes():
    world = _small_world()
    world.update((-0.9, 80.0, 15.9))
    assert set(world.columns) == {pos_to_key(0, 0)}
    chunks = world.columns[pos_to_key(0, 0)].chunks
    assert not any(chunk.dirty for chunk in chunks)
    assert chunks[0].mesh.vertex_count > 0