from voxelcraft.block import BlockFace, BlockType, FacingDirection, make_block
from voxelcraft.mesh import MeshBuilder
from voxelcraft.texture import DIRT, TextureAtlas

CENTER = (1.0, 2.0, 3.0)


def _face():
    return BlockFace(FacingDirection.UP, DIRT)


def test_single_face():
    builder = MeshBuilder(TextureAtlas())
    face = _face()
    builder.add_face(face, CENTER)
    mesh = builder.build()
    assert mesh.vertex_count == 4
    assert mesh.triangle_count == 2
    assert mesh.indices == (0, 1, 2, 0, 2, 3)
    assert mesh.vertices == tuple(face.vertex_coords(CENTER))
    assert mesh.normals == tuple(face.vertex_normals())
    assert mesh.colors == tuple(face.vertex_colors())
    assert len(mesh.texcoords) == 8


def test_second_face_offsets_indices():
    builder = MeshBuilder(TextureAtlas())
    builder.add_face(_face(), CENTER)
    builder.add_face(_face(), CENTER)
    mesh = builder.build()
    assert mesh.indices[6:] == (4, 5, 6, 4, 6, 7)
    assert mesh.vertex_count == 8


def test_add_faces_matches_add_face():
    faces = make_block(BlockType.GRASS).faces
    atlas = TextureAtlas()
    together = MeshBuilder(atlas)
    together.add_faces(faces, CENTER)
    one_by_one = MeshBuilder(atlas)
    for face in faces:
        one_by_one.add_face(face, CENTER)
    assert together.build() == one_by_one.build()
    assert together.build().triangle_count == 2 * len(faces)


def test_clear_resets():
    builder = MeshBuilder(TextureAtlas())
    builder.add_face(_face(), CENTER)
    builder.clear()
    mesh = builder.build()
    assert mesh.vertex_count == 0
    assert mesh.indices == ()
    assert mesh.vertices == ()


def test_build_is_snapshot():
    builder = MeshBuilder(TextureAtlas())
    builder.add_face(_face(), CENTER)
    first = builder.build()
    builder.add_face(_face(), CENTER)
    assert len(first.vertices) * 2 == len(builder.build().vertices)
    assert first.vertex_count == 4


def test_indices_wrap_at_sixteen_bits():
    builder = MeshBuilder(TextureAtlas())
    face = _face()
    for _ in range(0x10000 // 4):
        builder.add_face(face, CENTER)
    builder.add_face(face, CENTER)
    mesh = builder.build()
    assert mesh.indices[-6:] == (0, 1, 2, 0, 2, 3)
    assert max(mesh.indices) == 0xFFFF