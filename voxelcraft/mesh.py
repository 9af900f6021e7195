"""Accumulates block faces into flat vertex arrays for one mesh."""

from __future__ import annotations

from dataclasses import dataclass

_INDEX_MASK = 0xFFFF


@dataclass(frozen=True)
class Mesh:
    vertex_count: int
    triangle_count: int
    vertices: tuple
    normals: tuple
    texcoords: tuple
    colors: tuple
    indices: tuple


class MeshBuilder:
    """Collects quads, two triangles each, with 16-bit indices."""

    def __init__(self, atlas):
        self.atlas = atlas
        self.clear()

    @property
    def vertex_count(self):
        return self._vertex_count

    def add_faces(self, faces, center):
        for face in faces:
            self.add_face(face, center)

    def add_face(self, face, center):
        self._vertices.extend(face.vertex_coords(center))
        self._normals.extend(face.vertex_normals())
        self._texcoords.extend(face.texture_coords(self.atlas))
        self._colors.extend(face.vertex_colors())

        base = self._vertex_count
        self._indices.extend(
            (base + offset) & _INDEX_MASK for offset in (0, 1, 2, 0, 2, 3)
        )
        self._vertex_count += 4

    def build(self):
        """A snapshot of everything added so far."""
        return Mesh(
            vertex_count=self._vertex_count,
            triangle_count=len(self._indices) // 3,
            vertices=tuple(self._vertices),
            normals=tuple(self._normals),
            texcoords=tuple(self._texcoords),
            colors=tuple(self._colors),
            indices=tuple(self._indices),
        )

    def clear(self):
        self._vertices: list[float] = []
        self._normals: list[float] = []
        self._texcoords: list[float] = []
        self._colors: list[int] = []
        self._indices: list[int] = []
        self._vertex_count = 0