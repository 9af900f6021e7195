"""The game loop: window, input, world updates and drawing."""

from __future__ import annotations

import argparse
import itertools
from collections import deque

from voxelcraft.player import Player
from voxelcraft.texture import TextureManager, build_atlas
from voxelcraft.ui import fps_text, position_text
from voxelcraft.world import World

SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 675
TITLE = "MC Clone"
TARGET_FPS = 60
BACKGROUND = (245 / 255, 245 / 255, 245 / 255, 1.0)
TEXT_COLOR = (0, 0, 0, 255)
TEXT_PADDING = 10
FONT_SIZE = 15

_VERTEX_SOURCE = """#version 330 core
in vec3 position;
in vec2 tex_coords;
in vec4 colors;
out vec2 frag_uv;
out vec4 frag_color;
uniform WindowBlock {
    mat4 projection;
    mat4 view;
} window;
void main() {
    gl_Position = window.projection * window.view * vec4(position, 1.0);
    frag_uv = tex_coords;
    frag_color = colors;
}
"""

_FRAGMENT_SOURCE = """#version 330 core
in vec2 frag_uv;
in vec4 frag_color;
out vec4 final_color;
uniform sampler2D atlas;
void main() {
    final_color = texture(atlas, frag_uv) * frag_color;
}
"""


class Game:
    """Game state: the player, the loaded world and the input of the current frame."""

    def __init__(self, asset_dir):
        self.textures = TextureManager(asset_dir)
        self.textures.load()
        self.atlas = build_atlas(self.textures)
        self.world = World(self.atlas)
        self.player = Player()
        self.pressed = set()
        self.mouse_delta = (0.0, 0.0)
        self._frame_times = deque(maxlen=30)

    def update(self, dt):
        """Advance one frame using the held keys and accumulated mouse motion."""
        self._frame_times.append(dt)
        dx, dy = self.mouse_delta
        self.mouse_delta = (0.0, 0.0)
        self.player.update(dx, dy, self.pressed)
        self.world.update(self.player.position)

    def _fps(self):
        total = sum(self._frame_times)
        return round(len(self._frame_times) / total) if total > 0 else 0

    def run(self):
        """Open the window and run until it is closed."""
        _run_window(self)


class _ChunkRenderer:
    """Keeps one GPU vertex list per chunk mesh in sync with the world."""

    def __init__(self, program, group, batch, triangles):
        self._program = program
        self._group = group
        self._batch = batch
        self._triangles = triangles
        self._lists = {}

    def sync(self, world):
        live = {}
        for column in world.columns.values():
            for chunk in column.chunks:
                entry = self._lists.pop(chunk, None)
                if entry is not None and entry[0] is chunk.mesh:
                    live[chunk] = entry
                    continue
                if entry is not None and entry[1] is not None:
                    entry[1].delete()
                if chunk.mesh is not None:
                    live[chunk] = (chunk.mesh, self._upload(chunk))
        for _, vertex_list in self._lists.values():
            if vertex_list is not None:
                vertex_list.delete()
        self._lists = live

    def _upload(self, chunk):
        mesh = chunk.mesh
        if mesh.vertex_count == 0:
            return None
        positions = [v + o for v, o in zip(mesh.vertices, itertools.cycle(chunk.origin))]
        return self._program.vertex_list_indexed(
            mesh.vertex_count,
            self._triangles,
            list(mesh.indices),
            batch=self._batch,
            group=self._group,
            position=("f", positions),
            tex_coords=("f", list(mesh.texcoords)),
            colors=("Bn", list(mesh.colors)),
        )


def _run_window(game):
    import pyglet
    from pyglet import gl
    from pyglet.graphics.shader import Shader, ShaderProgram
    from pyglet.math import Mat4, Vec3
    from pyglet.window import key

    from voxelcraft.player import Movement

    keymap = {
        key.W: Movement.FORWARD,
        key.A: Movement.LEFT,
        key.S: Movement.BACKWARD,
        key.D: Movement.RIGHT,
        key.SPACE: Movement.UP,
        key.LSHIFT: Movement.DOWN,
    }

    window = pyglet.window.Window(SCREEN_WIDTH, SCREEN_HEIGHT, caption=TITLE)
    window.set_exclusive_mouse(True)
    keys = key.KeyStateHandler()
    window.push_handlers(keys)

    program = ShaderProgram(
        Shader(_VERTEX_SOURCE, "vertex"), Shader(_FRAGMENT_SOURCE, "fragment")
    )
    batch = pyglet.graphics.Batch()
    group = pyglet.graphics.ShaderGroup(program)
    renderer = _ChunkRenderer(program, group, batch, gl.GL_TRIANGLES)

    image = game.atlas.image
    texture = pyglet.image.ImageData(
        image.width, image.height, "RGBA", image.tobytes(), pitch=image.width * 4
    ).get_texture()
    gl.glBindTexture(texture.target, texture.id)
    gl.glTexParameteri(texture.target, gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST)
    gl.glTexParameteri(texture.target, gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST)

    fps_label = pyglet.text.Label(
        "", font_size=FONT_SIZE, color=TEXT_COLOR, anchor_x="right", anchor_y="top"
    )
    position_label = pyglet.text.Label(
        "", font_size=FONT_SIZE, color=TEXT_COLOR, anchor_x="left", anchor_y="top"
    )

    @window.event
    def on_mouse_motion(x, y, dx, dy):
        mx, my = game.mouse_delta
        game.mouse_delta = (mx + dx, my - dy)

    @window.event
    def on_draw():
        gl.glClearColor(*BACKGROUND)
        window.clear()

        cam = game.player.camera
        gl.glEnable(gl.GL_DEPTH_TEST)
        window.projection = Mat4.perspective_projection(
            window.aspect_ratio, 0.01, 1000.0, fov=cam.fovy
        )
        window.view = Mat4.look_at(Vec3(*cam.position), Vec3(*cam.target), Vec3(*cam.up))
        renderer.sync(game.world)
        program.use()
        program["atlas"] = 0
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(texture.target, texture.id)
        batch.draw()
        program.stop()
        gl.glDisable(gl.GL_DEPTH_TEST)

        window.projection = Mat4.orthogonal_projection(
            0, window.width, 0, window.height, -255, 255
        )
        window.view = Mat4()
        fps_label.text = fps_text(game._fps())
        fps_label.x = window.width - TEXT_PADDING
        fps_label.y = window.height - TEXT_PADDING
        position_label.text = position_text(game.player.position)
        position_label.x = TEXT_PADDING
        position_label.y = window.height - TEXT_PADDING
        fps_label.draw()
        position_label.draw()

    def tick(dt):
        game.pressed = {movement for k, movement in keymap.items() if keys[k]}
        game.update(dt)

    pyglet.clock.schedule_interval(tick, 1.0 / TARGET_FPS)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(tick)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="voxelcraft", description="Explore a procedurally generated block world."
    )
    parser.add_argument(
        "--assets",
        default="assets",
        help="directory holding blocks/<name>.png textures (default: assets)",
    )
    args = parser.parse_args(argv)
    Game(args.assets).run()
    return 0