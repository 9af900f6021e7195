# voxelcraft

A small block-world sandbox. The world is made of 16×16×16 chunks stacked into
columns of sixteen. Terrain height comes from two-dimensional Perlin noise:
stone below height 20, dirt above it, and a single layer of grass on top.
Columns within four chunks of the player are generated as they move and are
unloaded again once they fall outside that distance. Faces hidden by a
neighbouring block in the same chunk are left out of the chunk's mesh.

## Installing

```
pip install .
```

The test suite uses pytest, which comes with the `test` extra:
`pip install ".[test]"`.

## Playing

The game reads its block textures from `blocks/` inside an asset directory:
`stone.png`, `dirt.png`, `grass_top.png` and `grass_side.png`. Each is packed
into a 16×16 tile of a texture atlas (larger or smaller images are scaled to
fit). By default the asset directory is `assets` in the current directory:

```
voxelcraft
```

or name another one:

```
voxelcraft --assets path/to/assets
```

A 1200×675 window opens with the mouse captured. Controls:

| Input       | Action                |
|-------------|-----------------------|
| Mouse       | Look around           |
| W / S       | Move forward / back   |
| A / D       | Strafe left / right   |
| Space       | Move up               |
| Left Shift  | Move down             |

Forward, back and strafing stay in the horizontal plane; looking up and down
stops just short of straight up and straight down. The frame rate is shown in
the top-right corner and the player's position in the top-left.

## What it does not do

The player flies freely: there is no gravity and no collision with the
terrain. Blocks cannot be placed or broken, and the world is not saved;
columns are generated afresh from the noise each time they are loaded.

## Using the pieces

The terrain and meshing code does not need a window and can be used directly.

```python
from voxelcraft.block import BlockType, make_block
from voxelcraft.chunk import ChunkColumn
from voxelcraft.noise import noise2d
from voxelcraft.texture import TextureAtlas

grass = make_block(BlockType.GRASS)
print(grass.visibility.is_empty())   # False
print(noise2d(10, 20))               # terrain height offset at (10, 20)

column = ChunkColumn(0, 0, TextureAtlas())
column.generate()
column.update()                      # rebuild the meshes of changed chunks
print(column.chunks[1].block_at(0, 0, 0).kind)   # BlockType.STONE
print(column.chunks[0].mesh.vertex_count)
```

- `voxelcraft.block`: `BlockType`, `Visibility`, `FacingDirection`, `Block`
  and `BlockFace`, with per-face vertex positions, normals, atlas texture
  coordinates and shaded RGBA colours; `make_block`, `modulate_color`,
  `lighting_color` and `face_axes`.
- `voxelcraft.mesh`: `MeshBuilder` gathers faces into a `Mesh` of flat vertex
  arrays and 16-bit triangle indices.
- `voxelcraft.noise`: a seeded fractal `Perlin` generator and the `noise2d`
  height function used by terrain generation.
- `voxelcraft.chunk`: `Chunk` (blocks, `set_block`, `block_at`, `update`,
  `unload`) and `ChunkColumn` (`generate`, `block_for_position`,
  `local_to_global`).
- `voxelcraft.world`: `World`, whose `update(position)` and
  `load_around(px, pz)` load and unload columns; `pos_to_key` and
  `key_to_pos` convert chunk coordinates to and from keys such as `"3_-2"`.
- `voxelcraft.player`: the first-person `Player`, its `Camera` and the
  `Movement` directions taken by `Player.update`.
- `voxelcraft.texture`: `TextureManager`, `TextureAtlas`, `UVRect` and
  `build_atlas`.
- `voxelcraft.ui`: `fps_text` and `position_text`, the overlay strings.
- `voxelcraft.game`: `Game` and the `main` entry point behind the
  `voxelcraft` command.