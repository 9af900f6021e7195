"""Block textures and the atlas that packs them into a single image."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PIL import Image

STONE = "stone"
DIRT = "dirt"
GRASS_TOP = "grass_top"
GRASS_SIDE = "grass_side"

TEXTURE_NAMES = (STONE, DIRT, GRASS_TOP, GRASS_SIDE)
ATLAS_ORDER = (DIRT, STONE, GRASS_TOP, GRASS_SIDE)

ATLAS_SIZE = 256
TILE_SIZE = 16
_TILES_PER_ROW = ATLAS_SIZE // TILE_SIZE


@dataclass(frozen=True)
class UVRect:
    """A rectangle in normalised texture coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class TextureManager:
    """Loads the block textures from ``<asset_dir>/blocks/<name>.png``."""

    def __init__(self, asset_dir):
        self.asset_dir = Path(asset_dir)
        self._textures: dict[str, Image.Image] = {}
        self._loaded = False

    def load(self):
        """Load every block texture; later calls do nothing."""
        if self._loaded:
            return
        for name in TEXTURE_NAMES:
            self._load_one(name)
        self._loaded = True

    def _load_one(self, name):
        path = self.asset_dir / "blocks" / f"{name}.png"
        try:
            with Image.open(path) as img:
                self._textures[name] = img.convert("RGBA")
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"failed to load texture: {name}") from exc

    def get(self, name):
        """Return the loaded texture called ``name``."""
        try:
            return self._textures[name]
        except KeyError:
            raise KeyError(f"texture not found: {name}") from None

    def cleanup(self):
        """Release every loaded texture."""
        for img in self._textures.values():
            img.close()
        self._textures = {}


class TextureAtlas:
    """A square image holding block textures laid out on a grid of tiles."""

    def __init__(self):
        self.image = Image.new("RGBA", (ATLAS_SIZE, ATLAS_SIZE), (0, 0, 0, 0))
        self._tiles: dict[str, UVRect] = {}

    @property
    def names(self):
        """Names of the textures in the atlas, in insertion order."""
        return tuple(self._tiles)

    def add(self, name, image):
        """Place ``image`` in the next free tile and return its UV rectangle."""
        row, col = divmod(len(self._tiles), _TILES_PER_ROW)
        uv = UVRect(
            x=col * TILE_SIZE / ATLAS_SIZE,
            y=row * TILE_SIZE / ATLAS_SIZE,
            width=TILE_SIZE / ATLAS_SIZE,
            height=TILE_SIZE / ATLAS_SIZE,
        )
        self._tiles[name] = uv

        if row < _TILES_PER_ROW:
            tile = image.convert("RGBA")
            if tile.size != (TILE_SIZE, TILE_SIZE):
                tile = tile.resize((TILE_SIZE, TILE_SIZE), Image.Resampling.NEAREST)
            self.image.alpha_composite(tile, dest=(col * TILE_SIZE, row * TILE_SIZE))
        return uv

    def uv(self, name):
        """UV rectangle of ``name``; an empty rectangle if it is not in the atlas."""
        return self._tiles.get(name, UVRect())


def build_atlas(manager):
    """Build the atlas holding every block texture of ``manager``."""
    atlas = TextureAtlas()
    for name in ATLAS_ORDER:
        atlas.add(name, manager.get(name))
    return atlas