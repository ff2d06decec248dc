"""ui.tileset — Sprite sheet addressing.

The sheet is a 6-column montage of thirteen block images, in this order:

    row 0:  floor  target  crate  player  shadow N   shadow S
    row 1:  shadow E   shadow W   shadow NE  shadow NW  shadow SE  shadow SW
    row 2:  wall

Two sheets ship with the game, a big one and a small one; the
``TilesetSelector`` switches to the small one for large levels so they
don't have to be scaled down as much.
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path

import pygame

from core import constants as C
from core import tuning
from logic.level import Position
from logic.shadow import ShadowFlags


class Tile(Enum):
    FLOOR = "floor"
    TARGET = "target"
    CRATE = "crate"
    PLAYER = "player"
    WALL = "wall"
    SHADOW_N = "shadow_n"
    SHADOW_S = "shadow_s"
    SHADOW_E = "shadow_e"
    SHADOW_W = "shadow_w"
    SHADOW_NE = "shadow_ne"
    SHADOW_NW = "shadow_nw"
    SHADOW_SE = "shadow_se"
    SHADOW_SW = "shadow_sw"


# (column, row) of every tile in the sheet
TILE_LOCATIONS: dict[Tile, tuple[int, int]] = {
    Tile.FLOOR:     (0, 0),
    Tile.TARGET:    (1, 0),
    Tile.CRATE:     (2, 0),
    Tile.PLAYER:    (3, 0),
    Tile.SHADOW_N:  (4, 0),
    Tile.SHADOW_S:  (5, 0),
    Tile.SHADOW_E:  (0, 1),
    Tile.SHADOW_W:  (1, 1),
    Tile.SHADOW_NE: (2, 1),
    Tile.SHADOW_NW: (3, 1),
    Tile.SHADOW_SE: (4, 1),
    Tile.SHADOW_SW: (5, 1),
    Tile.WALL:      (0, 2),
}

SHADOW_TILES: dict[ShadowFlags, Tile] = {
    ShadowFlags.N_EDGE:    Tile.SHADOW_N,
    ShadowFlags.S_EDGE:    Tile.SHADOW_S,
    ShadowFlags.E_EDGE:    Tile.SHADOW_E,
    ShadowFlags.W_EDGE:    Tile.SHADOW_W,
    ShadowFlags.NE_CORNER: Tile.SHADOW_NE,
    ShadowFlags.NW_CORNER: Tile.SHADOW_NW,
    ShadowFlags.SE_CORNER: Tile.SHADOW_SE,
    ShadowFlags.SW_CORNER: Tile.SHADOW_SW,
}


def shadow_tile(flag: ShadowFlags) -> Tile:
    """Tile for a single shadow flag.  Combined flags have no tile."""
    try:
        return SHADOW_TILES[flag]
    except KeyError:
        raise ValueError(f"no shadow tile for {flag!r}") from None


class Tileset:
    """One sprite sheet plus the geometry needed to lay it out.

    *surface* may be ``None`` when the sheet image couldn't be loaded;
    the geometry methods still work and the painter falls back to flat
    colours.
    """

    def __init__(self, surface: pygame.Surface | None,
                 width: int, height: int,
                 effective_height: int, offset: int):
        self.surface = surface
        self.width = width
        self.height = height
        self.effective_height = effective_height
        self.offset = offset

    @property
    def has_image(self) -> bool:
        return self.surface is not None

    def tile_rect(self, tile: Tile) -> pygame.Rect:
        """Source rectangle of *tile* inside the sheet."""
        col, row = TILE_LOCATIONS[tile]
        return pygame.Rect(col * self.width, row * self.height,
                           self.width, self.height)

    def coordinates(self, pos: Position) -> tuple[int, int]:
        """Top-left pixel of the floor tile for the cell at *pos*."""
        return self.width * pos.col, self.effective_height * pos.row

    def rendering_size(self, extents: tuple[int, int]) -> tuple[int, int]:
        """Full pixel size needed to draw a level of *extents* (cols, rows)."""
        cols, rows = extents
        width = cols * self.width
        height = self.height + (rows - 1) * self.effective_height if rows > 0 else 0
        return width, height

    def __repr__(self) -> str:
        return (f"Tileset({self.width}x{self.height}, eff={self.effective_height}, "
                f"offset={self.offset}, image={self.has_image})")


class TilesetSelector:
    """Picks the big or the small tileset depending on the level size."""

    def __init__(self, big: Tileset, small: Tileset,
                 threshold: int = C.TILESET_THRESHOLD):
        self.big = big
        self.small = small
        self.threshold = threshold
        self.extents: tuple[int, int] = (0, 0)

    def reset(self, extents: tuple[int, int]) -> None:
        self.extents = extents

    def select(self) -> Tileset:
        if max(self.extents) > self.threshold:
            return self.small
        return self.big


# ── loading ─────────────────────────────────────────────────────────

def load_image(path: str | Path) -> pygame.Surface | None:
    """Load a PNG with alpha.  Returns None (and says so) if missing."""
    path = Path(path)
    if not path.exists():
        print(f"[ASSETS] {path} not found — using flat tiles")
        return None
    try:
        image = pygame.image.load(str(path))
    except pygame.error as ex:
        print(f"[ASSETS] Failed to load {path}: {ex}")
        return None
    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()
    return image


def load_tileset(which: str) -> Tileset:
    """Build the ``"big"`` or ``"small"`` tileset from tuning + defaults."""
    if which == "big":
        defaults = (C.BIG_TILESET_PATH, C.BIG_TILE_WIDTH, C.BIG_TILE_HEIGHT,
                    C.BIG_TILE_EFFECTIVE, C.BIG_TILE_OFFSET)
    elif which == "small":
        defaults = (C.SMALL_TILESET_PATH, C.SMALL_TILE_WIDTH, C.SMALL_TILE_HEIGHT,
                    C.SMALL_TILE_EFFECTIVE, C.SMALL_TILE_OFFSET)
    else:
        raise ValueError(f"unknown tileset {which!r}")

    sec = f"tileset.{which}"
    path, width, height, eff, offset = defaults
    return Tileset(
        load_image(tuning.get(sec, "path", path)),
        int(tuning.get(sec, "width", width)),
        int(tuning.get(sec, "height", height)),
        int(tuning.get(sec, "effective_height", eff)),
        int(tuning.get(sec, "offset", offset)),
    )


def load_selector() -> TilesetSelector:
    return TilesetSelector(
        load_tileset("big"),
        load_tileset("small"),
        int(tuning.get("tileset", "threshold", C.TILESET_THRESHOLD)),
    )
