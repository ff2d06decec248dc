"""ui.painter — Draws a level and the status bar.

The level is first drawn at full tileset size onto an off-screen
surface, then scaled down (never up) to fit the area above the status
bar and centred there::

    painter = Painter((1024, 768), load_selector())
    painter.draw(surface, level)

Per cell, back to front: floor or target, wall shadows, then the raised
items (wall, crate, player) lifted by the tileset's ``offset``.
"""

from __future__ import annotations
from pathlib import Path

import pygame

from core import constants as C
from core import tuning
from logic.level import Level, Position
from logic.shadow import DRAW_ORDER, ShadowFlags, shadow_flags
from ui.tileset import Tile, Tileset, TilesetSelector, shadow_tile


def load_font(size: int | None = None) -> pygame.font.Font:
    """Status bar font: the TTF from tuning if present, else a system font."""
    if not pygame.font.get_init():
        pygame.font.init()
    size = size or int(tuning.get("status_bar", "font_size", C.FONT_SIZE))
    path = Path(tuning.get("status_bar", "font_path", C.FONT_PATH))
    if path.exists():
        try:
            return pygame.font.Font(str(path), size)
        except (OSError, pygame.error) as ex:
            print(f"[ASSETS] Failed to load font {path}: {ex}")
    else:
        print(f"[ASSETS] {path} not found — using system font")
    return pygame.font.SysFont("sans", size)


def fit_size(image_size: tuple[int, int], area: tuple[int, int]) -> tuple[int, int]:
    """Largest size ≤ *image_size* keeping its aspect ratio inside *area*."""
    iw, ih = image_size
    aw, ah = area
    if iw <= 0 or ih <= 0:
        return 0, 0
    ratio = min(1.0, aw / iw, ah / ih)
    return int(ratio * iw), int(ratio * ih)


def centered_rect(image_size: tuple[int, int], area: tuple[int, int]) -> pygame.Rect:
    """Rect of *image_size* centred inside an *area* anchored at (0, 0)."""
    iw, ih = image_size
    aw, ah = area
    return pygame.Rect((aw - iw) // 2, (ah - ih) // 2, iw, ih)


class Painter:
    """Renders the active level onto the app's surface."""

    def __init__(self, screen_size: tuple[int, int], selector: TilesetSelector,
                 font: pygame.font.Font | None = None):
        self.screen_size = screen_size
        self.selector = selector
        self.font = font
        self.bar_height = int(tuning.get("status_bar", "height", C.BAR_HEIGHT))
        self.bar_margin = int(tuning.get("status_bar", "margin", C.BAR_MARGIN))
        self.bar_color = tuning.get_color("status_bar", "color", C.BAR_COLOR)
        self.bar_text_color = tuning.get_color("status_bar", "text_color",
                                               C.BAR_TEXT_COLOR)
        self.colors = {k: tuning.get_color("colors", k, v)
                       for k, v in C.FLAT_COLORS.items()}

    @property
    def tileset(self) -> Tileset:
        return self.selector.select()

    # ── frame ───────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, level: Level) -> pygame.Rect:
        """Draw *level* and the status bar.  Returns the level's screen rect."""
        self.selector.reset(level.extents)
        self.screen_size = surface.get_size()

        fullsize = self.tileset.rendering_size(level.extents)
        image = pygame.Surface((max(1, fullsize[0]), max(1, fullsize[1])))
        self.draw_fullsize(image, level)

        sw, sh = self.screen_size
        area = (sw, sh - self.bar_height)
        target = centered_rect(fit_size(fullsize, area), area)

        surface.fill(self.colors["background"][:3])
        if target.width > 0 and target.height > 0:
            if target.size == fullsize:
                surface.blit(image, target)
            else:
                surface.blit(pygame.transform.smoothscale(image, target.size), target)

        self.draw_status_bar(surface, level)
        return target

    def draw_fullsize(self, surface: pygame.Surface, level: Level) -> None:
        """Draw *level* at tileset scale onto *surface*."""
        ts = self.tileset
        cols, rows = level.extents
        surface.fill(self.colors["background"][:3])

        for r in range(rows):
            for c in range(cols):
                pos = Position(r, c)
                x, y = ts.coordinates(pos)

                self._draw_tile(surface, Tile.TARGET if level.is_target(pos) else Tile.FLOOR,
                                x, y, level, pos)

                flags = shadow_flags(level, pos)
                for flag in DRAW_ORDER:
                    if flags & flag:
                        self._draw_shadow(surface, flag, x, y)

                z = y - ts.offset
                if level.is_wall(pos):
                    self._draw_tile(surface, Tile.WALL, x, z, level, pos)
                if level.is_crate(pos):
                    self._draw_tile(surface, Tile.CRATE, x, z, level, pos)
                if level.is_player(pos):
                    self._draw_tile(surface, Tile.PLAYER, x, z, level, pos)

    # ── status bar ──────────────────────────────────────────────────

    def draw_status_bar(self, surface: pygame.Surface, level: Level) -> None:
        sw, sh = self.screen_size
        pygame.draw.rect(surface, self.bar_color,
                         (0, sh - self.bar_height, sw, self.bar_height))
        if self.font is None:
            return
        self._draw_status_text(surface, f"# moves: {level.steps}", left=True)
        self._draw_status_text(surface, level.title, left=False)

    def _draw_status_text(self, surface: pygame.Surface, text: str, left: bool) -> None:
        if not text:
            return
        img = self.font.render(text, True, self.bar_text_color)
        w, h = img.get_size()
        sw, sh = self.screen_size
        m = self.bar_margin
        x = m if left else sw - m - w
        surface.blit(img, (x, sh - m - h))

    # ── tiles ───────────────────────────────────────────────────────

    def _draw_tile(self, surface: pygame.Surface, tile: Tile, x: int, y: int,
                   level: Level, pos: Position) -> None:
        ts = self.tileset
        if ts.has_image:
            surface.blit(ts.surface, (x, y), ts.tile_rect(tile))
            return

        # Flat fallback: block tops are `effective_height` tall and sit
        # `offset` px below the top of the sprite cell.
        top = pygame.Rect(x, y + ts.offset, ts.width, ts.effective_height)
        if tile is Tile.FLOOR:
            pygame.draw.rect(surface, self.colors["floor"][:3], top)
        elif tile is Tile.TARGET:
            pygame.draw.rect(surface, self.colors["floor"][:3], top)
            pygame.draw.ellipse(surface, self.colors["target"][:3],
                                top.inflate(-ts.width // 2, -ts.effective_height // 2))
        elif tile is Tile.WALL:
            pygame.draw.rect(surface, self.colors["wall"][:3],
                             (x, y + ts.offset, ts.width, ts.effective_height + ts.offset))
        elif tile is Tile.CRATE:
            key = "crate_done" if level.is_target(pos) else "crate"
            pygame.draw.rect(surface, self.colors[key][:3],
                             top.inflate(-ts.width // 5, -ts.effective_height // 5))
        elif tile is Tile.PLAYER:
            pygame.draw.circle(surface, self.colors["player"][:3], top.center,
                               min(ts.width, ts.effective_height) // 3)

    def _draw_shadow(self, surface: pygame.Surface, flag: ShadowFlags,
                     x: int, y: int) -> None:
        ts = self.tileset
        if ts.has_image:
            surface.blit(ts.surface, (x, y), ts.tile_rect(shadow_tile(flag)))
            return

        w, h = ts.width, ts.effective_height
        band_w, band_h = max(1, w // 6), max(1, h // 6)
        strips = {
            ShadowFlags.N_EDGE:    (0, 0, w, band_h),
            ShadowFlags.S_EDGE:    (0, h - band_h, w, band_h),
            ShadowFlags.W_EDGE:    (0, 0, band_w, h),
            ShadowFlags.E_EDGE:    (w - band_w, 0, band_w, h),
            ShadowFlags.NE_CORNER: (w - band_w, 0, band_w, band_h),
            ShadowFlags.NW_CORNER: (0, 0, band_w, band_h),
            ShadowFlags.SE_CORNER: (w - band_w, h - band_h, band_w, band_h),
            ShadowFlags.SW_CORNER: (0, h - band_h, band_w, band_h),
        }
        sx, sy, rw, rh = strips[flag]
        shade = pygame.Surface((rw, rh), pygame.SRCALPHA)
        shade.fill(self.colors["shadow"])
        surface.blit(shade, (x + sx, y + ts.offset + sy))
