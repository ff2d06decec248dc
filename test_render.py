"""test_render.py — Shadows, tileset geometry and the painter.

Runs headless (SDL dummy video driver) and without the sprite sheets,
so the painter takes its flat-colour path.

Run:  python test_render.py     (or: python -m pytest test_render.py)
"""
from __future__ import annotations
import os, sys, traceback

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from core import constants as C
from core import tuning
from logic.level import Direction, Level, Position
from logic.shadow import DRAW_ORDER, ShadowFlags, shadow_flags
from ui.painter import Painter, centered_rect, fit_size
from ui.tileset import (
    TILE_LOCATIONS, Tile, Tileset, TilesetSelector, shadow_tile,
)

pygame.init()


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    print(f"  [FAIL] {label}")
    if detail:
        for line in detail.strip().splitlines():
            print(f"         {line}")


def big() -> Tileset:
    return Tileset(None, C.BIG_TILE_WIDTH, C.BIG_TILE_HEIGHT,
                   C.BIG_TILE_EFFECTIVE, C.BIG_TILE_OFFSET)


def small() -> Tileset:
    return Tileset(None, C.SMALL_TILE_WIDTH, C.SMALL_TILE_HEIGHT,
                   C.SMALL_TILE_EFFECTIVE, C.SMALL_TILE_OFFSET)


def rgb(surface: pygame.Surface, x: int, y: int) -> tuple[int, int, int]:
    return tuple(surface.get_at((x, y)))[:3]


# ════════════════════════════════════════════════════════════════════════
#  Shadows
# ════════════════════════════════════════════════════════════════════════

ROOM = (
    "#####\n"
    "#@ ##\n"
    "#   #\n"
    "#####"
)


def test_shadow_edges():
    print("\n=== Shadows: edges ===")
    lvl = Level.from_text(ROOM)
    F = ShadowFlags
    assert shadow_flags(lvl, Position(1, 1)) == F.N_EDGE | F.W_EDGE
    assert shadow_flags(lvl, Position(1, 2)) == F.N_EDGE | F.E_EDGE
    assert shadow_flags(lvl, Position(2, 3)) == F.S_EDGE | F.E_EDGE | F.N_EDGE
    ok("orthogonal walls cast edge shadows")


def test_shadow_corners():
    print("\n=== Shadows: corners ===")
    lvl = Level.from_text(ROOM)
    F = ShadowFlags
    # (1, 3) is a wall diagonal to (2, 2); neither N nor E edge covers it
    assert shadow_flags(lvl, Position(2, 2)) == F.S_EDGE | F.NE_CORNER
    # Corner walls next to a set edge are swallowed by that edge
    assert not shadow_flags(lvl, Position(1, 1)) & (F.NW_CORNER | F.NE_CORNER
                                                     | F.SW_CORNER)
    ok("corner shadow only where no adjacent edge is set")

    open_floor = Level.from_text("@")
    assert shadow_flags(open_floor, Position(0, 0)) == F.NONE
    ok("no walls, no shadows")


def test_shadow_draw_order():
    print("\n=== Shadows: draw order ===")
    F = ShadowFlags
    assert DRAW_ORDER == (F.N_EDGE, F.S_EDGE, F.E_EDGE, F.W_EDGE,
                          F.NE_CORNER, F.NW_CORNER, F.SE_CORNER, F.SW_CORNER)
    assert [shadow_tile(f) for f in DRAW_ORDER] == [
        Tile.SHADOW_N, Tile.SHADOW_S, Tile.SHADOW_E, Tile.SHADOW_W,
        Tile.SHADOW_NE, Tile.SHADOW_NW, Tile.SHADOW_SE, Tile.SHADOW_SW,
    ]
    with pytest.raises(ValueError):
        shadow_tile(F.N_EDGE | F.E_EDGE)
    ok("each single flag maps to one shadow tile")


# ════════════════════════════════════════════════════════════════════════
#  Tileset
# ════════════════════════════════════════════════════════════════════════

def test_tile_locations():
    print("\n=== Tileset: sheet layout ===")
    assert len(TILE_LOCATIONS) == len(Tile) == 13
    assert len(set(TILE_LOCATIONS.values())) == 13
    assert all(0 <= col < C.TILESET_COLUMNS for col, _ in TILE_LOCATIONS.values())
    ts = big()
    assert ts.tile_rect(Tile.FLOOR) == pygame.Rect(0, 0, 101, 171)
    assert ts.tile_rect(Tile.PLAYER) == pygame.Rect(303, 0, 101, 171)
    assert ts.tile_rect(Tile.SHADOW_SW) == pygame.Rect(505, 171, 101, 171)
    assert ts.tile_rect(Tile.WALL) == pygame.Rect(0, 342, 101, 171)
    ok("13 tiles in a 6-column sheet")


def test_tileset_geometry():
    print("\n=== Tileset: geometry ===")
    ts = big()
    assert not ts.has_image
    assert ts.coordinates(Position(0, 0)) == (0, 0)
    assert ts.coordinates(Position(2, 3)) == (303, 166)
    ok("cells advance by width and effective height")

    assert ts.rendering_size((7, 3)) == (707, 171 + 2 * 83)
    assert ts.rendering_size((1, 1)) == (101, 171)
    assert ts.rendering_size((0, 0)) == (0, 0)
    assert small().rendering_size((4, 2)) == (200, 85 + 41)
    ok("rendering size leaves room for the raised last row")


def test_selector_threshold():
    print("\n=== Tileset: selector ===")
    sel = TilesetSelector(big(), small(), threshold=40)
    sel.reset((40, 40))
    assert sel.select() is sel.big
    sel.reset((41, 3))
    assert sel.select() is sel.small
    sel.reset((3, 41))
    assert sel.select() is sel.small
    ok("small sheet once either extent passes 40")


# ════════════════════════════════════════════════════════════════════════
#  Painter
# ════════════════════════════════════════════════════════════════════════

def test_fit_and_center():
    print("\n=== Painter: fit and centre ===")
    assert fit_size((300, 100), (1024, 736)) == (300, 100)
    assert fit_size((2000, 1000), (1000, 1000)) == (1000, 500)
    assert fit_size((1000, 2000), (1000, 1000)) == (500, 1000)
    assert fit_size((0, 50), (100, 100)) == (0, 0)
    ok("scaled down to fit, never up")

    assert centered_rect((100, 50), (200, 150)) == pygame.Rect(50, 50, 100, 50)
    ok("centred inside the area")


def test_painter_small_level_unscaled():
    print("\n=== Painter: unscaled level ===")
    tuning.clear()
    screen = pygame.Surface((400, 300), 0, 32)
    painter = Painter((400, 300), TilesetSelector(big(), small()))
    lvl = Level.from_text("#@#")

    target = painter.draw(screen, lvl)
    assert target == pygame.Rect((400 - 303) // 2, (268 - 171) // 2, 303, 171)
    ok(f"level drawn at full size in {target}")

    # Player disc sits in the middle of the block top of cell (0, 1)
    cx = target.x + 101 + 101 // 2
    cy = target.y + 83 // 2
    assert rgb(screen, cx, cy) == C.FLAT_COLORS["player"]
    ok("flat player drawn")

    assert rgb(screen, 5, 295) == C.BAR_COLOR
    assert rgb(screen, 395, 269) == C.BAR_COLOR
    ok("status bar fills the bottom 32 px")


def test_painter_scales_down_large_level():
    print("\n=== Painter: scaled level ===")
    tuning.clear()
    screen = pygame.Surface((400, 300), 0, 32)
    painter = Painter((400, 300), TilesetSelector(big(), small()))
    lvl = Level.from_text("#" * 45 + "\n#@#")

    target = painter.draw(screen, lvl)
    assert painter.tileset is painter.selector.small
    assert target.width <= 400 and target.height <= 268
    assert target.width >= 399
    assert target.bottom <= 268
    ok(f"45-wide level uses the small sheet, scaled into {target.size}")


def test_status_bar_text():
    print("\n=== Painter: status bar text ===")
    tuning.clear()
    screen = pygame.Surface((400, 300), 0, 32)
    font = pygame.font.Font(None, 20)
    painter = Painter((400, 300), TilesetSelector(big(), small()), font)
    lvl = Level.from_text("#@ $.#", title="Tiny")
    lvl.step(Direction.RIGHT)
    painter.draw(screen, lvl)

    bar = pygame.Rect(0, 268, 400, 32)
    left = [rgb(screen, x, y) for x in range(4, 120) for y in range(bar.top, bar.bottom)]
    right = [rgb(screen, x, y) for x in range(300, 396) for y in range(bar.top, bar.bottom)]
    assert any(px != C.BAR_COLOR for px in left)
    assert any(px != C.BAR_COLOR for px in right)
    ok("move counter on the left, title on the right")


# ════════════════════════════════════════════════════════════════════════
#  MAIN
# ════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [(name, fn) for name, fn in list(globals().items())
                if name.startswith("test_") and callable(fn)]
    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    print(f"\n{'=' * 50}")
    print(f"  {_passed} passed, {_failed} failed")
    print(f"{'=' * 50}")
    sys.exit(1 if _failed else 0)
