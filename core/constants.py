"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.
Most of these are defaults; ``data/tuning.toml`` can override the
window, status bar and tileset values at startup.

Grid Coordinates
----------------
Levels are addressed by ``(row, col)``, both 0-based, row 0 at the top.
Extents are reported the other way round, as ``(columns, rows)``, because
that is the order the renderer wants them in (width, height).

Tileset Geometry
----------------
The sprite sheet cells are taller than they are "deep": a block image is
``height`` px tall but rows overlap so that only ``effective_height`` px
of each row is visible.  Raised items (walls, crates, the player) are
drawn ``offset`` px higher than the floor tile of the same cell.

    big   : 101 x 171 cells, 83 px per row, raised by 40
    small :  50 x  85 cells, 41 px per row, raised by 20
"""

# ── Level glyphs (XSB notation) ─────────────────────────────────────
GLYPH_WALL            = "#"
GLYPH_TARGET          = "."
GLYPH_CRATE           = "$"
GLYPH_CRATE_ON_TARGET = "*"
GLYPH_PLAYER          = "@"
GLYPH_PLAYER_ON_TARGET = "+"
GLYPH_FLOOR           = " "
# Alternative floor glyphs found in some collections
GLYPH_FLOOR_ALT       = ("-", "_")

# ── Window ──────────────────────────────────────────────────────────
WINDOW_WIDTH  = 1024
WINDOW_HEIGHT = 768
WINDOW_TITLE  = "Sokoban"
FPS = 60

# ── Status bar ──────────────────────────────────────────────────────
BAR_HEIGHT     = 32
BAR_MARGIN     = 4
BAR_COLOR      = (20, 20, 20)
BAR_TEXT_COLOR = (255, 192, 0)
FONT_SIZE      = 20
FONT_PATH      = "assets/font/RujisHandwritingFontv.2.0.ttf"

# ── Tilesets ────────────────────────────────────────────────────────
TILESET_COLUMNS = 6           # the sheet is laid out 6 cells wide

BIG_TILESET_PATH   = "assets/image/tileset.png"
BIG_TILE_WIDTH     = 101
BIG_TILE_HEIGHT    = 171
BIG_TILE_EFFECTIVE = 83
BIG_TILE_OFFSET    = 40

SMALL_TILESET_PATH   = "assets/image/tileset-small.png"
SMALL_TILE_WIDTH     = 50
SMALL_TILE_HEIGHT    = 85
SMALL_TILE_EFFECTIVE = 41
SMALL_TILE_OFFSET    = 20

# Levels wider or taller than this (in cells) use the small tileset
TILESET_THRESHOLD = 40

# ── Flat palette (used when the sheet image is missing) ─────────────
FLAT_COLORS = {
    "background": (0, 0, 0),
    "floor":      (60, 60, 70),
    "target":     (200, 170, 0),
    "wall":       (110, 80, 60),
    "crate":      (160, 82, 45),
    "crate_done": (0, 170, 60),
    "player":     (70, 130, 255),
    "shadow":     (0, 0, 0, 70),
}

# ── Session ─────────────────────────────────────────────────────────
UNDO_LIMIT = 0                # 0 = unlimited history

# ── Persistence ─────────────────────────────────────────────────────
SAVES_DIR = "saves"
PROGRESS_FILE = "progress.json"
