"""logic/shadow.py — Shadows cast by walls onto floor tiles.

Each floor cell gets a set of ``ShadowFlags`` computed from its eight
neighbours.  The painter overlays one shadow sprite per flag, in
``DRAW_ORDER``.
"""

from __future__ import annotations
from enum import IntFlag

from logic.level import Direction, Level, Position


class ShadowFlags(IntFlag):
    NONE = 0
    N_EDGE = 0x1
    S_EDGE = 0x2
    E_EDGE = 0x4
    W_EDGE = 0x8
    NE_CORNER = 0x10
    NW_CORNER = 0x20
    SE_CORNER = 0x40
    SW_CORNER = 0x80


DRAW_ORDER: tuple[ShadowFlags, ...] = (
    ShadowFlags.N_EDGE,
    ShadowFlags.S_EDGE,
    ShadowFlags.E_EDGE,
    ShadowFlags.W_EDGE,
    ShadowFlags.NE_CORNER,
    ShadowFlags.NW_CORNER,
    ShadowFlags.SE_CORNER,
    ShadowFlags.SW_CORNER,
)


def shadow_flags(level: Level, pos: Position) -> ShadowFlags:
    """Return the shadows cast onto *pos* by neighbouring walls.

    A corner shadow is only cast when neither adjacent edge already
    covers it.
    """
    north = pos.neighbor(Direction.UP)
    south = pos.neighbor(Direction.DOWN)
    west = pos.neighbor(Direction.LEFT)
    east = pos.neighbor(Direction.RIGHT)

    flags = ShadowFlags.NONE
    if level.is_wall(north):
        flags |= ShadowFlags.N_EDGE
    if level.is_wall(south):
        flags |= ShadowFlags.S_EDGE
    if level.is_wall(west):
        flags |= ShadowFlags.W_EDGE
    if level.is_wall(east):
        flags |= ShadowFlags.E_EDGE

    corners = (
        (north.neighbor(Direction.RIGHT), ShadowFlags.NE_CORNER,
         ShadowFlags.N_EDGE | ShadowFlags.E_EDGE),
        (north.neighbor(Direction.LEFT), ShadowFlags.NW_CORNER,
         ShadowFlags.N_EDGE | ShadowFlags.W_EDGE),
        (south.neighbor(Direction.RIGHT), ShadowFlags.SE_CORNER,
         ShadowFlags.S_EDGE | ShadowFlags.E_EDGE),
        (south.neighbor(Direction.LEFT), ShadowFlags.SW_CORNER,
         ShadowFlags.S_EDGE | ShadowFlags.W_EDGE),
    )
    for corner, flag, edges in corners:
        if level.is_wall(corner) and not flags & edges:
            flags |= flag
    return flags
