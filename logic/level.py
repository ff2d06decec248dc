"""logic/level.py — Level grid model and move/push resolver.

A ``Level`` is built from its XSB text description::

    level = Level.from_text(
        "#####\\n"
        "#@$.#\\n"
        "#####",
        title="Tiny",
    )
    level.step(Direction.RIGHT)     # pushes the crate onto the target
    level.is_completed()            # True

Walls and targets are fixed at parse time.  Only the player and the
crates move, and every successful move is recorded so it can be undone.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from core.constants import (
    GLYPH_WALL, GLYPH_TARGET, GLYPH_CRATE, GLYPH_CRATE_ON_TARGET,
    GLYPH_PLAYER, GLYPH_PLAYER_ON_TARGET, GLYPH_FLOOR, GLYPH_FLOOR_ALT,
)
from core.errors import LevelParseError


class Direction(Enum):
    """The four directions the player can step in.  Value = (drow, dcol)."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value


class Position(NamedTuple):
    """A cell of the grid."""
    row: int
    col: int

    def neighbor(self, direction: Direction) -> "Position":
        """The cell next to this one in *direction*."""
        dr, dc = direction.value
        return Position(self.row + dr, self.col + dc)


@dataclass(frozen=True, slots=True)
class Move:
    """One executed step, as kept in the undo history."""
    direction: Direction
    pushed: bool = False


@dataclass
class Level:
    title: str = ""
    player: Position = Position(0, 0)
    walls: frozenset[Position] = frozenset()
    targets: frozenset[Position] = frozenset()
    crates: set[Position] = field(default_factory=set)
    steps: int = 0
    pushes: int = 0
    history: list[Move] = field(default_factory=list)
    # (columns, rows)
    extents: tuple[int, int] = (0, 0)
    undo_limit: int = 0

    # ── parsing ─────────────────────────────────────────────────────

    @classmethod
    def from_text(cls, text: str, title: str = "") -> "Level":
        """Parse an XSB level description.

        Raises ``LevelParseError`` on an unknown character or when the
        level doesn't have exactly one player.
        """
        walls: set[Position] = set()
        targets: set[Position] = set()
        crates: set[Position] = set()
        player: Position | None = None

        row, col = 0, 0
        for ch in text:
            if ch == "\n":
                row += 1
                col = 0
                continue
            if ch == "\r":
                continue

            pos = Position(row, col)
            if ch == GLYPH_WALL:
                walls.add(pos)
            elif ch == GLYPH_TARGET:
                targets.add(pos)
            elif ch == GLYPH_CRATE:
                crates.add(pos)
            elif ch == GLYPH_CRATE_ON_TARGET:
                crates.add(pos)
                targets.add(pos)
            elif ch in (GLYPH_PLAYER, GLYPH_PLAYER_ON_TARGET):
                if player is not None:
                    raise LevelParseError(ch, row, col, title,
                                          reason=f"second player at row {row}, column {col}")
                player = pos
                if ch == GLYPH_PLAYER_ON_TARGET:
                    targets.add(pos)
            elif ch != GLYPH_FLOOR and ch not in GLYPH_FLOOR_ALT:
                raise LevelParseError(ch, row, col, title)
            col += 1

        if player is None:
            raise LevelParseError(None, row, col, title, reason="no player in level")

        # Extents cover every non-floor cell (trailing blank lines don't count)
        w, h = player.col, player.row
        for pos in walls | targets | crates:
            w = max(w, pos.col)
            h = max(h, pos.row)

        return cls(
            title=title,
            player=player,
            walls=frozenset(walls),
            targets=frozenset(targets),
            crates=crates,
            extents=(w + 1, h + 1),
        )

    def to_text(self) -> str:
        """Render the current state back to XSB, one line per row."""
        cols, rows = self.extents
        lines = []
        for r in range(rows):
            chars = []
            for c in range(cols):
                pos = Position(r, c)
                on_target = pos in self.targets
                if pos in self.walls:
                    chars.append(GLYPH_WALL)
                elif pos == self.player:
                    chars.append(GLYPH_PLAYER_ON_TARGET if on_target else GLYPH_PLAYER)
                elif pos in self.crates:
                    chars.append(GLYPH_CRATE_ON_TARGET if on_target else GLYPH_CRATE)
                elif on_target:
                    chars.append(GLYPH_TARGET)
                else:
                    chars.append(GLYPH_FLOOR)
            lines.append("".join(chars).rstrip())
        return "\n".join(lines)

    # ── moves ───────────────────────────────────────────────────────

    def step(self, direction: Direction) -> bool:
        """Move the player one cell, pushing a crate if there is one.

        A crate can only be pushed onto a free cell (no wall, no other
        crate).  Returns True if the player moved.
        """
        ahead = self.player.neighbor(direction)
        if self.is_free(ahead):
            self._move_player(ahead)
            self._remember(Move(direction, pushed=False))
            return True

        if self.is_crate(ahead):
            beyond = ahead.neighbor(direction)
            if self.is_free(beyond):
                self._move_crate(ahead, beyond)
                self._move_player(ahead)
                self.pushes += 1
                self._remember(Move(direction, pushed=True))
                return True

        return False

    def undo(self) -> bool:
        """Revert the last successful step.  Returns False if none."""
        if not self.history:
            return False
        move = self.history.pop()
        dr, dc = move.direction.value
        previous = Position(self.player.row - dr, self.player.col - dc)
        if move.pushed:
            crate = self.player.neighbor(move.direction)
            self._move_crate(crate, self.player)
            self.pushes -= 1
        self.player = previous
        self.steps -= 1
        return True

    def _move_player(self, pos: Position) -> None:
        if pos != self.player:
            self.player = pos
            self.steps += 1

    def _move_crate(self, src: Position, dst: Position) -> None:
        if src in self.crates:
            self.crates.discard(src)
            self.crates.add(dst)

    def _remember(self, move: Move) -> None:
        self.history.append(move)
        if self.undo_limit and len(self.history) > self.undo_limit:
            del self.history[0]

    # ── queries ─────────────────────────────────────────────────────

    def is_completed(self) -> bool:
        """True when every target holds a crate."""
        return self.targets <= self.crates

    def is_free(self, pos: Position) -> bool:
        return pos not in self.walls and pos not in self.crates

    def is_wall(self, pos: Position) -> bool:
        return pos in self.walls

    def is_crate(self, pos: Position) -> bool:
        return pos in self.crates

    def is_target(self, pos: Position) -> bool:
        return pos in self.targets

    def is_player(self, pos: Position) -> bool:
        return pos == self.player

    def crates_on_targets(self) -> int:
        return len(self.crates & self.targets)

    def copy(self) -> "Level":
        """Independent copy; walls/targets are immutable and shared."""
        return Level(
            title=self.title,
            player=self.player,
            walls=self.walls,
            targets=self.targets,
            crates=set(self.crates),
            steps=self.steps,
            pushes=self.pushes,
            history=list(self.history),
            extents=self.extents,
            undo_limit=self.undo_limit,
        )

    def __repr__(self) -> str:
        cols, rows = self.extents
        return (f"Level({self.title!r}, {cols}x{rows}, steps={self.steps}, "
                f"crates={self.crates_on_targets()}/{len(self.targets)})")
