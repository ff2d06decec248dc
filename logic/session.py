"""logic/session.py — Game-session controller.

Walks the player through a ``LevelCollection`` one level at a time.
The session keeps two copies of the active level: the *reference*
(as parsed) and the *working* copy the player is moving around in.
Retry throws the working copy away and clones the reference again.

    session = GameSession(collection, bus)
    session.step(Direction.LEFT)
    session.retry()          # R
    session.skip()           # N
    session.undo()           # U

When the working level is solved the session emits ``LevelCompleted``
and moves straight on to the next level.  Running off the end of the
collection emits ``CollectionFinished`` and sets ``finished``.
"""

from __future__ import annotations

from core.events import (
    EventBus, LevelStarted, LevelCompleted, LevelSkipped, CollectionFinished,
)
from logic.level import Direction, Level
from logic.slc import LevelCollection


class GameSession:
    def __init__(self, collection: LevelCollection, bus: EventBus | None = None,
                 start: int = 0, undo_limit: int = 0):
        if not len(collection):
            raise ValueError("collection has no levels")
        self.collection = collection
        self.bus = bus
        self.undo_limit = undo_limit
        self.solved: set[int] = set()
        self.finished = False
        self._index = max(0, min(start, len(collection) - 1))
        self._reference: Level = collection[self._index]
        self._level: Level = self._fresh_copy()
        self._emit(LevelStarted(index=self._index, title=self._reference.title))
        self._settle()

    # ── accessors ───────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self.collection)

    @property
    def level(self) -> Level:
        return self._level

    @property
    def reference(self) -> Level:
        return self._reference

    # ── player actions ──────────────────────────────────────────────

    def step(self, direction: Direction) -> bool:
        """Move in *direction*.  Returns True if the player moved."""
        if self.finished:
            return False
        moved = self._level.step(direction)
        if moved:
            self._settle()
        return moved

    def undo(self) -> bool:
        if self.finished:
            return False
        return self._level.undo()

    def retry(self) -> None:
        """Restart the active level from its initial layout."""
        if self.finished:
            return
        self._level = self._fresh_copy()
        self._emit(LevelStarted(index=self._index, title=self._reference.title,
                                retry=True))

    def skip(self) -> None:
        """Give up on the active level and go to the next one."""
        if self.finished:
            return
        self._emit(LevelSkipped(index=self._index, title=self._reference.title))
        self._advance()
        self._settle()

    # ── internal ────────────────────────────────────────────────────

    def _settle(self) -> None:
        """Move past the active level for as long as it is solved.

        Levels that are already solved when loaded (no targets, or every
        crate starting on a target) are passed through with 0 steps.
        """
        while not self.finished and self._level.is_completed():
            self.solved.add(self._index)
            self._emit(LevelCompleted(
                index=self._index,
                title=self._level.title,
                steps=self._level.steps,
                pushes=self._level.pushes,
            ))
            self._advance()

    def _advance(self) -> None:
        nxt = self._index + 1
        if nxt >= len(self.collection):
            self.finished = True
            print(f"[SESSION] Collection finished — solved "
                  f"{len(self.solved)}/{self.total}")
            self._emit(CollectionFinished(total=self.total, solved=len(self.solved)))
            return
        self._index = nxt
        self._reference = self.collection[nxt]
        self._level = self._fresh_copy()
        self._emit(LevelStarted(index=nxt, title=self._reference.title))

    def _fresh_copy(self) -> Level:
        level = self._reference.copy()
        level.undo_limit = self.undo_limit
        return level

    def _emit(self, event) -> None:
        if self.bus is not None:
            self.bus.emit(event)
