"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and game actions.  The scene feeds in
raw events; the manager maps them to *intents* based on the current
**input context** (gameplay or overlay).

Other code reads the intents — it never touches raw keycodes.

Usage (in play_scene):

    self.input = InputManager()
    # each frame:
    self.input.begin_frame()
    for event in events:
        self.input.feed(event)

    if self.input.just("retry"):        # discrete press
        ...
    for direction in self.input.moves():  # arrow presses, in order
        ...

Sokoban moves are discrete: one key press is one step, so movement is
read from presses (in the order they arrived) rather than from held
keys.
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from logic.level import Direction


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    GAMEPLAY = auto()   # moving around a level
    OVERLAY  = auto()   # help / collection-complete modal open


# ── Intent names ────────────────────────────────────────────────────
# Gameplay:  move_up  move_down  move_left  move_right
#            retry  next_level  undo  help  quit  reload_tuning
# Overlay:   reload_tuning


# ── Default key bindings ────────────────────────────────────────────

# Each binding is  (pygame key constant, modifier mask or 0)

_GAMEPLAY_BINDS: dict[str, list[tuple[int, int]]] = {
    "move_up":      [(pygame.K_UP, 0), (pygame.K_w, 0)],
    "move_down":    [(pygame.K_DOWN, 0), (pygame.K_s, 0)],
    "move_left":    [(pygame.K_LEFT, 0), (pygame.K_a, 0)],
    "move_right":   [(pygame.K_RIGHT, 0), (pygame.K_d, 0)],
    "retry":        [(pygame.K_r, 0)],
    "next_level":   [(pygame.K_n, 0)],
    "undo":         [(pygame.K_u, 0), (pygame.K_BACKSPACE, 0),
                     (pygame.K_z, pygame.KMOD_CTRL)],
    "help":         [(pygame.K_F1, 0)],
    "reload_tuning":[(pygame.K_F5, 0)],
    "quit":         [(pygame.K_ESCAPE, 0)],
}

_OVERLAY_BINDS: dict[str, list[tuple[int, int]]] = {
    # The open modal reads raw key events itself; only globals live here
    "reload_tuning":[(pygame.K_F5, 0)],
}

_MOVE_INTENTS: dict[str, Direction] = {
    "move_up":    Direction.UP,
    "move_down":  Direction.DOWN,
    "move_left":  Direction.LEFT,
    "move_right": Direction.RIGHT,
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    Call ``begin_frame()`` before processing events and ``feed(event)``
    for each pygame event.  Then use ``just(intent)`` for discrete
    presses and ``moves()`` for the ordered list of steps.
    """

    def __init__(self):
        self.context: InputContext = InputContext.GAMEPLAY
        # Intents pressed *this frame* (rising edge)
        self._pressed: set[str] = set()
        # Move presses this frame, in arrival order
        self._moves: list[Direction] = []

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        """Call at the start of each frame before feeding events."""
        self._pressed.clear()
        self._moves.clear()

    def feed(self, event: pygame.event.Event):
        """Feed a raw pygame event.  Maps it to intents based on context."""
        if event.type != pygame.KEYDOWN:
            return

        mods = getattr(event, "mod", 0)
        for intent, key_list in self._active_binds().items():
            for key, req_mod in key_list:
                if event.key != key:
                    continue
                if not self._mods_match(mods, req_mod):
                    continue
                self._pressed.add(intent)
                if intent in _MOVE_INTENTS:
                    self._moves.append(_MOVE_INTENTS[intent])
                break

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """True if the intent was triggered this frame (rising edge)."""
        return intent in self._pressed

    def moves(self) -> list[Direction]:
        """Steps requested this frame, oldest first."""
        return list(self._moves)

    def any_pressed(self) -> set[str]:
        """Return all intents pressed this frame."""
        return set(self._pressed)

    # ── internal ────────────────────────────────────────────────

    @staticmethod
    def _mods_match(mods: int, req_mod: int) -> bool:
        """Plain binds don't fire while Ctrl is held (Ctrl+S isn't S)."""
        if req_mod == 0:
            return not mods & pygame.KMOD_CTRL
        return bool(mods & req_mod)

    def _active_binds(self) -> dict[str, list[tuple[int, int]]]:
        if self.context == InputContext.GAMEPLAY:
            return _GAMEPLAY_BINDS
        elif self.context == InputContext.OVERLAY:
            return _OVERLAY_BINDS
        return {}
