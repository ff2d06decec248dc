"""scenes/play_scene.py — The game itself.

Owns the session (level sequencing), the input manager, the painter and
the overlay stack.  Each frame:

  1. raw events → InputManager (or the open modal)
  2. intents → GameSession
  3. session events → handlers (logging, progress, overlays)
  4. Painter draws the working level, then any overlays on top
"""

from __future__ import annotations
from pathlib import Path
import pygame

from core.app import App
from core.constants import UNDO_LIMIT
from core.events import EventBus
from core.scene import Scene
from core import tuning
from logic.input_manager import InputManager, InputContext
from logic.session import GameSession
from logic.slc import LevelCollection
from scenes.play_helpers import (
    update_input_context, route_ui_event, process_gameplay_intents,
    subscribe_handlers,
)
from ui.modal import ModalStack
from ui.painter import Painter, load_font
from ui.tileset import load_selector


class PlayScene(Scene):
    def __init__(self, collection: LevelCollection, start: int = 0,
                 progress_key: str | None = None,
                 saves_dir: str | Path | None = None):
        self.collection = collection
        self.progress_key = progress_key
        self.saves_dir = saves_dir

        self.bus = EventBus()
        subscribe_handlers(self)
        self.session = GameSession(
            collection, self.bus, start=start,
            undo_limit=int(tuning.get("session", "undo_limit", UNDO_LIMIT)),
        )

        self.input = InputManager()
        self.modals = ModalStack()
        self.painter: Painter | None = None

    def on_enter(self, app: App):
        if self.painter is None:
            self.painter = Painter(app.size, load_selector(), load_font())
        self.bus.drain()

    # ── event handler ────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        update_input_context(self)
        self.input.feed(event)

        if event.type == pygame.KEYDOWN and self.modals.is_open:
            route_ui_event(self, event, app)

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        update_input_context(self)
        if self.input.context == InputContext.GAMEPLAY:
            process_gameplay_intents(self, app)
        elif self.input.just("reload_tuning"):
            tuning.reload()
        self.input.begin_frame()
        self.bus.drain()
        self.modals.update(dt)

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        self.painter.draw(surface, self.session.level)
        if self.modals.is_open:
            self.modals.draw(surface, app)
