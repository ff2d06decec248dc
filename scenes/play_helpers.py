"""scenes/play_helpers.py — Helper functions for PlayScene.

Pulled out of the scene class so the scene itself stays a thin
dispatcher.  Every function takes the scene as its first argument.
"""

from __future__ import annotations
import pygame

from core import tuning
from core import save as progress
from core.events import LevelStarted, LevelCompleted, CollectionFinished
from logic.input_manager import InputContext
from logic.session import GameSession
from ui.commands import CloseModal, QuitGame, RestartCollection
from ui.overlays import HelpModal, CollectionCompleteModal


# ── Input context ────────────────────────────────────────────────────

def update_input_context(scene):
    """Sync InputManager context with scene state."""
    if scene.modals.is_open:
        scene.input.context = InputContext.OVERLAY
    else:
        scene.input.context = InputContext.GAMEPLAY


# ── UI command routing ───────────────────────────────────────────────

def route_ui_event(scene, event: pygame.event.Event, app):
    """Delegate event to the modal stack and process returned commands."""
    for cmd in scene.modals.handle_event(event):
        if isinstance(cmd, CloseModal):
            scene.modals.pop()
        elif isinstance(cmd, QuitGame):
            app.quit()
        elif isinstance(cmd, RestartCollection):
            restart_collection(scene)


# ── Gameplay intents ─────────────────────────────────────────────────

def process_gameplay_intents(scene, app):
    """Apply this frame's gameplay intents to the session."""
    inp = scene.input

    if inp.just("quit"):
        app.quit()
        return
    if inp.just("reload_tuning"):
        tuning.reload()
    if inp.just("help"):
        scene.modals.push(HelpModal())
        return

    session = scene.session
    for direction in inp.moves():
        session.step(direction)
        if session.finished:
            return

    if inp.just("undo"):
        session.undo()
    if inp.just("retry"):
        session.retry()
    if inp.just("next_level"):
        session.skip()


def restart_collection(scene):
    """Throw the session away and start again from level 1."""
    scene.bus.clear()
    scene.session = GameSession(scene.collection, scene.bus, start=0,
                                undo_limit=scene.session.undo_limit)


# ── Event handlers ───────────────────────────────────────────────────

def subscribe_handlers(scene):
    """Wire session events to logging, progress saving and overlays."""
    bus = scene.bus

    def on_started(ev: LevelStarted):
        verb = "Retrying" if ev.retry else "Starting"
        print(f"[SESSION] {verb} level {ev.index + 1}/{len(scene.collection)}"
              + (f" ({ev.title})" if ev.title else ""))

    def on_completed(ev: LevelCompleted):
        print(f"[SESSION] Solved level {ev.index + 1} in {ev.steps} steps, "
              f"{ev.pushes} pushes")
        if scene.progress_key and ev.steps > 0:
            progress.record_solved(scene.progress_key, ev.index, ev.steps,
                                   title=scene.collection.title,
                                   saves_dir=scene.saves_dir)

    def on_finished(ev: CollectionFinished):
        scene.modals.push(CollectionCompleteModal(
            scene.collection.title, ev.total, ev.solved))

    bus.subscribe("LevelStarted", on_started)
    bus.subscribe("LevelCompleted", on_completed)
    bus.subscribe("CollectionFinished", on_finished)
