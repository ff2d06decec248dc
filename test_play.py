"""test_play.py — PlayScene wiring, overlays and the event bus.

Drives the scene with synthetic key events and a stub app (no window),
checking that key presses reach the session, that overlays take over
input while open and that solved levels are written to the progress
file.

Run:  python test_play.py     (or: python -m pytest test_play.py)
"""
from __future__ import annotations
import os, sys, tempfile, traceback

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame

from core import save as progress
from core import tuning
from core.events import EventBus, LevelCompleted, LevelStarted
from logic.input_manager import InputContext
from logic.level import Level
from logic.slc import LevelCollection
from scenes.play_scene import PlayScene
from ui.commands import CloseModal, QuitGame, RestartCollection
from ui.overlays import CollectionCompleteModal, HelpModal
from ui.painter import Painter
from ui.tileset import Tileset, TilesetSelector

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


CORRIDOR = "#######\n#@ $ .#\n#######"


class StubApp:
    """Just enough of ``core.app.App`` for the scene."""

    def __init__(self):
        self.running = True
        self.size = (400, 300)

    def quit(self):
        self.running = False


def key(k: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k, mod=0)


def make_scene(n: int = 2, **kw) -> PlayScene:
    tuning.clear()
    coll = LevelCollection(
        title="Test",
        levels=[Level.from_text(CORRIDOR, title=f"L{i + 1}") for i in range(n)],
    )
    return PlayScene(coll, **kw)


def press(scene: PlayScene, app: StubApp, *keys: int) -> None:
    """Feed one frame's worth of key presses, then update."""
    for k in keys:
        scene.handle_event(key(k), app)
    scene.update(1 / 60, app)


# ════════════════════════════════════════════════════════════════════════
#  Event bus
# ════════════════════════════════════════════════════════════════════════

def test_bus_fifo_and_chaining():
    print("\n=== Bus: order and chaining ===")
    bus = EventBus()
    seen = []
    bus.subscribe("LevelStarted", lambda ev: seen.append(("start", ev.index)))

    def chain(ev):
        seen.append(("done", ev.index))
        bus.emit(LevelStarted(index=ev.index + 1))

    bus.subscribe("LevelCompleted", chain)
    bus.emit(LevelStarted(index=0))
    bus.emit(LevelCompleted(index=0))
    assert bus.pending_count() == 2
    assert bus.drain() == 3
    assert seen == [("start", 0), ("done", 0), ("start", 1)]
    assert bus.stats() == {"LevelStarted": 2, "LevelCompleted": 1}
    ok("events drained FIFO; handler emits processed in the same drain")


def test_bus_handler_error_isolated():
    print("\n=== Bus: handler errors ===")
    bus = EventBus()
    seen = []

    def broken(ev):
        raise RuntimeError("boom")

    bus.subscribe("LevelStarted", broken)
    bus.subscribe("LevelStarted", seen.append)
    bus.emit(LevelStarted(index=0))
    bus.drain()
    assert len(seen) == 1
    ok("a failing handler doesn't stop the others")


# ════════════════════════════════════════════════════════════════════════
#  Overlays
# ════════════════════════════════════════════════════════════════════════

def test_help_modal_keys():
    print("\n=== Overlays: help ===")
    modal = HelpModal()
    assert modal.handle_event(key(pygame.K_F1)) == [CloseModal()]
    assert modal.handle_event(key(pygame.K_RETURN)) == [CloseModal()]
    assert modal.handle_event(key(pygame.K_ESCAPE)) == [QuitGame()]
    assert modal.handle_event(key(pygame.K_LEFT)) == []
    assert modal.handle_event(pygame.event.Event(pygame.QUIT)) == []
    ok("F1/Enter close, Esc quits, other keys ignored")


def test_complete_modal_keys():
    print("\n=== Overlays: collection complete ===")
    modal = CollectionCompleteModal("", total=3, solved=2)
    assert modal.title == "Collection"
    assert modal.handle_event(key(pygame.K_RETURN)) == [CloseModal(),
                                                        RestartCollection()]
    assert modal.handle_event(key(pygame.K_ESCAPE)) == [QuitGame()]
    modal.update(0.75)
    assert modal.elapsed == 0.75
    ok("Enter plays again, Esc quits")


# ════════════════════════════════════════════════════════════════════════
#  Scene
# ════════════════════════════════════════════════════════════════════════

def test_scene_moves_and_advances():
    print("\n=== Scene: play ===")
    app = StubApp()
    scene = make_scene()
    press(scene, app, pygame.K_RIGHT, pygame.K_RIGHT)
    assert scene.session.index == 0 and scene.session.level.steps == 2
    ok("arrow presses step the player")

    press(scene, app, pygame.K_u)
    assert scene.session.level.steps == 1
    press(scene, app, pygame.K_r)
    assert scene.session.level.steps == 0
    ok("U undoes, R retries")

    press(scene, app, pygame.K_d, pygame.K_d, pygame.K_d)
    assert scene.session.index == 1
    assert scene.bus.pending_count() == 0
    ok("solving moves on to the next level")

    press(scene, app, pygame.K_ESCAPE)
    assert not app.running
    ok("Esc quits")


def test_scene_help_blocks_moves():
    print("\n=== Scene: help overlay ===")
    app = StubApp()
    scene = make_scene()
    press(scene, app, pygame.K_F1)
    assert scene.modals.is_open and isinstance(scene.modals.active, HelpModal)
    assert scene.input.context == InputContext.GAMEPLAY

    press(scene, app, pygame.K_RIGHT)
    assert scene.input.context == InputContext.OVERLAY
    assert scene.session.level.steps == 0
    ok("moves ignored while help is open")

    press(scene, app, pygame.K_F1)
    assert not scene.modals.is_open
    press(scene, app, pygame.K_RIGHT)
    assert scene.session.level.steps == 1
    ok("closing help gives input back to the level")


def test_scene_collection_complete_and_restart():
    print("\n=== Scene: end of collection ===")
    app = StubApp()
    scene = make_scene()
    press(scene, app, pygame.K_n)
    press(scene, app, pygame.K_n)
    assert scene.session.finished
    assert isinstance(scene.modals.active, CollectionCompleteModal)
    assert scene.modals.active.solved == 0
    ok("skipping past the last level opens the banner")

    press(scene, app, pygame.K_RETURN)
    assert not scene.modals.is_open
    assert not scene.session.finished and scene.session.index == 0
    assert app.running
    ok("Enter starts the collection over")


def test_scene_records_progress():
    print("\n=== Scene: progress ===")
    app = StubApp()
    with tempfile.TemporaryDirectory() as d:
        scene = make_scene(progress_key="test.slc", saves_dir=d)
        press(scene, app, pygame.K_RIGHT, pygame.K_RIGHT, pygame.K_RIGHT)
        assert progress.solved_levels("test.slc", d) == {0: 3}
        ok("solved level written to the progress file")


def test_scene_draw():
    print("\n=== Scene: draw ===")
    app = StubApp()
    scene = make_scene()
    sheet = Tileset(None, 101, 171, 83, 40)
    scene.painter = Painter(app.size, TilesetSelector(sheet, sheet))
    screen = pygame.Surface(app.size, 0, 32)
    scene.draw(screen, app)
    assert tuple(screen.get_at((2, 298)))[:3] == (20, 20, 20)
    ok("scene draws the level and status bar")


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
