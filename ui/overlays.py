"""ui.overlays — Help screen and collection-complete banner."""

from __future__ import annotations
import pygame

from ui.commands import CloseModal, QuitGame, RestartCollection
from ui.helpers import draw_overlay, draw_panel, draw_key_rows
from ui.modal import Modal


HELP_ROWS: list[tuple[str, str]] = [
    ("Arrows / WASD", "move, pushing crates ahead"),
    ("U / Backspace", "undo the last move"),
    ("R", "retry the level"),
    ("N", "skip to the next level"),
    ("F5", "reload tuning"),
    ("F1", "show / hide this help"),
    ("Esc", "quit"),
]


class HelpModal(Modal):
    """Key bindings.  F1, Enter or Space closes it."""

    def handle_event(self, event: pygame.event.Event) -> list:
        if event.type != pygame.KEYDOWN:
            return []
        if event.key == pygame.K_ESCAPE:
            return [QuitGame()]
        if event.key in (pygame.K_F1, pygame.K_RETURN, pygame.K_SPACE):
            return [CloseModal()]
        return []

    def draw(self, surface: pygame.Surface, app) -> None:
        draw_overlay(surface, 160)
        h = 30 + 16 + len(HELP_ROWS) * 22 + 16
        rect = draw_panel(surface, app, 440, h, "Controls")
        draw_key_rows(surface, app, rect.x + 16, rect.y + 46, HELP_ROWS)


class CollectionCompleteModal(Modal):
    """Shown once every level has been played.

    Enter starts the collection again, Escape quits.
    """

    def __init__(self, title: str, total: int, solved: int):
        self.title = title or "Collection"
        self.total = total
        self.solved = solved
        self.elapsed = 0.0

    def update(self, dt: float) -> None:
        self.elapsed += dt

    def handle_event(self, event: pygame.event.Event) -> list:
        if event.type != pygame.KEYDOWN:
            return []
        if event.key == pygame.K_ESCAPE:
            return [QuitGame()]
        if event.key in (pygame.K_RETURN, pygame.K_SPACE):
            return [CloseModal(), RestartCollection()]
        return []

    def draw(self, surface: pygame.Surface, app) -> None:
        draw_overlay(surface, 200)
        rect = draw_panel(surface, app, 440, 140, f"{self.title} complete")
        app.draw_text(surface, f"Solved {self.solved} of {self.total} levels",
                      rect.x + 16, rect.y + 50, (220, 220, 220), font=app.font_lg)
        # Blink the prompt
        if int(self.elapsed * 2) % 2 == 0:
            app.draw_text(surface, "Enter = play again    Esc = quit",
                          rect.x + 16, rect.y + 96, (255, 192, 0), font=app.font)
