"""ui.helpers — Shared drawing utilities for overlay panels."""

from __future__ import annotations
import pygame


def draw_overlay(surface: pygame.Surface, alpha: int = 200) -> None:
    """Full-screen semi-transparent dark overlay."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))


def draw_title_bar(
    surface: pygame.Surface, app,
    x: int, y: int, w: int, text: str,
) -> None:
    """Draw a 30 px title bar at the top of a panel."""
    pygame.draw.rect(surface, (50, 40, 20), (x, y, w, 30))
    app.draw_text(surface, text, x + 12, y + 7,
                  (255, 192, 0), font=app.font_lg)


def draw_panel(surface: pygame.Surface, app, w: int, h: int,
               title: str) -> pygame.Rect:
    """Centred panel with a title bar.  Returns the panel rect."""
    sw, sh = surface.get_size()
    rect = pygame.Rect((sw - w) // 2, (sh - h) // 2, w, h)
    pygame.draw.rect(surface, (24, 24, 28), rect)
    pygame.draw.rect(surface, (90, 80, 50), rect, 1)
    draw_title_bar(surface, app, rect.x, rect.y, rect.width, title)
    return rect


ROW_H = 22  # pixel height of one text row


def draw_key_rows(surface: pygame.Surface, app, x: int, y: int,
                  rows: list[tuple[str, str]]) -> int:
    """Draw ``(key, description)`` rows.  Returns the y below the last row."""
    for key, desc in rows:
        app.draw_text(surface, key, x, y, (255, 255, 100), font=app.font)
        app.draw_text(surface, desc, x + 130, y, (220, 220, 220), font=app.font)
        y += ROW_H
    return y
