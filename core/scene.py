"""
core/scene.py — Scene interface

Every screen in the game is a Scene. The app holds a stack of them.
Only the top scene gets update/draw calls. Scenes below stay frozen.

    class MyScene(Scene):
        def handle_event(self, event, app):
            # one raw pygame event
            ...

        def update(self, dt, app):
            # dt is seconds since last frame
            ...

        def draw(self, surface, app):
            # draw to the virtual surface
            ...
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""

    def handle_event(self, event: pygame.event.Event, app: App):
        """Process a single pygame event."""

    def update(self, dt: float, app: App):
        """Advance the scene. dt is seconds."""

    def draw(self, surface: pygame.Surface, app: App):
        """Draw to the screen surface."""
