"""ui.modal — Abstract Modal base class and ModalStack manager.

Every overlay drawn on top of the level (help screen, collection
complete banner) is a ``Modal`` subclass.  ``ModalStack`` keeps them
layered and routes key presses to the topmost one; while any modal is
open the level doesn't receive input.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from ui.commands import UICommand


class Modal(ABC):
    """Base class for all overlays."""

    def on_open(self) -> None:
        """Called when this modal is pushed onto the stack."""

    def on_close(self) -> None:
        """Called when this modal is popped from the stack."""

    def update(self, dt: float) -> None:
        """Tick timers, animations, etc.  Called once per frame."""

    @abstractmethod
    def handle_event(self, event: pygame.event.Event) -> list[UICommand]:
        """Process one pygame event.

        Returns a (possibly empty) list of commands for the scene to
        execute.
        """

    @abstractmethod
    def draw(self, surface: pygame.Surface, app) -> None:
        """Render the modal onto *surface*."""


class ModalStack:
    """Ordered stack of ``Modal`` overlays.

    Draws go to every modal (bottom → top); events and updates go to
    the topmost only.
    """

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: list[Modal] = []

    @property
    def active(self) -> Modal | None:
        """The topmost modal, or *None* if the stack is empty."""
        return self._stack[-1] if self._stack else None

    @property
    def is_open(self) -> bool:
        return bool(self._stack)

    def __len__(self) -> int:
        return len(self._stack)

    def push(self, modal: Modal) -> None:
        self._stack.append(modal)
        modal.on_open()

    def pop(self) -> Modal | None:
        if not self._stack:
            return None
        modal = self._stack.pop()
        modal.on_close()
        return modal

    def clear(self) -> None:
        while self._stack:
            self.pop()

    def handle_event(self, event: pygame.event.Event) -> list:
        if self._stack:
            return self._stack[-1].handle_event(event)
        return []

    def update(self, dt: float) -> None:
        if self._stack:
            self._stack[-1].update(dt)

    def draw(self, surface: pygame.Surface, app) -> None:
        for modal in self._stack:
            modal.draw(surface, app)
