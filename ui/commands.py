"""ui.commands — Command objects emitted by modals.

Modals return these instead of directly mutating game state that lives
outside their scope.  The scene reads the list and applies each effect.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class CloseModal:
    """Pop the top modal off the stack."""


@dataclass(frozen=True, slots=True)
class QuitGame:
    """Leave the game."""


@dataclass(frozen=True, slots=True)
class RestartCollection:
    """Start the collection over from its first level."""


# Union of every command type — extend as new commands are added.
UICommand = Union[CloseModal, QuitGame, RestartCollection]
