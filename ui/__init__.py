"""ui — Rendering and overlay package.

``Painter`` draws the level and status bar using a ``Tileset``.
``ModalStack`` manages layered overlays (help, collection complete);
each overlay is a ``Modal`` subclass with its own input / draw.
"""

from ui.modal import Modal, ModalStack
from ui.commands import CloseModal, QuitGame, RestartCollection, UICommand
from ui.overlays import HelpModal, CollectionCompleteModal
from ui.tileset import Tile, Tileset, TilesetSelector
from ui.painter import Painter

__all__ = [
    "Modal", "ModalStack",
    "CloseModal", "QuitGame", "RestartCollection", "UICommand",
    "HelpModal", "CollectionCompleteModal",
    "Tile", "Tileset", "TilesetSelector", "Painter",
]
