"""core/errors.py — Exception hierarchy.

Everything the loaders raise derives from ``SokobanError`` so the CLI
can catch a single type and report it::

    try:
        collection = load_slc_file(path)
    except SokobanError as exc:
        print(f"error: {exc}", file=sys.stderr)
"""

from __future__ import annotations


class SokobanError(Exception):
    """Base class for all game errors."""


class LevelParseError(SokobanError):
    """A level description contained something the parser can't read."""

    def __init__(self, char: str | None, row: int, col: int,
                 title: str = "", reason: str = ""):
        self.char = char
        self.row = row
        self.col = col
        self.title = title
        self.reason = reason
        super().__init__(str(self))

    def with_title(self, title: str) -> "LevelParseError":
        """Return a copy tagged with the level it came from."""
        return LevelParseError(self.char, self.row, self.col, title, self.reason)

    def __str__(self) -> str:
        if self.reason:
            msg = self.reason
        else:
            msg = (f"invalid character `{self.char}' at row {self.row}, "
                   f"column {self.col}")
        if self.title:
            msg = f"level {self.title!r}: {msg}"
        return msg


class CollectionError(SokobanError):
    """A level collection file could not be read or has no levels."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
