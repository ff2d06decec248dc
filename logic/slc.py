"""logic/slc.py — SLC level collection loader.

SLC is the XML format most Sokoban collections are distributed in::

    <SokobanLevels>
      <Title>Microban</Title>
      <Description>...</Description>
      <LevelCollection Copyright="David W. Skinner">
        <Level Id="1" Width="6" Height="7">
          <L>####</L>
          <L># .#</L>
          ...
        </Level>
      </LevelCollection>
    </SokobanLevels>

Each ``<Level>`` becomes a ``Level`` titled by its ``Id``; its ``<L>``
rows are joined with newlines in document order.  Tags are matched by
local name so namespaced files load the same way.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator
import xml.etree.ElementTree as ET

from core.errors import CollectionError, LevelParseError
from logic.level import Level


@dataclass
class LevelCollection:
    """An ordered set of levels plus the collection's metadata."""
    title: str = ""
    description: str = ""
    copyright: str = ""
    levels: list[Level] = field(default_factory=list)
    source: str = ""

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self) -> Iterator[Level]:
        return iter(self.levels)

    def __getitem__(self, index: int) -> Level:
        return self.levels[index]


def _local(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1] if "}" in tag else tag


def _child_text(elem: ET.Element, name: str) -> str:
    for child in elem:
        if _local(child.tag) == name:
            return (child.text or "").strip()
    return ""


def _level_text(elem: ET.Element) -> str:
    """Join the ``<L>`` rows of a ``<Level>`` element."""
    rows = []
    for child in elem:
        if _local(child.tag) == "L":
            rows.append(child.text or "")
    return "".join(row + "\n" for row in rows)


def parse_slc(data: str | bytes, source: str = "") -> LevelCollection:
    """Build a collection from SLC XML text.

    Raises ``CollectionError`` on malformed XML or when there are no
    levels, and ``LevelParseError`` (tagged with the level's title) when
    a level contains an unknown character.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise CollectionError(f"malformed XML: {exc}", source) from exc

    collection = LevelCollection(
        title=_child_text(root, "Title"),
        description=_child_text(root, "Description"),
        source=source,
    )

    for elem in root.iter():
        name = _local(elem.tag)
        if name == "LevelCollection" and not collection.copyright:
            collection.copyright = elem.get("Copyright", "")
        elif name == "Level":
            title = elem.get("Id", "")
            try:
                level = Level.from_text(_level_text(elem), title=title)
            except LevelParseError as exc:
                raise exc.with_title(title) from None
            collection.levels.append(level)

    if not collection.levels:
        raise CollectionError("no levels in collection", source)

    return collection


def load_slc_file(path: str | Path) -> LevelCollection:
    """Read and parse an ``.slc`` file."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise CollectionError(exc.strerror or str(exc), str(path)) from exc

    collection = parse_slc(data, source=str(path))
    print(f"[LEVELS] Loaded {len(collection)} levels from {path}"
          + (f" ({collection.title})" if collection.title else ""))
    return collection
