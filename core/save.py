"""core/save.py — Progress persistence.

The progress file (JSON) remembers, per level collection, which levels
have been solved and the fewest steps it took::

    {
      "format_version": 1,
      "collections": {
        "microban.slc": {
          "title": "Microban",
          "solved": {"1": 33, "2": 18}
        }
      }
    }

Levels are keyed by their 1-based position in the collection rather
than by title; titles are not guaranteed to be unique.

The collection key is the file name of the ``.slc`` file.  Moving the
file to another directory keeps its progress.
"""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any

from core.constants import SAVES_DIR, PROGRESS_FILE


FORMAT_VERSION = 1


def get_progress_file(saves_dir: str | Path | None = None) -> Path:
    """Get the path of the progress file, creating its directory."""
    directory = Path(saves_dir) if saves_dir is not None else Path(SAVES_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / PROGRESS_FILE


def collection_key(path: str | Path) -> str:
    return Path(path).name


def load_progress(saves_dir: str | Path | None = None) -> dict[str, Any]:
    """Load the progress file.

    Returns an empty progress structure if the file doesn't exist or
    can't be read.
    """
    path = get_progress_file(saves_dir)
    empty: dict[str, Any] = {"format_version": FORMAT_VERSION, "collections": {}}
    if not path.exists():
        return empty

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as ex:
        print(f"[SAVE] Error loading progress file: {ex}")
        return empty

    if not isinstance(data, dict) or not isinstance(data.get("collections"), dict):
        print(f"[SAVE] Ignoring malformed progress file {path}")
        return empty
    return data


def save_progress(data: dict[str, Any], saves_dir: str | Path | None = None) -> Path:
    """Write *data* to the progress file.  Returns its path."""
    path = get_progress_file(saves_dir)
    data["format_version"] = FORMAT_VERSION
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
    return path


def record_solved(key: str, index: int, steps: int, *,
                  title: str = "",
                  saves_dir: str | Path | None = None) -> bool:
    """Record that level *index* (0-based) of collection *key* was solved.

    Keeps the lowest step count seen.  Returns True if this was a new
    best (or the first solve).
    """
    data = load_progress(saves_dir)
    entry = data["collections"].setdefault(key, {"title": title, "solved": {}})
    if title:
        entry["title"] = title
    solved = entry.setdefault("solved", {})

    slot = str(index + 1)
    best = solved.get(slot)
    if best is not None and best <= steps:
        return False

    solved[slot] = steps
    save_progress(data, saves_dir)
    print(f"[SAVE] {key} level {slot}: best {steps} steps")
    return True


def solved_levels(key: str, saves_dir: str | Path | None = None) -> dict[int, int]:
    """Return ``{index: best_steps}`` (0-based) for collection *key*."""
    data = load_progress(saves_dir)
    entry = data["collections"].get(key, {})
    out: dict[int, int] = {}
    for slot, steps in entry.get("solved", {}).items():
        try:
            out[int(slot) - 1] = int(steps)
        except (TypeError, ValueError):
            continue
    return out


def first_unsolved(key: str, total: int,
                   saves_dir: str | Path | None = None) -> int:
    """Index of the first level of *key* with no recorded solve.

    Returns 0 when every level has been solved, so a finished collection
    starts over from the beginning.
    """
    done = solved_levels(key, saves_dir)
    for i in range(total):
        if i not in done:
            return i
    return 0
