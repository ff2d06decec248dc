"""
main.py — Bootstrap

1. Parse the command line
2. Load tuning constants
3. Load the level collection
4. Create the app and push the play scene
5. Run

    python main.py levels.slc [--width=N] [--height=N] [--fullscreen]
"""

from __future__ import annotations
import argparse
import sys

from core import tuning
from core import constants as C
from core import save as progress
from core.errors import SokobanError
from logic.slc import load_slc_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sokoban",
        description="Push every crate onto a target.  "
                    "Arrows move, U undoes, R retries, N skips, F1 shows help.",
    )
    parser.add_argument("slc_file", help="level collection in SLC (XML) format")
    parser.add_argument("--width", type=int, default=None,
                        help=f"window width in pixels (default {C.WINDOW_WIDTH})")
    parser.add_argument("--height", type=int, default=None,
                        help=f"window height in pixels (default {C.WINDOW_HEIGHT})")
    parser.add_argument("--fullscreen", action="store_true",
                        help="start in fullscreen mode")
    parser.add_argument("--start", type=int, default=1, metavar="K",
                        help="1-based index of the first level to play")
    parser.add_argument("--resume", action="store_true",
                        help="start at the first level not solved yet")
    parser.add_argument("--tuning", default=None, metavar="PATH",
                        help="tuning file (default data/tuning.toml)")
    parser.add_argument("--saves", default=None, metavar="DIR",
                        help=f"directory for the progress file (default {C.SAVES_DIR}/)")
    return parser


def resolve_start(args: argparse.Namespace, total: int) -> int:
    """0-based index of the first level to play."""
    if args.resume:
        key = progress.collection_key(args.slc_file)
        return progress.first_unsolved(key, total, args.saves)
    return max(0, min(args.start - 1, total - 1))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    tuning.load(args.tuning)

    try:
        collection = load_slc_file(args.slc_file)
    except SokobanError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    width = (args.width if args.width is not None
             else int(tuning.get("window", "width", C.WINDOW_WIDTH)))
    height = (args.height if args.height is not None
              else int(tuning.get("window", "height", C.WINDOW_HEIGHT)))
    if width <= 0 or height <= 0:
        print("error: window size must be positive", file=sys.stderr)
        return 1

    # Imported late so --help and load errors don't need a display
    from core.app import App
    from scenes.play_scene import PlayScene

    app = App(
        title=tuning.get("window", "title", C.WINDOW_TITLE),
        width=width,
        height=height,
        fullscreen=args.fullscreen,
        fps=int(tuning.get("window", "fps", C.FPS)),
    )
    app.push_scene(PlayScene(
        collection,
        start=resolve_start(args, len(collection)),
        progress_key=progress.collection_key(args.slc_file),
        saves_dir=args.saves,
    ))
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
