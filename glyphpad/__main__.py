"""glyphpad CLI entry point.

Allows running via `python -m glyphpad` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys


def main() -> None:
    # Zero or one positional argument: the file to open
    args = sys.argv[1:]

    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    try:
        editor.run()
    except OSError as e:
        print(f"glyphpad: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
