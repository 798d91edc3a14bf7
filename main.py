#!/usr/bin/env python3
"""glyphpad - A small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Navigate
    Ctrl-B/F/P/N, Ctrl-A/E: Emacs-style navigation
    Ctrl-S: Search (Esc cancels and returns to where you were)
    Ctrl-W: Save file
    Ctrl-Q: Quit (asks first if there are unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

from glyphpad.__main__ import main


if __name__ == "__main__":
    main()
