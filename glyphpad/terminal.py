"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from collections import deque
from typing import Optional

import blessed

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    All output is buffered on stdout and only reaches the screen on
    ``flush()``. Key reads block until curtsies delivers an event.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._pending_keys: deque[str] = deque()

    def setup(self):
        """Enter fullscreen mode and put the keyboard in raw mode.

        Raises:
            OSError: curtsies could not take over the keyboard.
        """
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            curtsies_input = Input(keynames='curtsies')
            try:
                curtsies_input.__enter__()
            except Exception as e:
                raise OSError(f"cannot read keys from the terminal: {e}") from e
            self._curtsies_input = curtsies_input
        logger.debug("Terminal set up (%dx%d)", self.width, self.height)

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            curtsies_input = self._curtsies_input
            self._curtsies_input = None
            curtsies_input.__exit__(None, None, None)
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        logger.debug("Terminal restored")

    # --- Drawing primitives ---

    def write(self, text: str):
        print(text, end='')

    def clear_line(self):
        """Clear from the cursor to the end of the current line."""
        print(self.term.clear_eol, end='')

    def move_cursor(self, y: int, x: int):
        """Move the cursor to absolute screen coordinates."""
        print(self.term.move_yx(y, x), end='')

    def hide_cursor(self):
        print(self.term.hide_cursor, end='')

    def show_cursor(self):
        print(self.term.normal_cursor, end='')

    def status_style(self, text: str) -> str:
        """Wrap ``text`` in reverse video for the status bar."""
        return self.term.reverse + text + self.term.normal

    def flush(self):
        """Push buffered output to the screen. Errors propagate."""
        sys.stdout.flush()

    # --- Input ---

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Paste events are split into their individual keys and handed out one
        per call.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if the timeout expired.

        Raises:
            OSError: the terminal has not been set up for input.
        """
        if self._pending_keys:
            return self._pending_keys.popleft()
        if self._curtsies_input is None:
            raise OSError("terminal input is not active")
        if timeout is not None:
            # Use select on stdin to implement timeouts
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._curtsies_input)  # blocks
        events = getattr(evt, 'events', None)
        if events is not None:
            self._pending_keys.extend(str(e) for e in events)
            return self._pending_keys.popleft() if self._pending_keys else None
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows, including the status and message bars."""
        return self.term.height
