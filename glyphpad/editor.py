"""Main editor controller: key dispatch, prompts, save/search/quit flows."""

import errno
import logging
import time
from enum import Enum
from typing import Callable, Optional, Union

import grapheme

from .commands import CommandRegistry
from .constants import EditorConfig, EditorConstants
from .document import Document, Position
from .keyboard import KeyboardHandler, KeyEvent
from .prompt import (
    ConfirmPrompt,
    LinePrompt,
    PromptOutcome,
    PromptPurpose,
    StatusMessage,
)
from .terminal import TerminalInterface
from .version import get_version_string
from .viewport import Movement, Viewport

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = "running"
    QUIT_PENDING = "quit_pending"
    TERMINATED = "terminated"


class Editor:
    """Text editor session.

    Owns the document, the cursor/viewport controller and the status message.
    Screen I/O goes through the terminal interface; everything else is plain
    state so the session can be driven key by key in tests.
    """

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 config: Optional[EditorConfig] = None,
                 clock: Optional[Callable[[], float]] = None):
        """Initialize the editor components."""
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self._clock = clock or time.monotonic
        self.document = Document(tab_width=self.config.tab_width)
        self.viewport = Viewport()
        self.state = SessionState.RUNNING
        self.prompt: Optional[Union[LinePrompt, ConfirmPrompt]] = None
        self.status = self._status(EditorConstants.HELP_MESSAGE)

    @property
    def cursor(self) -> Position:
        return self.viewport.cursor

    def _status(self, text: str) -> StatusMessage:
        return StatusMessage(text, self._clock())

    def set_status(self, text: str) -> None:
        self.status = self._status(text)

    # --- Layout ---

    def text_area_size(self) -> tuple[int, int]:
        """Width and height of the document area, excluding the bottom bars."""
        width = max(0, self.terminal.width)
        height = max(0, self.terminal.height - self.config.reserved_rows)
        return width, height

    def scroll(self) -> None:
        width, height = self.text_area_size()
        self.viewport.scroll(width, height)

    # --- File handling ---

    def load_file(self, filename: str) -> bool:
        """Load a file into the editor.

        Failures leave an empty, unnamed document and report the error in
        the status message.

        Returns:
            True if the file was loaded
        """
        try:
            self.document = Document.open(filename, tab_width=self.config.tab_width)
        except OSError as e:
            logger.warning("Could not open %s: %s", filename, e)
            self.document = Document(tab_width=self.config.tab_width)
            self.set_status(EditorConstants.OPEN_FAILED_MESSAGE.format(filename))
            return False
        self.viewport = Viewport()
        return True

    def save(self) -> bool:
        """Save the document, asking for a filename if it has none.

        Returns:
            True if the document was written
        """
        if not self.document.filename:
            new_name = self.prompt_line(EditorConstants.SAVE_AS_LABEL, PromptPurpose.SAVE_AS)
            if new_name is None:
                self.set_status("Save aborted.")
                return False
            self.document.filename = new_name

        filename = self.document.filename
        try:
            self.document.save()
        except OSError as e:
            logger.warning("Could not save %s: %s", filename, e)
            if e.errno == errno.ENOSPC:
                self.set_status(f"ERROR: Failed to save {filename}: no space left on device")
            else:
                reason = e.strerror or str(e)
                self.set_status(f"ERROR: Failed to save {filename}: {reason}")
            return False
        self.set_status(f"Successfully saved {filename}")
        return True

    # --- Editing ---

    def insert_char(self, c: str) -> bool:
        """Insert a character at the cursor and move past it."""
        if c == '\n':
            return self.insert_newline()
        at = self.viewport.clamp_to(self.document)
        before = len(self.document.row_or_empty(at.y))
        self.document.insert(at, c)
        after = len(self.document.row_or_empty(at.y))
        # Tabs advance by the tab width; combining marks don't advance at all
        self.viewport.cursor = Position(at.x + (after - before), at.y)
        return True

    def insert_newline(self) -> bool:
        at = self.viewport.clamp_to(self.document)
        self.document.insert_newline(at)
        self.viewport.cursor = Position(0, at.y + 1)
        return True

    def delete_backward(self) -> bool:
        at = self.viewport.clamp_to(self.document)
        if at.x > 0:
            new_x = self.document.row_or_empty(at.y).previous_column(at.x)
            new_cursor = Position(new_x, at.y)
        elif at.y > 0:
            new_cursor = Position(len(self.document.row_or_empty(at.y - 1)), at.y - 1)
        else:
            return False
        changed = self.document.delete_backward(at)
        self.viewport.cursor = new_cursor
        return changed

    def delete_forward(self) -> bool:
        at = self.viewport.clamp_to(self.document)
        return self.document.delete_forward(at)

    def move_cursor(self, movement: Movement) -> None:
        width, height = self.text_area_size()
        self.viewport.move_cursor(movement, self.document, width, height)

    # --- Prompts ---

    def prompt_line(self, label: str, purpose: PromptPurpose) -> Optional[str]:
        """Read a line of input in the message bar.

        After every keystroke the purpose-specific side effect runs. The
        cursor and offset are restored when the prompt is cancelled; a
        committed prompt keeps whatever the side effect did.

        Returns:
            The entered text, or None when cancelled or left empty.
        """
        saved_cursor = Position(self.viewport.cursor.x, self.viewport.cursor.y)
        saved_offset = Position(self.viewport.offset.x, self.viewport.offset.y)
        prompt = LinePrompt(label, purpose)
        self.prompt = prompt
        try:
            while prompt.outcome == PromptOutcome.PENDING:
                self.refresh_screen()
                key_event = self._read_key()
                if prompt.handle_key(key_event) == PromptOutcome.PENDING:
                    self._on_prompt_keystroke(prompt)
        finally:
            self.prompt = None

        if prompt.outcome == PromptOutcome.CANCELLED:
            self.viewport.cursor = saved_cursor
            self.viewport.offset = saved_offset
        self.set_status("")
        return prompt.value()

    def prompt_confirm(self, label: str) -> bool:
        """Ask a yes/no question; anything but 'y' counts as no."""
        prompt = ConfirmPrompt(label, suffix=EditorConstants.CONFIRM_SUFFIX)
        self.prompt = prompt
        try:
            while prompt.outcome == PromptOutcome.PENDING:
                self.refresh_screen()
                prompt.handle_key(self._read_key())
        finally:
            self.prompt = None
        self.set_status("")
        return prompt.answer

    def _on_prompt_keystroke(self, prompt: LinePrompt) -> None:
        """Apply the live side effect for the prompt's purpose."""
        if prompt.purpose == PromptPurpose.INCREMENTAL_SEARCH:
            position = self.document.find(prompt.buffer)
            if position is not None:
                self.viewport.cursor = position
                self.scroll()

    def _read_key(self) -> KeyEvent:
        """Block until a key arrives. Read failures propagate."""
        while True:
            key_event = self.keyboard.get_key_event(timeout=None)
            if key_event is not None:
                return key_event

    # --- Session flows ---

    def search(self) -> None:
        """Incremental search.

        The cursor only stays moved when the committed query matches; a
        cancelled, empty or unmatched query returns it to where it was.
        """
        saved_cursor = Position(self.viewport.cursor.x, self.viewport.cursor.y)
        saved_offset = Position(self.viewport.offset.x, self.viewport.offset.y)
        query = self.prompt_line(EditorConstants.SEARCH_LABEL, PromptPurpose.INCREMENTAL_SEARCH)
        position = self.document.find(query) if query is not None else None
        if position is None:
            self.viewport.cursor = saved_cursor
            self.viewport.offset = saved_offset
            if query is not None:
                self.set_status(f"Not found: {query}")
        else:
            self.viewport.cursor = position
        self.scroll()

    def request_quit(self) -> None:
        """Quit, asking first when there are unsaved changes."""
        self.state = SessionState.QUIT_PENDING
        if not self.document.is_dirty():
            self.state = SessionState.TERMINATED
        elif self.prompt_confirm(EditorConstants.QUIT_CONFIRM_LABEL):
            self.state = SessionState.TERMINATED
        else:
            self.state = SessionState.RUNNING

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Dispatch one key and keep the cursor visible.

        Returns:
            True if the document was modified
        """
        modified = self.command_registry.execute(self, key_event)
        self.scroll()
        return modified

    def process_keypress(self) -> None:
        self.handle_key_event(self._read_key())

    def run(self) -> None:
        """Run the main editor loop.

        Terminal failures end the loop; the terminal is restored before the
        error propagates.
        """
        try:
            self.terminal.setup()
            self.refresh_screen()
            while self.state != SessionState.TERMINATED:
                self.process_keypress()
                self.refresh_screen()
        finally:
            self.terminal.cleanup()

    # --- Drawing ---

    def refresh_screen(self) -> None:
        """Redraw the whole screen and flush it."""
        term = self.terminal
        term.hide_cursor()
        term.move_cursor(0, 0)
        if self.state == SessionState.TERMINATED:
            term.move_cursor(max(0, term.height - 1), 0)
            term.clear_line()
            term.write(EditorConstants.GOODBYE_MESSAGE)
        else:
            self._draw_rows()
            self._draw_status_bar()
            self._draw_message_bar()
            term.move_cursor(*self._screen_cursor())
        term.show_cursor()
        term.flush()

    def _screen_cursor(self) -> tuple[int, int]:
        """(y, x) of the hardware cursor."""
        if self.prompt is not None:
            message_row = max(0, self.terminal.height - 1)
            return message_row, grapheme.length(self.prompt.display_text())
        position = self.viewport.screen_position()
        return position.y, position.x

    def _draw_rows(self) -> None:
        term = self.terminal
        width, height = self.text_area_size()
        offset = self.viewport.offset
        for screen_row in range(height):
            term.move_cursor(screen_row, 0)
            term.clear_line()
            row = self.document.row(offset.y + screen_row)
            if row is not None:
                term.write(row.render(offset.x, offset.x + width))
            elif self.document.is_empty() and screen_row == self.terminal.height // 3:
                term.write(self._welcome_message(width))
            else:
                term.write(EditorConstants.EMPTY_ROW_MARKER)

    def _welcome_message(self, width: int) -> str:
        message = get_version_string()
        padding = max(0, width - len(message)) // 2
        spaces = " " * max(0, padding - 1)
        return f"{EditorConstants.EMPTY_ROW_MARKER}{spaces}{message}"[:width]

    def status_bar_text(self, width: int) -> str:
        """Dirty marker, filename and line count, with the cursor line on the right."""
        if self.document.filename:
            filename = grapheme.slice(self.document.filename, 0, EditorConstants.FILENAME_DISPLAY_LIMIT)
        else:
            filename = EditorConstants.NO_NAME
        marker = "* " if self.document.is_dirty() else "  "
        total = len(self.document)
        status = f"{marker}{filename} - {total}"
        line_indicator = f"{self.viewport.cursor.y + 1}/{total}"
        padding = max(1, width - grapheme.length(status) - len(line_indicator))
        return grapheme.slice(f"{status}{' ' * padding}{line_indicator}", 0, width)

    def message_bar_text(self) -> str:
        if self.prompt is not None:
            return self.prompt.display_text()
        return self.status.visible_text(self._clock(), self.config.status_message_timeout)

    def _draw_status_bar(self) -> None:
        term = self.terminal
        width, height = self.text_area_size()
        term.move_cursor(height, 0)
        term.clear_line()
        term.write(term.status_style(self.status_bar_text(width).ljust(width)))

    def _draw_message_bar(self) -> None:
        term = self.terminal
        width, height = self.text_area_size()
        term.move_cursor(height + 1, 0)
        term.clear_line()
        term.write(self.message_bar_text()[:width])
