"""Constants and configuration for the glyphpad editor."""

from dataclasses import dataclass


class EditorConstants:
    """Central configuration constants for the editor."""

    # Text layout
    TAB_WIDTH = 4  # Columns a tab character occupies on screen

    # Screen layout
    RESERVED_ROWS = 2  # Status bar + message bar at the bottom of the screen
    FILENAME_DISPLAY_LIMIT = 20  # Characters of the filename shown in the status bar
    EMPTY_ROW_MARKER = "~"
    NO_NAME = "[No Name]"

    # Status messages
    STATUS_MESSAGE_TIMEOUT = 5.0  # Seconds a status message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = search | Ctrl-W = save | Ctrl-Q = quit"
    OPEN_FAILED_MESSAGE = "ERROR: Failed to open file {}"
    QUIT_CONFIRM_LABEL = "Unsaved changes remaining. Really Quit?"
    GOODBYE_MESSAGE = "Goodbye!"

    # Prompts
    SAVE_AS_LABEL = "Save as: "
    SEARCH_LABEL = "Search: "
    CONFIRM_SUFFIX = " y or n: "

    # File operations
    ATOMIC_SAVE_PREFIX = "."  # Prefix for temporary save files
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files


@dataclass(frozen=True)
class EditorConfig:
    """Values threaded into the row model, viewport and editor.

    Kept separate from ``EditorConstants`` so tests can vary them per
    instance instead of patching class attributes.
    """

    tab_width: int = EditorConstants.TAB_WIDTH
    status_message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT
    reserved_rows: int = EditorConstants.RESERVED_ROWS
