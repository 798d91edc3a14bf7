"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name

    def is_ctrl(self, letter: str) -> bool:
        return self.key_type == KeyType.CTRL and self.value == letter


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'escape',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token into a KeyEvent.

        Args:
            key: curtsies key name such as '<LEFT>' or '<Ctrl-q>', or a
                plain character

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            mods = set(parts[:-1])
            base = parts[-1]
            # Normalize page keys first
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'
            elif base in ('esc', 'escape'):
                base = 'escape'

            # Map named whitespace tokens to regular characters
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            # Control modified letters
            if mods == {'ctrl'} and len(base) == 1:
                # Map Ctrl-J / Ctrl-M to enter
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str)
            if not mods and base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
            # Fallback: unknown token (function keys, Alt combinations, ...)
            return KeyEvent(key_type=KeyType.SPECIAL, value=lower, raw=key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        # Regular character
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
