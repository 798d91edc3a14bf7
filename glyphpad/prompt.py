"""Single-line prompts and the transient status message.

Prompts are plain state machines fed one KeyEvent at a time. They do not
read the keyboard or draw anything; the editor drives them and decides, from
the prompt's purpose, what side effect each keystroke has.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .keyboard import KeyEvent, KeyType


class PromptPurpose(Enum):
    """What the editor does with a prompt's input."""
    SAVE_AS = "save_as"
    INCREMENTAL_SEARCH = "incremental_search"
    QUIT_CONFIRM = "quit_confirm"


class PromptOutcome(Enum):
    PENDING = "pending"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


def _is_cancel(key_event: KeyEvent) -> bool:
    # ESC or Ctrl-G
    return key_event.is_special('escape') or key_event.is_ctrl('g')


@dataclass
class LinePrompt:
    """Collects a line of text until Enter (commit) or Escape/Ctrl-G (cancel)."""

    label: str
    purpose: PromptPurpose
    buffer: str = ""
    outcome: PromptOutcome = PromptOutcome.PENDING

    def handle_key(self, key_event: KeyEvent) -> PromptOutcome:
        if _is_cancel(key_event):
            self.buffer = ""
            self.outcome = PromptOutcome.CANCELLED
        elif key_event.is_special('enter'):
            self.outcome = PromptOutcome.COMMITTED
        elif key_event.is_special('backspace'):
            self.buffer = self.buffer[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            # Filter out control characters
            if char and ord(char[0]) >= 32:
                self.buffer += char
        return self.outcome

    def value(self) -> Optional[str]:
        """The committed text, or None when cancelled or empty."""
        if self.outcome != PromptOutcome.COMMITTED or not self.buffer:
            return None
        return self.buffer

    def display_text(self) -> str:
        return f"{self.label}{self.buffer}"


@dataclass
class ConfirmPrompt:
    """Yes/no question answered by a single keystroke."""

    label: str
    purpose: PromptPurpose = PromptPurpose.QUIT_CONFIRM
    suffix: str = " y or n: "
    answer: bool = False
    outcome: PromptOutcome = PromptOutcome.PENDING

    def handle_key(self, key_event: KeyEvent) -> PromptOutcome:
        if _is_cancel(key_event):
            self.answer = False
            self.outcome = PromptOutcome.COMMITTED
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value.lower()
            if char == 'y':
                self.answer = True
                self.outcome = PromptOutcome.COMMITTED
            elif char == 'n':
                self.answer = False
                self.outcome = PromptOutcome.COMMITTED
        return self.outcome

    def display_text(self) -> str:
        return f"{self.label}{self.suffix}"


@dataclass
class StatusMessage:
    """Message shown in the message bar until it expires.

    Expiry is evaluated lazily when the message bar is drawn.
    """

    text: str = ""
    created_at: float = field(default=0.0)

    def visible_text(self, now: float, timeout: float) -> str:
        if now - self.created_at < timeout:
            return self.text
        return ""
