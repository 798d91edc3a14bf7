"""glyphpad - A small terminal text editor."""

import logging

from .row import Row
from .document import Document, Position
from .viewport import Movement, Viewport, scroll
from .editor import Editor, SessionState

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Row',
    'Document',
    'Position',
    'Movement',
    'Viewport',
    'scroll',
    'Editor',
    'SessionState',
]
