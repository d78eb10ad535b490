"""Linepad - a minimal line-oriented terminal text editor."""

from .buffer import LineBuffer
from .cursor import ColumnPolicy, Cursor
from .editor import EditEngine
from .keyboard import IntentType, KeyIntent
from .render import RenderSync

__all__ = [
    'LineBuffer',
    'Cursor',
    'ColumnPolicy',
    'EditEngine',
    'IntentType',
    'KeyIntent',
    'RenderSync',
]
