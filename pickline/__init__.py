"""Pickline - Interactive selection of input lines in the terminal."""

from .model import LineStore, SelectionModel, OrderMode
from .view import ListView
from .render import ScreenRenderer, LineStyle
from .selector import Selector

__all__ = [
    'LineStore',
    'SelectionModel',
    'OrderMode',
    'ListView',
    'ScreenRenderer',
    'LineStyle',
    'Selector',
]
