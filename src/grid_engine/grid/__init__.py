"""Grid buffer model: tokens, lines and the viewport grid."""

from .errors import GridDesyncError, GridError, GridIndexError
from .grid import CURSOR_GLYPH, Grid
from .line import Line
from .models import Attributes, Cursor, ScrollRegion, Token

__all__ = [
    "Attributes",
    "Token",
    "Cursor",
    "ScrollRegion",
    "Line",
    "Grid",
    "CURSOR_GLYPH",
    "GridError",
    "GridIndexError",
    "GridDesyncError",
]
