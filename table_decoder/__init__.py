"""
Coordinate Table Decoder

Fetches a published document holding a single HTML table of
(x-coordinate, y-coordinate, Character) rows and renders it as a
character grid.
"""

from .cells import Cell, classify
from .config import Config, DEFAULT_CONFIG
from .errors import NoRenderableDataError, TableDecodeError
from .normalizer import NormalizeOptions, normalize, to_records
from .pipeline import TableDecodePipeline, DecodeResult
from .renderer import GridRenderer, render
from .structures import Column, Table

__version__ = "1.0.0"
__all__ = [
    "Cell",
    "classify",
    "Column",
    "Config",
    "DEFAULT_CONFIG",
    "DecodeResult",
    "GridRenderer",
    "NoRenderableDataError",
    "NormalizeOptions",
    "Table",
    "TableDecodeError",
    "TableDecodePipeline",
    "normalize",
    "render",
    "to_records",
]
