"""Crossword grid: cell model, builder and word-span detection."""

from hetman.grid.builder import RawCell, build_grid, parse_label, read_grid_rows
from hetman.grid.cell import Cell, Coordinate, Grid, Span
from hetman.grid.spans import Direction, detect_spans, iter_spans

__all__ = [
    "Cell",
    "Coordinate",
    "Direction",
    "Grid",
    "RawCell",
    "Span",
    "build_grid",
    "detect_spans",
    "iter_spans",
    "parse_label",
    "read_grid_rows",
]
