"""Word-span detection over a cell matrix.

A span is a maximal run of two or more open cells along one axis. Detection
is two independent sweeps, one per axis, each writing only its own axis's
fields on the cells:

- the horizontal sweep walks every row left to right and fills
  ``across_span`` / ``across_offset``;
- the vertical sweep walks every column top to bottom and fills
  ``down_span`` / ``down_offset``.

A run closes on a blocked cell or at the end of the line. Runs shorter than
two cells are dropped and leave their cell without a span on that axis.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum

from hetman.grid.cell import Cell, Grid, Span

MIN_SPAN_LENGTH = 2


class Direction(Enum):
    """Axis of a word."""

    ACROSS = "across"
    DOWN = "down"


def _assign(run: list[Cell], direction: Direction) -> None:
    if len(run) < MIN_SPAN_LENGTH:
        return
    span: Span = tuple(cell.coordinate for cell in run)
    for offset, cell in enumerate(run):
        if direction is Direction.ACROSS:
            cell.across_span = span
            cell.across_offset = offset
        else:
            cell.down_span = span
            cell.down_offset = offset


def _sweep_line(line: Sequence[Cell], direction: Direction) -> None:
    run: list[Cell] = []
    for cell in line:
        if cell.is_black:
            _assign(run, direction)
            run = []
        else:
            run.append(cell)
    _assign(run, direction)


def _clear(grid: Grid, direction: Direction) -> None:
    for row in grid:
        for cell in row:
            if direction is Direction.ACROSS:
                cell.across_span = None
                cell.across_offset = None
            else:
                cell.down_span = None
                cell.down_offset = None


def detect_across(grid: Grid) -> None:
    """Annotate across spans, row by row."""
    _clear(grid, Direction.ACROSS)
    for row in grid:
        _sweep_line(row, Direction.ACROSS)


def detect_down(grid: Grid) -> None:
    """Annotate down spans, column by column."""
    _clear(grid, Direction.DOWN)
    width = len(grid[0]) if grid else 0
    for col in range(width):
        _sweep_line([row[col] for row in grid], Direction.DOWN)


def detect_spans(grid: Grid) -> Grid:
    """Annotate every cell of a rectangular grid with its span membership.

    The grid is modified in place and also returned for chaining. Running it
    again on the same grid gives the same annotations.
    """
    detect_across(grid)
    detect_down(grid)
    return grid


def iter_spans(grid: Grid, direction: Direction) -> Iterator[tuple[Cell, Span]]:
    """Yield (first cell, span) for each distinct span, in reading order."""
    for row in grid:
        for cell in row:
            if direction is Direction.ACROSS and cell.starts_across:
                assert cell.across_span is not None
                yield cell, cell.across_span
            elif direction is Direction.DOWN and cell.starts_down:
                assert cell.down_span is not None
                yield cell, cell.down_span
