"""Cell model: the atomic unit of a crossword grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


class Coordinate(NamedTuple):
    """Zero-based (row, col) position of a cell."""

    row: int
    col: int


Span = tuple[Coordinate, ...]

# Set once in __init__, rejected afterwards.
_FIXED_FIELDS = frozenset({"row", "col", "is_black"})


@dataclass
class Cell:
    """One grid position.

    ``row``, ``col`` and ``is_black`` are fixed at construction. The span and
    offset fields start empty and are filled only by
    :func:`hetman.grid.spans.detect_spans`. A span is shared by reference
    between all cells of the same word.

    Attributes:
        row: Zero-based row index.
        col: Zero-based column index.
        is_black: True for a blocked cell.
        number: Clue-start label printed in the cell, if any.
        value: Solution entry; always empty after parsing.
        across_span: Coordinates of the across word containing this cell.
        down_span: Coordinates of the down word containing this cell.
        across_offset: Index of this cell within ``across_span``.
        down_offset: Index of this cell within ``down_span``.
    """

    row: int
    col: int
    is_black: bool
    number: int | None = None
    value: str = ""
    across_span: Span | None = field(default=None, repr=False)
    down_span: Span | None = field(default=None, repr=False)
    across_offset: int | None = None
    down_offset: int | None = None

    def __setattr__(self, name: str, value: object) -> None:
        if name in _FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"Cell.{name} cannot be changed")
        super().__setattr__(name, value)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.row, self.col)

    @property
    def is_open(self) -> bool:
        return not self.is_black

    @property
    def starts_across(self) -> bool:
        """True if this cell is the first cell of an across word."""
        return self.across_offset == 0

    @property
    def starts_down(self) -> bool:
        """True if this cell is the first cell of a down word."""
        return self.down_offset == 0


Grid = list[list[Cell]]
