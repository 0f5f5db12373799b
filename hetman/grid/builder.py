"""Build a rectangular cell matrix from raw per-cell facts.

Building is split in two so each half can be tested alone:

- read_grid_rows() pulls raw facts (blocked flag, label text) off the grid
  table of a parsed page.
- build_grid() turns those facts into Cells, checking the matrix is
  rectangular.

Span detection is a separate explicit step, see hetman.grid.spans.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from hetman.common.exceptions import RaggedGridError, StructureError
from hetman.common.page_element import PageElement
from hetman.grid.cell import Cell, Grid

logger = logging.getLogger(__name__)

GRID_TABLE_CSS = "table#cwd.cwd"
BLACK_CELL_CLASS = "black"

_LEADING_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class RawCell:
    """Raw facts about one grid cell as found in the markup.

    Attributes:
        is_blocked: True if the markup marks the cell as blocked.
        label_text: Text content of the cell, possibly holding a clue number.
    """

    is_blocked: bool
    label_text: str = ""


def parse_label(text: str | None) -> int | None:
    """Parse a clue-number label from cell text.

    The label is the run of decimal digits the trimmed text starts with.

    >>> parse_label(" 12 ")
    12
    >>> parse_label("3a")
    3
    >>> parse_label("a3") is None
    True
    """
    if not text:
        return None
    match = _LEADING_DIGITS.match(text.strip())
    if match is None:
        return None
    number = int(match.group())
    return number if number > 0 else None


def build_grid(
    rows: Sequence[Sequence[RawCell]] | None, request_url: str = ""
) -> Grid:
    """Create a matrix of Cells from rows of raw cell facts.

    Args:
        rows: Rows of RawCell, top to bottom, each left to right.
        request_url: Page URL for error context.

    Returns:
        List of rows of Cells with coordinates assigned.

    Raises:
        StructureError: If no rows are given.
        RaggedGridError: If the rows have different lengths.
    """
    if not rows:
        raise StructureError("Crossword grid not found", request_url)

    row_lengths = [len(row) for row in rows]
    if len(set(row_lengths)) != 1:
        raise RaggedGridError(row_lengths, request_url)

    grid: Grid = [
        [
            Cell(
                row=row_index,
                col=col_index,
                is_black=raw.is_blocked,
                number=parse_label(raw.label_text),
            )
            for col_index, raw in enumerate(row)
        ]
        for row_index, row in enumerate(rows)
    ]
    logger.debug(
        "Built %dx%d grid", len(grid), row_lengths[0]
    )
    return grid


def read_grid_rows(page: PageElement) -> list[list[RawCell]]:
    """Read raw cell facts from the crossword table of a page.

    Args:
        page: Parsed page, or any element containing the grid table.

    Returns:
        Rows of RawCell in document order.

    Raises:
        HTMLStructureError: If there isn't exactly one grid table.
    """
    table = page.query_css(
        GRID_TABLE_CSS, "crossword grid table", min_count=1, max_count=1
    )[0]

    rows: list[list[RawCell]] = []
    for tr in table.query_css("tr", "grid rows", min_count=0):
        rows.append(
            [
                RawCell(
                    is_blocked=td.has_class(BLACK_CELL_CLASS),
                    label_text=td.text_content(),
                )
                for td in tr.query_css("td", "grid cells", min_count=0)
            ]
        )
    return rows
