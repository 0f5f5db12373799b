"""Puzzle assembly and the grid/clue consistency check.

assemble_puzzle() is the join point of the two extraction branches: it takes
an annotated grid and the clue lists and produces a frozen PuzzleData.

check_consistency() compares the two branches. Every cell that starts an
across (down) word should carry a number that appears in the across (down)
clue list, and every clue number should label some word start. Mismatches
come back as warnings: the markup belongs to the archive, not to us, so a
puzzle with a typo in it is still worth keeping.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from hetman.clues import Clue, ClueLists
from hetman.grid.cell import Cell, Grid, Span
from hetman.grid.spans import Direction, iter_spans
from hetman.models import PuzzleData


@dataclass(frozen=True)
class ConsistencyWarning:
    """One mismatch between grid numbering and the clue lists.

    Attributes:
        direction: Word direction the mismatch concerns.
        reason: Human-readable description.
        number: Clue or cell number involved, if any.
        row: Row of the word-start cell, if a cell is involved.
        col: Column of the word-start cell, if a cell is involved.
    """

    direction: Direction
    reason: str
    number: int | None = None
    row: int | None = None
    col: int | None = None

    def __str__(self) -> str:
        where = f" at ({self.row}, {self.col})" if self.row is not None else ""
        return f"{self.direction.value}{where}: {self.reason}"


def _word_dict(span: Span | None) -> list[dict[str, int]] | None:
    if span is None:
        return None
    return [{"row": coord.row, "col": coord.col} for coord in span]


def _cell_fields(cell: Cell) -> dict[str, Any]:
    return {
        "is_black": cell.is_black,
        "number": cell.number,
        "value": cell.value,
        "row": cell.row,
        "col": cell.col,
        "horizontal_word": _word_dict(cell.across_span),
        "vertical_word": _word_dict(cell.down_span),
        "horizontal_word_position": cell.across_offset,
        "vertical_word_position": cell.down_offset,
    }


def _clue_fields(clues: list[Clue]) -> list[dict[str, Any]]:
    return [{"number": clue.number, "clue": clue.text} for clue in clues]


def assemble_puzzle(
    puzzle_id: int,
    grid: Grid,
    clues: ClueLists,
    fetched_at: datetime | None = None,
    request_url: str = "",
) -> PuzzleData:
    """Combine an annotated grid and its clues into one puzzle record.

    No cross-check between grid numbers and clues is made here, see
    check_consistency().

    Args:
        puzzle_id: Archive identifier of the puzzle.
        grid: Cell matrix, already run through detect_spans().
        clues: Across and down clues.
        fetched_at: Creation timestamp; defaults to now (UTC).
        request_url: Page URL for error context.

    Returns:
        The validated, frozen PuzzleData.

    Raises:
        DataFormatError: If the assembled record fails validation.
    """
    deferred = PuzzleData.raw(
        request_url=request_url,
        id=puzzle_id,
        grid=[[_cell_fields(cell) for cell in row] for row in grid],
        clues={
            "across": _clue_fields(clues.across),
            "down": _clue_fields(clues.down),
        },
        fetched_at=fetched_at or datetime.now(timezone.utc),
    )
    return deferred.confirm()


def check_consistency(grid: Grid, clues: ClueLists) -> list[ConsistencyWarning]:
    """Compare word starts in the grid with the clue numbers.

    Args:
        grid: Cell matrix annotated by detect_spans().
        clues: Across and down clues.

    Returns:
        Warnings in reading order, across before down. Empty if consistent.
    """
    warnings: list[ConsistencyWarning] = []
    for direction, clue_list in (
        (Direction.ACROSS, clues.across),
        (Direction.DOWN, clues.down),
    ):
        clue_numbers = {clue.number for clue in clue_list}
        start_numbers: set[int] = set()

        for cell, _span in iter_spans(grid, direction):
            if cell.number is None:
                warnings.append(
                    ConsistencyWarning(
                        direction=direction,
                        reason="word start has no number",
                        row=cell.row,
                        col=cell.col,
                    )
                )
                continue
            start_numbers.add(cell.number)
            if cell.number not in clue_numbers:
                warnings.append(
                    ConsistencyWarning(
                        direction=direction,
                        reason=f"no clue numbered {cell.number}",
                        number=cell.number,
                        row=cell.row,
                        col=cell.col,
                    )
                )

        for clue in clue_list:
            if clue.number not in start_numbers:
                warnings.append(
                    ConsistencyWarning(
                        direction=direction,
                        reason=f"clue {clue.number} has no word start",
                        number=clue.number,
                    )
                )
    return warnings

