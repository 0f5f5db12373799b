"""Pydantic models for stored puzzles and the archive index.

The JSON shape of these models is what consumers of the archive read, so the
camelCase keys (``isBlack``, ``horizontalWord``, ``fetchedAt``...) must not
change.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime

from pydantic import Field, model_validator

from hetman.clues import Clue, ClueLists
from hetman.common.data_models import ScrapedData
from hetman.grid.cell import Cell, Coordinate, Grid, Span


class CoordinateData(ScrapedData):
    """One position of a word's path."""

    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)


class CellData(ScrapedData):
    """A grid cell as stored on disk.

    ``horizontal_word`` / ``vertical_word`` hold the across/down span,
    ``*_position`` the cell's offset within it.
    """

    is_black: bool
    number: int | None = Field(None, gt=0, description="Clue-start label")
    value: str = Field("", description="Solution entry, empty when fetched")
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    horizontal_word: list[CoordinateData] | None = None
    vertical_word: list[CoordinateData] | None = None
    horizontal_word_position: int | None = Field(None, ge=0)
    vertical_word_position: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def _check_word_positions(self) -> CellData:
        for axis, word, position in (
            ("horizontal", self.horizontal_word, self.horizontal_word_position),
            ("vertical", self.vertical_word, self.vertical_word_position),
        ):
            if (word is None) != (position is None):
                raise ValueError(
                    f"{axis} word and position must be set together"
                )
            if word is None or position is None:
                continue
            if self.is_black:
                raise ValueError(f"blocked cell cannot have a {axis} word")
            if len(word) < 2:
                raise ValueError(f"{axis} word must span at least 2 cells")
            if position >= len(word) or (
                word[position].row,
                word[position].col,
            ) != (self.row, self.col):
                raise ValueError(
                    f"{axis} word position {position} does not point at "
                    f"cell ({self.row}, {self.col})"
                )
        return self


class ClueData(ScrapedData):
    """A numbered clue as stored on disk."""

    number: int = Field(..., gt=0)
    clue: str = Field(..., min_length=1)


class CluesData(ScrapedData):
    across: list[ClueData] = Field(default_factory=list)
    down: list[ClueData] = Field(default_factory=list)


class PuzzleData(ScrapedData):
    """A complete puzzle: grid, clues and the time it was fetched."""

    id: int = Field(..., gt=0, description="Archive identifier")
    grid: list[list[CellData]]
    clues: CluesData
    fetched_at: datetime

    @model_validator(mode="after")
    def _check_grid_shape(self) -> PuzzleData:
        widths = {len(row) for row in self.grid}
        if len(widths) > 1:
            raise ValueError(f"grid rows have different lengths: {widths}")
        for row_index, row in enumerate(self.grid):
            for col_index, cell in enumerate(row):
                if (cell.row, cell.col) != (row_index, col_index):
                    raise ValueError(
                        f"cell at ({row_index}, {col_index}) claims "
                        f"position ({cell.row}, {cell.col})"
                    )
        return self

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def cells(self) -> Iterator[CellData]:
        for row in self.grid:
            yield from row

    def to_grid(self) -> Grid:
        """Rebuild the in-memory cell matrix.

        Cells of the same word share one span tuple, as after detection.
        """
        spans: dict[Span, Span] = {}

        def _span(word: list[CoordinateData] | None) -> Span | None:
            if word is None:
                return None
            span = tuple(Coordinate(c.row, c.col) for c in word)
            return spans.setdefault(span, span)

        grid: Grid = []
        for row in self.grid:
            cells: list[Cell] = []
            for data in row:
                cell = Cell(
                    row=data.row,
                    col=data.col,
                    is_black=data.is_black,
                    number=data.number,
                    value=data.value,
                )
                cell.across_span = _span(data.horizontal_word)
                cell.across_offset = data.horizontal_word_position
                cell.down_span = _span(data.vertical_word)
                cell.down_offset = data.vertical_word_position
                cells.append(cell)
            grid.append(cells)
        return grid

    def clue_lists(self) -> ClueLists:
        return ClueLists(
            across=[Clue(c.number, c.clue) for c in self.clues.across],
            down=[Clue(c.number, c.clue) for c in self.clues.down],
        )

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, content: str | bytes) -> PuzzleData:
        return cls.model_validate_json(content)


class IndexData(ScrapedData):
    """Summary of one fetch run, written next to the puzzle files."""

    total: int = Field(..., ge=0, description="Identifiers attempted")
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    successful_ids: list[int] = Field(default_factory=list)
    failed_ids: list[int] = Field(default_factory=list)
    last_updated: datetime
