"""Scraper for the Hetmańska Krzyżówka crossword archive.

The scraper turns one puzzle page into a PuzzleData record. It performs no
I/O; the driver fetches pages and stores the results.

The page is parsed once and read by two independent branches:

- grid: read_grid_rows() -> build_grid() -> detect_spans()
- clues: extract_clues()

which meet again in assemble_puzzle().
"""

from __future__ import annotations

import logging

from hetman.assembler import assemble_puzzle, check_consistency
from hetman.clues import ClueLists, extract_clues
from hetman.common.lxml_page_element import LxmlPageElement
from hetman.common.page_element import PageElement
from hetman.grid.builder import build_grid, read_grid_rows
from hetman.grid.cell import Grid
from hetman.grid.spans import detect_spans
from hetman.models import PuzzleData

logger = logging.getLogger(__name__)


class HetmanScraper:
    """Parses puzzle pages into records.

    Attributes:
        check_consistency: Log a warning for every mismatch between grid
            numbering and the clue lists of a parsed puzzle.
    """

    def __init__(self, check_consistency: bool = True) -> None:
        self.check_consistency = check_consistency

    def parse_grid(self, page: PageElement, request_url: str = "") -> Grid:
        """Build the cell matrix and annotate its word spans."""
        return detect_spans(build_grid(read_grid_rows(page), request_url))

    def parse_clues(self, page: PageElement) -> ClueLists:
        return extract_clues(page)

    def parse_page(
        self, content: str | bytes, puzzle_id: int, url: str = ""
    ) -> PuzzleData:
        """Parse a puzzle page.

        Args:
            content: Page markup.
            puzzle_id: Archive identifier of the puzzle.
            url: URL the page came from, for error messages.

        Returns:
            The assembled puzzle.

        Raises:
            StructureError: If the page lacks the grid table or the clue
                tables, the grid is ragged, or the record fails validation.
        """
        page = LxmlPageElement.from_html(content, url)
        grid = self.parse_grid(page, url)
        clues = self.parse_clues(page)

        if self.check_consistency:
            for warning in check_consistency(grid, clues):
                logger.warning("Puzzle %d: %s", puzzle_id, warning)

        return assemble_puzzle(puzzle_id, grid, clues, request_url=url)
