"""Clue extraction from the definition tables of a puzzle page.

The page carries two ``table.defs`` tables. The first holds the across
clues and the second the down clues. Nothing in the markup names the
direction, so the order is the only signal; if the site ever swaps the
tables, clues come out mislabelled.

Each clue is a ``tr.defpair`` row with a ``td.tag`` cell ("12)") and a
``td.def`` cell (the clue text). Rows that can't be read are skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from hetman.common.page_element import PageElement

logger = logging.getLogger(__name__)

CLUE_TABLES_CSS = "table.defs"
CLUE_ROWS_CSS = "tr.defpair"
TAG_CELL_CSS = "td.tag"
DEF_CELL_CSS = "td.def"
TAG_DELIMITER = ")"

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Clue:
    """A numbered clue.

    Attributes:
        number: Grid label the clue answers.
        text: Clue text, never empty.
    """

    number: int
    text: str


@dataclass(frozen=True)
class ClueLists:
    """Across and down clues in document order."""

    across: list[Clue] = field(default_factory=list)
    down: list[Clue] = field(default_factory=list)


def parse_clue_number(tag_text: str) -> int | None:
    """Parse the number out of a clue tag such as ``"12)"``.

    Returns None if what's left after trimming and removing the trailing
    delimiter is not a positive integer.

    >>> parse_clue_number(" 12) ")
    12
    >>> parse_clue_number("x)") is None
    True
    """
    text = tag_text.strip()
    if text.endswith(TAG_DELIMITER):
        text = text[: -len(TAG_DELIMITER)].strip()
    if not _DIGITS.fullmatch(text):
        return None
    number = int(text)
    return number if number > 0 else None


def _read_clue_table(table: PageElement, direction: str) -> list[Clue]:
    clues: list[Clue] = []
    for row in table.query_css(CLUE_ROWS_CSS, "clue rows", min_count=0):
        tags = row.query_css(TAG_CELL_CSS, "clue tag", min_count=0)
        defs = row.query_css(DEF_CELL_CSS, "clue text", min_count=0)
        if not tags or not defs:
            continue

        number = parse_clue_number(tags[0].text_content())
        text = defs[0].text_content().strip()
        if number is None or not text:
            logger.debug(
                "Skipping unreadable %s clue row: tag=%r",
                direction,
                tags[0].text_content().strip(),
            )
            continue
        clues.append(Clue(number=number, text=text))
    return clues


def extract_clues(page: PageElement) -> ClueLists:
    """Extract across and down clues from a parsed puzzle page.

    Args:
        page: Parsed page containing the definition tables.

    Returns:
        ClueLists with clues in document order.

    Raises:
        HTMLStructureError: If fewer than two clue tables are present.
    """
    tables = page.query_css(CLUE_TABLES_CSS, "clue tables", min_count=2)
    if len(tables) > 2:
        logger.warning(
            "Found %d clue tables, using the first two", len(tables)
        )
    return ClueLists(
        across=_read_clue_table(tables[0], "across"),
        down=_read_clue_table(tables[1], "down"),
    )
