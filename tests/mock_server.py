"""Mock Hetmańska Krzyżówka archive.

This module defines the puzzle pages used across the tests and an aiohttp
app that serves them under the archive's URL scheme
(``/index.php?page=krzyzowki&nr=<id>``).

Identifiers and what they return:

- 1, 2: consistent puzzles
- 3: a puzzle whose clue lists don't match the grid numbering
- 4: a page without the grid table
- 5: always HTTP 500
- 6: HTTP 503 on the first request, the puzzle afterwards
- 7: a body too short to be a page
- 8: a page with only one clue table
- 9: answers after a 1 second delay
- 10: a long enough body holding nothing but whitespace
- 11: a consistent puzzle
- anything else: HTTP 404
"""

import asyncio
from collections import Counter
from dataclasses import dataclass, field
from html import escape

from aiohttp import web

BLACK = "#"

# Label per cell; BLACK for blocked cells, None for unlabelled open cells.
#
#   1  .  2  #
#   .  #  3  4
#   5  6  .  .
#   #  7  .  .
GRID_LAYOUT: list[list[int | str | None]] = [
    [1, None, 2, BLACK],
    [None, BLACK, 3, 4],
    [5, 6, None, None],
    [BLACK, 7, None, None],
]

ACROSS_CLUES: list[tuple[int, str]] = [
    (1, "Zwierzę domowe, łowca myszy"),
    (3, "Nuta po sol"),
    (5, "Stolica Norwegii"),
    (7, "Jednostka oporu elektrycznego"),
]

DOWN_CLUES: list[tuple[int, str]] = [
    (1, "Kapitan z powieści Verne'a"),
    (2, "Rzeka we Włoszech"),
    (4, "Dawna miara długości"),
    (6, "Pierwsza litera alfabetu greckiego"),
]


@dataclass
class MockPuzzle:
    """A puzzle page served by the mock archive."""

    puzzle_id: int
    layout: list[list[int | str | None]] = field(
        default_factory=lambda: GRID_LAYOUT
    )
    across: list[tuple[int, str]] = field(
        default_factory=lambda: list(ACROSS_CLUES)
    )
    down: list[tuple[int, str]] = field(
        default_factory=lambda: list(DOWN_CLUES)
    )
    with_grid: bool = True
    clue_tables: int = 2


PUZZLES: dict[int, MockPuzzle] = {
    1: MockPuzzle(1),
    2: MockPuzzle(2),
    # Down clue 6 is missing and across clue 9 has no word in the grid.
    3: MockPuzzle(
        3,
        across=[*ACROSS_CLUES, (9, "Zagadka bez pola")],
        down=[clue for clue in DOWN_CLUES if clue[0] != 6],
    ),
    4: MockPuzzle(4, with_grid=False),
    6: MockPuzzle(6),
    8: MockPuzzle(8, clue_tables=1),
    9: MockPuzzle(9),
    11: MockPuzzle(11),
}

SERVER_ERROR_ID = 5
FLAKY_ID = 6
SHORT_BODY_ID = 7
SLOW_ID = 9
BLANK_ID = 10
SLOW_DELAY = 1.0

HITS = web.AppKey("hits", Counter)


def generate_grid_html(layout: list[list[int | str | None]]) -> str:
    """Render the ``table#cwd.cwd`` grid table."""
    rows = []
    for row in layout:
        cells = []
        for label in row:
            if label == BLACK:
                cells.append('<td class="black">&nbsp;</td>')
            elif label is None:
                cells.append('<td class="cell"><input maxlength="1"></td>')
            else:
                cells.append(
                    f'<td class="cell"><span class="nr">{label}</span>'
                    '<input maxlength="1"></td>'
                )
        rows.append("<tr>" + "".join(cells) + "</tr>")
    return '<table id="cwd" class="cwd">\n' + "\n".join(rows) + "\n</table>"


def generate_clue_table_html(clues: list[tuple[int, str]]) -> str:
    """Render one ``table.defs`` clue table."""
    rows = [
        f'<tr class="defpair"><td class="tag">{number})</td>'
        f'<td class="def">{escape(text)}</td></tr>'
        for number, text in clues
    ]
    return '<table class="defs">\n' + "\n".join(rows) + "\n</table>"


def generate_puzzle_html(puzzle: MockPuzzle) -> str:
    """Render a full puzzle page."""
    parts = [
        "<!DOCTYPE html>",
        '<html><head><meta charset="utf-8">',
        f"<title>Hetmańska Krzyżówka nr {puzzle.puzzle_id}</title>",
        "</head><body>",
        f"<h1>Krzyżówka nr {puzzle.puzzle_id}</h1>",
    ]
    if puzzle.with_grid:
        parts.append(generate_grid_html(puzzle.layout))
    parts.append("<h2>Poziomo</h2>")
    parts.append(generate_clue_table_html(puzzle.across))
    if puzzle.clue_tables > 1:
        parts.append("<h2>Pionowo</h2>")
        parts.append(generate_clue_table_html(puzzle.down))
    parts.append("</body></html>")
    return "\n".join(parts)


async def handle_puzzle_page(request: web.Request) -> web.Response:
    """Serve ``/index.php?page=krzyzowki&nr=<id>``."""
    if request.query.get("page") != "krzyzowki":
        raise web.HTTPNotFound()
    try:
        puzzle_id = int(request.query.get("nr", ""))
    except ValueError:
        raise web.HTTPNotFound() from None

    hits = request.app[HITS]
    hits[puzzle_id] += 1

    if puzzle_id == SERVER_ERROR_ID:
        return web.Response(status=500, text="Internal Server Error")
    if puzzle_id == FLAKY_ID and hits[puzzle_id] == 1:
        return web.Response(status=503, text="Service Unavailable")
    if puzzle_id == SHORT_BODY_ID:
        return web.Response(text="<html></html>", content_type="text/html")
    if puzzle_id == BLANK_ID:
        return web.Response(text=" " * 200, content_type="text/html")
    if puzzle_id == SLOW_ID:
        await asyncio.sleep(SLOW_DELAY)

    puzzle = PUZZLES.get(puzzle_id)
    if puzzle is None:
        raise web.HTTPNotFound()
    return web.Response(
        text=generate_puzzle_html(puzzle),
        content_type="text/html",
        charset="utf-8",
    )


def create_app() -> web.Application:
    """Create the aiohttp application.

    ``app[HITS]`` counts requests per puzzle identifier.
    """
    app = web.Application()
    app[HITS] = Counter()
    app.router.add_get("/index.php", handle_puzzle_page)
    return app
