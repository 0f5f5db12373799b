"""Test utilities shared across the hetman tests."""

import logging
from collections.abc import Callable
from typing import Any

from hetman.common.exceptions import HTMLStructureError, StructureError
from hetman.grid.builder import RawCell, build_grid
from hetman.grid.cell import Grid

logger = logging.getLogger(__name__)

BLOCKED = "#"

# Same shape as the mock archive puzzle.
SAMPLE_LAYOUT = [
    "...#",
    ".#..",
    "....",
    "#...",
]


def collect_results() -> tuple[Callable[[Any], None], list[Any]]:
    """Create a callback that collects results in a list.

    Returns:
        A tuple of (callback_function, results_list).

    Example:
        callback, results = collect_results()
        driver = SyncDriver(scraper, settings, on_data=callback)
        driver.run()
        assert len(results) > 0
    """
    results: list[Any] = []

    def callback(data: Any) -> None:
        results.append(data)

    return callback, results


def grid_from_layout(layout: list[str]) -> Grid:
    """Build an unannotated grid from strings of "." (open) and "#" (blocked).

    Example:
        grid = grid_from_layout(["..#.", "...."])
    """
    return build_grid(
        [[RawCell(is_blocked=char == BLOCKED) for char in line] for line in layout]
    )


def log_structural_error_and_stop(exception: StructureError) -> bool:
    """Log structural error and return False to stop the run.

    Example:
        driver = SyncDriver(
            scraper, settings, on_structural_error=log_structural_error_and_stop
        )
        driver.run()
    """
    extra = (
        {
            "selector": exception.selector,
            "expected_min": exception.expected_min,
            "actual_count": exception.actual_count,
        }
        if isinstance(exception, HTMLStructureError)
        else {}
    )
    logger.error(
        f"Structural assumption failed: {exception.message}",
        extra={"url": exception.request_url} | extra,
    )
    return False
