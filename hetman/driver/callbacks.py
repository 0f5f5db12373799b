"""Callback functions for the driver's hooks.

The on_data helpers receive every newly stored PuzzleData. The error helpers
fit on_structural_error and on_retrieval_error, whose return value decides
whether the run carries on.

Example::

    from hetman.driver.callbacks import combine_callbacks, count_data, print_puzzle
    from hetman.driver.sync_driver import SyncDriver

    count = [0]
    driver = SyncDriver(
        scraper,
        settings,
        on_data=combine_callbacks(count_data(count), print_puzzle("Saved: ")),
    )
    driver.run()
"""

import logging
from collections.abc import Callable

from hetman.models import PuzzleData

logger = logging.getLogger(__name__)


def print_puzzle(prefix: str = "") -> Callable[[PuzzleData], None]:
    """Create a callback that prints a one-line summary of each puzzle.

    Example::

        driver = SyncDriver(scraper, on_data=print_puzzle("SCRAPED: "))
        driver.run()
        # Prints: SCRAPED: #7 13x13, 32 across / 30 down
    """

    def callback(puzzle: PuzzleData) -> None:
        print(
            f"{prefix}#{puzzle.id} {puzzle.height}x{puzzle.width}, "
            f"{len(puzzle.clues.across)} across / "
            f"{len(puzzle.clues.down)} down"
        )

    return callback


def count_data(
    counter: list[int] | None = None,
) -> Callable[[PuzzleData], None]:
    """Create a callback that counts puzzles.

    The count is stored in a mutable list so it can be read after the driver
    finishes running.

    Args:
        counter: Optional list to store the count in, at index 0. If None,
            creates a new list.

    Example::

        count = [0]
        driver = SyncDriver(scraper, on_data=count_data(count))
        driver.run()
        print(f"Fetched {count[0]} puzzles")
    """
    if counter is None:
        counter = [0]

    def callback(puzzle: PuzzleData) -> None:
        counter[0] += 1

    return callback


def combine_callbacks(
    *callbacks: Callable[[PuzzleData], None],
) -> Callable[[PuzzleData], None]:
    """Combine multiple on_data callbacks into one, called in order."""

    def callback(puzzle: PuzzleData) -> None:
        for cb in callbacks:
            cb(puzzle)

    return callback


def stop_on_error(error: Exception) -> bool:
    """Error callback that logs the failure and stops the run.

    Pass as on_structural_error or on_retrieval_error to abort on the first
    failed identifier instead of carrying on.
    """
    logger.error(f"Stopping run after error: {error}")
    return False
