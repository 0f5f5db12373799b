"""Synchronous driver for fetching the crossword archive.

The driver walks the configured identifier range in ascending order. For
every identifier it either skips a puzzle stored by an earlier run or
fetches, parses and stores it. Failures are isolated per identifier: a page
that can't be fetched or parsed is recorded as failed and the run moves on.
After the last identifier the driver writes ``index.json`` summarising the
run.

Lifecycle hooks mirror each other:

- on_run_start(scraper_name) before the first identifier
- on_run_complete(scraper_name, status, error) after the last, with status
  "completed" or "error"
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from hetman.common.exceptions import RetrievalError, StructureError
from hetman.common.request_manager import SyncRequestManager
from hetman.data_types import FetchSummary
from hetman.models import PuzzleData
from hetman.scraper import HetmanScraper
from hetman.settings import FetchSettings
from hetman.storage import PuzzleStore

logger = logging.getLogger(__name__)


def log_structural_error(error: StructureError) -> None:
    """Log a page that didn't have the expected structure.

    The exception's context is passed along as ``extra`` so structured log
    handlers can pick it up.
    """
    logger.error(
        f"Page structure error: {error.message}",
        extra={"request_url": error.request_url, "context": error.context},
    )


class SyncDriver:
    """Fetches a range of puzzles one at a time.

    Example usage:
        from tests.utils import collect_results

        callback, results = collect_results()
        driver = SyncDriver(HetmanScraper(), settings, on_data=callback)
        summary = driver.run()
    """

    def __init__(
        self,
        scraper: HetmanScraper,
        settings: FetchSettings | None = None,
        store: PuzzleStore | None = None,
        request_manager: SyncRequestManager | None = None,
        on_data: Callable[[PuzzleData], None] | None = None,
        on_structural_error: Callable[[StructureError], bool] | None = None,
        on_retrieval_error: Callable[[RetrievalError], bool] | None = None,
        on_run_start: Callable[[str], None] | None = None,
        on_run_complete: Callable[[str, str, Exception | None], None]
        | None = None,
        stop_event: threading.Event | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            scraper: Scraper that turns page markup into puzzles.
            settings: Identifier range, output directory and HTTP policy.
                Defaults to FetchSettings().
            store: Where puzzles and the index are written. Defaults to a
                PuzzleStore over ``settings.output_dir``.
            request_manager: SyncRequestManager for fetching pages. If not
                provided, one is built from the settings and closed when the
                run ends.
            on_data: Optional callback invoked with every newly stored
                puzzle. Skipped puzzles are not passed to it.
            on_structural_error: Optional callback invoked when a page can't
                be parsed. Return True to carry on with the next identifier
                or False to stop the run. If not provided, the error is
                logged and the run carries on.
            on_retrieval_error: Optional callback invoked when a page can't
                be fetched, with the same contract as on_structural_error.
            on_run_start: Optional callback invoked when the run starts.
                Receives scraper_name (str).
            on_run_complete: Optional callback invoked when the run ends.
                Receives scraper_name (str), status ("completed" | "error"),
                and error (Exception | None).
            stop_event: Optional threading.Event for graceful shutdown. When
                set, the driver stops before the next identifier.
        """
        self.scraper = scraper
        self.settings = settings or FetchSettings()
        self.store = store or PuzzleStore(self.settings.output_dir)

        if request_manager is not None:
            self.request_manager = request_manager
            self._owns_request_manager = False
        else:
            self.request_manager = SyncRequestManager.from_settings(
                self.settings
            )
            self._owns_request_manager = True

        self.on_data = on_data
        self.on_structural_error = on_structural_error or _continue_after(
            log_structural_error
        )
        self.on_retrieval_error = on_retrieval_error or _continue_after(
            lambda e: logger.error(f"Retrieval error: {e}")
        )
        self.on_run_start = on_run_start
        self.on_run_complete = on_run_complete
        self.stop_event = stop_event

    def fetch_puzzle(self, puzzle_id: int) -> PuzzleData:
        """Fetch and parse a single puzzle without storing it.

        Raises:
            RetrievalError: If the page couldn't be fetched.
            StructureError: If the page couldn't be parsed.
        """
        url = self.settings.puzzle_url(puzzle_id)
        response = self.request_manager.fetch_page(url)
        return self.scraper.parse_page(response.content, puzzle_id, url)

    def run(self) -> FetchSummary:
        """Fetch every identifier in the configured range.

        Returns:
            Summary of stored, skipped and failed identifiers. The same
            figures are written to the index file.
        """
        scraper_name = self.scraper.__class__.__name__
        if self.on_run_start:
            self.on_run_start(scraper_name)

        status = "completed"
        error: Exception | None = None
        summary = FetchSummary()

        logger.info(
            f"Fetching crosswords {self.settings.first_id}"
            f"-{self.settings.max_id} into {self.store.output_dir}"
        )

        try:
            self.store.ensure_dirs()
            for puzzle_id in self.settings.puzzle_ids:
                if self.stop_event and self.stop_event.is_set():
                    logger.info("Stop requested, ending run early")
                    break

                if self.store.exists(puzzle_id):
                    logger.info(
                        f"Crossword {puzzle_id} already exists, skipping"
                    )
                    summary.record_success(puzzle_id, skipped=True)
                    continue

                if not self._process(puzzle_id, summary):
                    break

            self.store.write_index(summary.to_index())
            logger.info(
                f"Run finished: {len(summary.successful_ids)} successful "
                f"({len(summary.skipped_ids)} skipped), "
                f"{len(summary.failed_ids)} failed"
            )
            if summary.failed_ids:
                logger.info(f"Failed ids: {summary.failed_ids}")
        except Exception as e:
            status = "error"
            error = e
            raise
        finally:
            if self._owns_request_manager:
                self.request_manager.close()

            if self.on_run_complete:
                self.on_run_complete(scraper_name, status, error)

        return summary

    def _process(self, puzzle_id: int, summary: FetchSummary) -> bool:
        """Fetch, parse and store one puzzle.

        Returns:
            False if an error callback asked to stop the run.
        """
        try:
            puzzle = self.fetch_puzzle(puzzle_id)
        except StructureError as e:
            summary.record_failure(puzzle_id, e)
            return self.on_structural_error(e)
        except RetrievalError as e:
            summary.record_failure(puzzle_id, e)
            return self.on_retrieval_error(e)

        self.store.save(puzzle)
        summary.record_success(puzzle_id)
        if self.on_data:
            self.on_data(puzzle)
        return True


def _continue_after(
    log: Callable[[Exception], None],
) -> Callable[[Exception], bool]:
    def callback(error: Exception) -> bool:
        log(error)
        return True

    return callback
