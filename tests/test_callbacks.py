"""Tests for the driver callback helpers."""

import pytest

from hetman.driver.callbacks import (
    combine_callbacks,
    count_data,
    print_puzzle,
    stop_on_error,
)
from hetman.driver.sync_driver import SyncDriver
from hetman.scraper import HetmanScraper
from tests.mock_server import PUZZLES, generate_puzzle_html
from tests.utils import collect_results


@pytest.fixture
def puzzle():
    return HetmanScraper().parse_page(generate_puzzle_html(PUZZLES[1]), 5)


class TestCallbacks:
    def test_count_data(self, puzzle):
        count = [0]
        callback = count_data(count)

        callback(puzzle)
        callback(puzzle)

        assert count == [2]

    def test_print_puzzle(self, puzzle, capsys):
        print_puzzle("Saved: ")(puzzle)

        assert capsys.readouterr().out == "Saved: #5 4x4, 4 across / 4 down\n"

    def test_combine_callbacks_in_order(self, puzzle):
        calls = []

        callback = combine_callbacks(
            lambda p: calls.append(("first", p.id)),
            lambda p: calls.append(("second", p.id)),
        )
        callback(puzzle)

        assert calls == [("first", 5), ("second", 5)]

    def test_stop_on_error(self, caplog):
        with caplog.at_level("ERROR", logger="hetman.driver.callbacks"):
            assert stop_on_error(RuntimeError("boom")) is False

        assert "Stopping run after error: boom" in caplog.text


class TestCallbacksWithDriver:
    def test_count_matches_new_puzzles(self, settings):
        count = [0]
        callback, results = collect_results()

        SyncDriver(
            HetmanScraper(),
            settings,
            on_data=combine_callbacks(count_data(count), callback),
        ).run()

        assert count == [len(results)] == [4]

    def test_stop_on_error_ends_run(self, settings):
        summary = SyncDriver(
            HetmanScraper(),
            settings,
            on_structural_error=stop_on_error,
            on_retrieval_error=stop_on_error,
        ).run()

        assert summary.failed_ids == [4]
        assert summary.total == 4
