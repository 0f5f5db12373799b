"""hetman CLI: fetch the crossword archive and inspect puzzles.

Usage:
    hetman fetch                             # Fetch puzzles 1-117 into ./data
    hetman fetch --first-id 5 --max-id 9     # Fetch a sub-range
    hetman parse page.html --id 7            # Parse a saved page, print JSON
    hetman parse page.html --id 7 --check    # ...and report consistency warnings
    hetman check 7                           # Check a stored puzzle
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from hetman.assembler import check_consistency
from hetman.common.exceptions import StructureError
from hetman.driver.callbacks import (
    combine_callbacks,
    count_data,
    print_puzzle,
    stop_on_error,
)
from hetman.driver.sync_driver import SyncDriver
from hetman.scraper import HetmanScraper
from hetman.settings import DEFAULT_BASE_URL, FetchSettings
from hetman.storage import PuzzleStore


def _configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.version_option(package_name="hetman")
def cli() -> None:
    """hetman: Hetmańska Krzyżówka archive fetcher."""


@cli.command()
@click.option(
    "--first-id",
    type=int,
    default=1,
    show_default=True,
    help="First puzzle identifier to fetch.",
)
@click.option(
    "--max-id",
    type=int,
    default=117,
    show_default=True,
    help="Last puzzle identifier to fetch.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default="data",
    show_default=True,
    help="Directory for puzzle files and the index.",
)
@click.option(
    "--delay",
    type=float,
    default=2.0,
    show_default=True,
    help="Minimum seconds between page fetches.",
)
@click.option(
    "--max-retries",
    type=int,
    default=3,
    show_default=True,
    help="Attempts per puzzle before giving up.",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    show_default=True,
    help="HTTP timeout in seconds.",
)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Puzzle page URL prefix; the identifier is appended.",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Stop at the first puzzle that can't be fetched or parsed.",
)
@click.option(
    "-q", "--quiet", is_flag=True, help="Don't print each stored puzzle."
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def fetch(
    first_id: int,
    max_id: int,
    output_dir: str,
    delay: float,
    max_retries: int,
    timeout: float,
    base_url: str,
    fail_fast: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Fetch a range of puzzles from the archive.

    Puzzles already present in OUTPUT_DIR are skipped. A summary of the run
    is written to OUTPUT_DIR/index.json.

    \b
    Examples:
        hetman fetch
        hetman fetch --first-id 100 --max-id 117 --output-dir out
        hetman fetch --delay 0 --base-url http://localhost:8080/?nr=
    """
    _configure_logging(verbose)

    try:
        settings = FetchSettings(
            base_url=base_url,
            output_dir=Path(output_dir),
            first_id=first_id,
            max_id=max_id,
            max_retries=max_retries,
            delay=delay,
            timeout=timeout,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    count = [0]
    callbacks = [count_data(count)]
    if not quiet:
        callbacks.append(print_puzzle("Saved: "))

    driver = SyncDriver(
        HetmanScraper(),
        settings,
        on_data=combine_callbacks(*callbacks),
        on_structural_error=stop_on_error if fail_fast else None,
        on_retrieval_error=stop_on_error if fail_fast else None,
    )
    summary = driver.run()

    click.echo(
        f"Successful: {len(summary.successful_ids)} "
        f"({count[0]} new, {len(summary.skipped_ids)} skipped)"
    )
    click.echo(f"Failed:     {len(summary.failed_ids)}")
    if summary.failed_ids:
        click.echo(
            "Failed ids: " + ", ".join(str(i) for i in summary.failed_ids)
        )


@cli.command()
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--id",
    "puzzle_id",
    type=click.IntRange(min=1),
    required=True,
    help="Archive identifier to record in the puzzle.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Print grid/clue consistency warnings to stderr.",
)
def parse(file: Path, puzzle_id: int, check: bool) -> None:
    """Parse a saved puzzle page and print the puzzle JSON."""
    scraper = HetmanScraper(check_consistency=False)
    try:
        puzzle = scraper.parse_page(file.read_bytes(), puzzle_id, str(file))
    except StructureError as e:
        raise click.ClickException(str(e)) from e

    click.echo(puzzle.to_json())

    if check:
        for warning in check_consistency(
            puzzle.to_grid(), puzzle.clue_lists()
        ):
            click.echo(f"warning: {warning}", err=True)


@cli.command()
@click.argument("puzzle_id", metavar="ID", type=click.IntRange(min=1))
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default="data",
    show_default=True,
    help="Directory the puzzles were fetched into.",
)
def check(puzzle_id: int, output_dir: str) -> None:
    """Report consistency warnings for a stored puzzle.

    Exits with status 1 if there are any.
    """
    store = PuzzleStore(output_dir)
    try:
        puzzle = store.load(puzzle_id)
    except FileNotFoundError as e:
        raise click.ClickException(
            f"Crossword {puzzle_id} not found in {store.puzzle_dir}"
        ) from e
    except ValidationError as e:
        raise click.ClickException(
            f"Crossword {puzzle_id} is not a valid puzzle file:\n{e}"
        ) from e

    warnings = check_consistency(puzzle.to_grid(), puzzle.clue_lists())
    if not warnings:
        click.echo(f"Crossword {puzzle_id}: consistent")
        return

    for warning in warnings:
        click.echo(f"Crossword {puzzle_id}: {warning}")
    sys.exit(1)


def main() -> None:
    """Entry point for the ``hetman`` console script."""
    cli()
