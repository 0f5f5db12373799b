"""Plain data types shared by the request manager, driver and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from hetman.models import IndexData


@dataclass
class Response:
    """HTTP response from fetching a puzzle page.

    Modeled after httpx.Response, keeping only what the driver needs.

    Attributes:
        status_code: HTTP status code.
        headers: Response headers.
        content: Raw response bytes.
        text: Decoded response text.
        url: URL that was requested.
    """

    status_code: int
    headers: dict[str, str]
    content: bytes
    text: str
    url: str


@dataclass
class FetchSummary:
    """Outcome of a fetch run.

    Stored puzzles that were skipped count as successful, like freshly
    fetched ones.

    Attributes:
        total: Number of identifiers attempted.
        successful_ids: Identifiers stored (fetched now or earlier).
        failed_ids: Identifiers that could not be fetched or parsed.
        skipped_ids: Subset of successful_ids that were already stored.
        errors: Last error message per failed identifier.
    """

    total: int = 0
    successful_ids: list[int] = field(default_factory=list)
    failed_ids: list[int] = field(default_factory=list)
    skipped_ids: list[int] = field(default_factory=list)
    errors: dict[int, str] = field(default_factory=dict)

    def record_success(self, puzzle_id: int, skipped: bool = False) -> None:
        self.total += 1
        self.successful_ids.append(puzzle_id)
        if skipped:
            self.skipped_ids.append(puzzle_id)

    def record_failure(self, puzzle_id: int, error: Exception) -> None:
        self.total += 1
        self.failed_ids.append(puzzle_id)
        self.errors[puzzle_id] = str(error)

    def to_index(self, last_updated: datetime | None = None) -> IndexData:
        """Build the index record written next to the puzzle files."""
        return IndexData(
            total=self.total,
            successful=len(self.successful_ids),
            failed=len(self.failed_ids),
            successful_ids=list(self.successful_ids),
            failed_ids=list(self.failed_ids),
            last_updated=last_updated or datetime.now(timezone.utc),
        )
