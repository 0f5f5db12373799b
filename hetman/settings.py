"""Run configuration for fetching the archive.

FetchSettings is passed explicitly to the request manager, the store and the
driver. Parsing code takes no configuration at all.

Example::

    from hetman.settings import FetchSettings

    settings = FetchSettings(max_id=20, output_dir=Path("out"))
    settings.puzzle_url(7)
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_BASE_URL = "http://hetmanskie.pl/index.php?page=krzyzowki&nr="


class FetchSettings(BaseModel):
    """Settings for one fetch run.

    Attributes:
        base_url: Puzzle page URL prefix; the identifier is appended.
        output_dir: Root directory for puzzle files and the index.
        first_id: First identifier to fetch (inclusive).
        max_id: Last identifier to fetch (inclusive).
        max_retries: Attempts per puzzle before giving up.
        retry_base_delay: Backoff unit in seconds; attempt n waits n units.
        delay: Minimum seconds between page fetches.
        timeout: HTTP timeout in seconds.
        min_body_length: Shorter bodies are treated as failed fetches.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    output_dir: Path = Path("data")
    first_id: int = Field(1, gt=0)
    max_id: int = Field(117, gt=0)
    max_retries: int = Field(3, ge=1)
    retry_base_delay: float = Field(1.0, ge=0)
    delay: float = Field(2.0, ge=0)
    timeout: float | None = Field(30.0, gt=0)
    min_body_length: int = Field(100, ge=0)

    @model_validator(mode="after")
    def _check_id_range(self) -> "FetchSettings":
        if self.max_id < self.first_id:
            raise ValueError(
                f"max_id ({self.max_id}) is below first_id ({self.first_id})"
            )
        return self

    @property
    def puzzle_ids(self) -> range:
        return range(self.first_id, self.max_id + 1)

    def puzzle_url(self, puzzle_id: int) -> str:
        return f"{self.base_url}{puzzle_id}"
