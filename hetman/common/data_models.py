"""Pydantic base model for persisted records.

Every record hetman writes to disk derives from ScrapedData. Field names are
snake_case in Python and camelCase on disk, matching the JSON files the
archive consumers already read. Records are frozen once validated.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hetman.common.deferred_validation import (
    DeferredValidation,
)

T = TypeVar("T", bound="ScrapedData")


class ScrapedData(BaseModel):
    """Base class for persisted records with deferred validation support.

    Example:
        # Normal usage (validates immediately)
        clue = ClueData(number=1, clue="Stolica Polski")

        # Deferred validation
        deferred = ClueData.raw(number=1, clue="Stolica Polski")
        validated = deferred.confirm()  # Validates later
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
        frozen=True,
    )

    @classmethod
    def raw(
        cls: type[T], request_url: str = "", **data: Any
    ) -> DeferredValidation[T]:
        """Create a DeferredValidation wrapper with raw, unvalidated data.

        Args:
            request_url: Optional URL for error reporting.
            **data: Raw field values (not validated).

        Returns:
            DeferredValidation wrapper that validates on confirm().
        """
        return DeferredValidation(cls, request_url, **data)
