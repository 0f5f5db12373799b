"""Deferred validation for assembled records.

DeferredValidation holds raw field values together with the Pydantic model
they must satisfy, and only validates when confirm() is called. The assembler
collects the grid and clue branches first and confirms once at the join
point, so a bad record is reported as a single DataFormatError.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from hetman.common.exceptions import DataFormatError

T = TypeVar("T", bound=BaseModel)


class DeferredValidation(Generic[T]):
    """Wrapper for unvalidated data that validates on confirm().

    Example:
        deferred = PuzzleData.raw(request_url=url, id=7, grid=rows, ...)
        puzzle = deferred.confirm()  # Raises DataFormatError if invalid
    """

    def __init__(
        self,
        model_class: type[T],
        request_url: str = "",
        **data: Any,
    ) -> None:
        """Initialize deferred validation.

        Args:
            model_class: The Pydantic model class to validate against.
            request_url: Optional URL for error reporting.
            **data: Raw field values (not validated).
        """
        self._model_class = model_class
        self._request_url = request_url
        self._data = data

    def confirm(self) -> T:
        """Validate the data and return the validated model instance.

        Returns:
            Validated instance of the model class.

        Raises:
            DataFormatError: If validation fails.
        """
        try:
            return self._model_class.model_validate(self._data)
        except ValidationError as e:
            errors_list = [dict(err) for err in e.errors()]
            raise DataFormatError(
                errors=errors_list,
                failed_doc=self._data,
                model_name=self._model_class.__name__,
                request_url=self._request_url,
            ) from e
