"""Exception types for puzzle extraction and retrieval errors.

Two families live here. ``StructureError`` and its subclasses describe a page
whose structure no longer matches what the parser assumes: a missing grid
table, ragged rows, too few clue tables, or data that fails validation. These
are fatal for the one puzzle being parsed.

``RetrievalError`` and its subclasses describe transient network failures.
The request manager retries them with increasing backoff and raises
``RetriesExhaustedError`` once its attempts are used up.
"""

from typing import Any


class StructureError(Exception):
    """Base class for page structure assumption violations.

    The parser assumes a fixed markup layout for the crossword archive. When
    that assumption is violated it raises a StructureError carrying enough
    context to diagnose what changed on the site.
    """

    def __init__(
        self,
        message: str,
        request_url: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the violation.
            request_url: The URL of the page that triggered this error.
            context: Optional dict of additional context (selector, counts, etc).
        """
        self.message = message
        self.request_url = request_url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with URL and context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]
        if self.request_url:
            parts.append(f"URL: {self.request_url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class HTMLStructureError(StructureError):
    """Raised when a selector matches an unexpected number of elements.

    Attributes:
        selector: The XPath or CSS selector that was used.
        selector_type: Type of selector ("xpath" or "css").
        description: What was being selected.
        expected_min: Minimum number of matches expected.
        expected_max: Maximum number of matches expected (None = unlimited).
        actual_count: Number of matches found.
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        description: str,
        expected_min: int,
        expected_max: int | None,
        actual_count: int,
        request_url: str = "",
    ) -> None:
        self.selector = selector
        self.selector_type = selector_type
        self.description = description
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_count = actual_count

        if expected_max is None:
            expected_str = f"at least {expected_min}"
        elif expected_min == expected_max:
            expected_str = f"exactly {expected_min}"
        else:
            expected_str = f"between {expected_min} and {expected_max}"

        message = (
            f"HTML structure mismatch: Expected {expected_str} "
            f"elements for '{description}', but found {actual_count}"
        )

        context = {
            "selector": selector,
            "selector_type": selector_type,
            "expected_min": expected_min,
            "expected_max": expected_max
            if expected_max is not None
            else "unlimited",
            "actual_count": actual_count,
        }

        super().__init__(message, request_url, context)


class RaggedGridError(StructureError):
    """Raised when grid rows do not all have the same length.

    Attributes:
        row_lengths: Length of every row, in order.
    """

    def __init__(self, row_lengths: list[int], request_url: str = "") -> None:
        self.row_lengths = row_lengths
        expected = row_lengths[0] if row_lengths else 0
        bad_rows = [
            index
            for index, length in enumerate(row_lengths)
            if length != expected
        ]
        message = (
            f"Grid is not rectangular: expected {expected} cells per row, "
            f"rows {bad_rows} differ"
        )
        super().__init__(
            message, request_url, {"row_lengths": row_lengths}
        )


class DataFormatError(StructureError):
    """Raised when an assembled record fails Pydantic validation.

    Attributes:
        errors: List of Pydantic validation errors.
        failed_doc: The raw document that failed validation.
        model_name: Name of the model validated against.
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        failed_doc: dict[str, Any],
        model_name: str,
        request_url: str = "",
    ) -> None:
        self.errors = errors
        self.failed_doc = failed_doc
        self.model_name = model_name

        error_summary = ", ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in errors
        )

        message = (
            f"Data validation failed for model '{model_name}': {error_summary}"
        )

        context = {
            "model": model_name,
            "error_count": len(errors),
        }

        super().__init__(message, request_url, context)


# =============================================================================
# Retrieval errors
# =============================================================================


class RetrievalError(Exception):
    """Base class for transient errors that might resolve on retry.

    Covers network failures, timeouts, unexpected status codes and truncated
    bodies. The request manager owns the retry policy; callers only ever see
    the final failure.
    """

    pass


class BadStatusError(RetrievalError):
    """Raised when the archive answers with a non-success status code.

    Attributes:
        status_code: The HTTP status code received.
        url: The URL that was requested.
        message: Human-readable error message.
    """

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        self.message = f"HTTP {status_code} from {url}"
        super().__init__(self.message)


class RequestTimeoutError(RetrievalError):
    """Raised when a request times out.

    Attributes:
        url: The URL that timed out.
        timeout_seconds: The configured timeout in seconds.
        message: Human-readable error message.
    """

    def __init__(self, url: str, timeout_seconds: float | None) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self.message = f"Request to {url} timed out after {timeout_seconds}s"
        super().__init__(self.message)


class EmptyResponseError(RetrievalError):
    """Raised when the response body is empty or too short to be a page.

    Attributes:
        url: The URL that was requested.
        length: Length of the body that was received.
        message: Human-readable error message.
    """

    def __init__(self, url: str, length: int) -> None:
        self.url = url
        self.length = length
        self.message = f"Empty or invalid response from {url} ({length} chars)"
        super().__init__(self.message)


class RetriesExhaustedError(RetrievalError):
    """Raised when every retry attempt for a URL failed.

    Attributes:
        url: The URL that was requested.
        attempts: Number of attempts made.
        last_error: The error raised by the final attempt.
    """

    def __init__(
        self, url: str, attempts: int, last_error: Exception | None
    ) -> None:
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        self.message = f"Failed to fetch {url} after {attempts} attempts"
        if last_error is not None:
            self.message += f": {last_error}"
        super().__init__(self.message)
