"""Tests for the structure and retrieval exception families."""

import pytest

from hetman.common.exceptions import (
    BadStatusError,
    DataFormatError,
    EmptyResponseError,
    HTMLStructureError,
    RaggedGridError,
    RequestTimeoutError,
    RetrievalError,
    RetriesExhaustedError,
    StructureError,
)


class TestStructureError:
    """Tests for StructureError message formatting."""

    def test_message_only(self):
        exc = StructureError("Crossword grid not found")

        assert str(exc) == "Crossword grid not found"
        assert exc.request_url == ""
        assert exc.context == {}

    def test_message_with_url_and_context(self):
        """The formatted message shall list the URL and every context entry."""
        exc = StructureError(
            "Something moved",
            request_url="http://test/nr=5",
            context={"selector": "//table", "actual_count": 0},
        )

        assert str(exc).splitlines() == [
            "Something moved",
            "URL: http://test/nr=5",
            "Context:",
            "  selector: //table",
            "  actual_count: 0",
        ]

    @pytest.mark.parametrize(
        "exc_class", [HTMLStructureError, RaggedGridError, DataFormatError]
    )
    def test_subclasses(self, exc_class):
        assert issubclass(exc_class, StructureError)
        assert not issubclass(exc_class, RetrievalError)


class TestHTMLStructureError:
    @pytest.mark.parametrize(
        ("expected_min", "expected_max", "text"),
        [
            (1, 1, "Expected exactly 1 elements"),
            (2, None, "Expected at least 2 elements"),
            (1, 3, "Expected between 1 and 3 elements"),
        ],
    )
    def test_expectation_wording(self, expected_min, expected_max, text):
        exc = HTMLStructureError(
            selector="//table[@class='defs']",
            selector_type="xpath",
            description="clue tables",
            expected_min=expected_min,
            expected_max=expected_max,
            actual_count=0,
        )

        assert text in exc.message
        assert "'clue tables'" in exc.message
        assert exc.context["expected_max"] == (
            expected_max if expected_max is not None else "unlimited"
        )


class TestDataFormatError:
    def test_error_summary(self):
        exc = DataFormatError(
            errors=[
                {"loc": ("clues", "across", 0, "clue"), "msg": "too short"},
                {"loc": ("id",), "msg": "must be positive"},
            ],
            failed_doc={"id": 0},
            model_name="PuzzleData",
            request_url="http://test/nr=0",
        )

        assert exc.message == (
            "Data validation failed for model 'PuzzleData': "
            "clues.across.0.clue: too short, id: must be positive"
        )
        assert exc.context == {"model": "PuzzleData", "error_count": 2}
        assert exc.failed_doc == {"id": 0}


class TestRetrievalErrors:
    @pytest.mark.parametrize(
        "exc",
        [
            BadStatusError(status_code=503, url="http://test/nr=1"),
            RequestTimeoutError(url="http://test/nr=1", timeout_seconds=30.0),
            EmptyResponseError(url="http://test/nr=1", length=13),
            RetriesExhaustedError(
                url="http://test/nr=1", attempts=3, last_error=None
            ),
        ],
    )
    def test_messages_name_the_url(self, exc):
        assert isinstance(exc, RetrievalError)
        assert not isinstance(exc, StructureError)
        assert "http://test/nr=1" in str(exc)

    def test_bad_status(self):
        exc = BadStatusError(status_code=500, url="http://test/nr=5")

        assert exc.status_code == 500
        assert str(exc) == "HTTP 500 from http://test/nr=5"

    def test_retries_exhausted_includes_last_error(self):
        last = BadStatusError(status_code=500, url="http://test/nr=5")

        exc = RetriesExhaustedError(
            url="http://test/nr=5", attempts=3, last_error=last
        )

        assert exc.attempts == 3
        assert exc.last_error is last
        assert str(exc) == (
            "Failed to fetch http://test/nr=5 after 3 attempts: "
            "HTTP 500 from http://test/nr=5"
        )

    def test_plain_retrieval_error(self):
        assert str(RetrievalError("connection refused")) == "connection refused"
