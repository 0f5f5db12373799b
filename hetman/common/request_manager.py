"""Request manager for fetching puzzle pages.

SyncRequestManager owns the httpx client and turns every way a fetch can go
wrong into a RetrievalError:

- httpx timeouts become RequestTimeoutError
- non-2xx status codes become BadStatusError
- bodies shorter than ``min_body_length`` become EmptyResponseError
- any other httpx transport error becomes a plain RetrievalError

fetch_page() wraps a single attempt with the retry policy: up to
``max_retries`` attempts, waiting ``retry_base_delay * n`` seconds after the
n-th failure, then RetriesExhaustedError. A pyrate_limiter Limiter spaces
page fetches out so the archive isn't hammered.
"""

from __future__ import annotations

import logging
import ssl
import time
from typing import Any

import httpx
from pyrate_limiter import Duration, Limiter, Rate

from hetman.common.exceptions import (
    BadStatusError,
    EmptyResponseError,
    RequestTimeoutError,
    RetrievalError,
    RetriesExhaustedError,
)
from hetman.data_types import Response
from hetman.settings import FetchSettings

logger = logging.getLogger(__name__)


def rates_for_delay(delay: float) -> list[Rate]:
    """Rate limits allowing one page fetch per ``delay`` seconds."""
    if delay <= 0:
        return []
    return [Rate(1, max(1, int(delay * Duration.SECOND.value)))]


class SyncRequestManager:
    """Fetches puzzle pages over HTTP with retries and rate limiting.

    Example::

        with SyncRequestManager(timeout=30.0, max_retries=3) as manager:
            response = manager.fetch_page(settings.puzzle_url(7))
    """

    def __init__(
        self,
        timeout: float | None = None,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        min_body_length: int = 100,
        rates: list[Rate] | None = None,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        """Initialize the request manager.

        Args:
            timeout: Request timeout in seconds. None means no timeout.
            max_retries: Attempts per page before giving up.
            retry_base_delay: Backoff unit; the wait after the n-th failed
                attempt is n units.
            min_body_length: Bodies shorter than this are rejected.
            rates: pyrate_limiter rates applied to page fetches. None or
                empty means no rate limiting.
            ssl_context: Optional SSL context for HTTPS connections.
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.min_body_length = min_body_length

        if ssl_context:
            self._client = httpx.Client(
                verify=ssl_context, timeout=timeout, follow_redirects=True
            )
        else:
            self._client = httpx.Client(timeout=timeout, follow_redirects=True)

        self._limiter: Limiter | None = None
        if rates:
            self._limiter = Limiter(rates)
            logger.info(
                f"Rate limiter initialized with {len(rates)} rate(s): "
                + ", ".join(f"{r.limit}/{r.interval}ms" for r in rates)
            )

    @classmethod
    def from_settings(cls, settings: FetchSettings) -> SyncRequestManager:
        return cls(
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            retry_base_delay=settings.retry_base_delay,
            min_body_length=settings.min_body_length,
            rates=rates_for_delay(settings.delay),
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> SyncRequestManager:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def resolve_request(self, url: str) -> Response:
        """Make a single GET attempt.

        Args:
            url: Absolute URL of the page.

        Returns:
            Response with the page body.

        Raises:
            RequestTimeoutError: If the request times out.
            BadStatusError: If the status code is not 2xx.
            EmptyResponseError: If the body is too short to be a page.
            RetrievalError: For any other transport failure.
        """
        try:
            http_response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                url=url, timeout_seconds=self.timeout
            ) from e
        except httpx.HTTPError as e:
            raise RetrievalError(f"Request to {url} failed: {e}") from e

        if not http_response.is_success:
            raise BadStatusError(
                status_code=http_response.status_code, url=url
            )

        text = http_response.text
        if len(text) < self.min_body_length:
            raise EmptyResponseError(url=url, length=len(text))

        return Response(
            status_code=http_response.status_code,
            headers=dict(http_response.headers),
            content=http_response.content,
            text=text,
            url=url,
        )

    def fetch_page(self, url: str) -> Response:
        """Fetch a page, retrying transient failures.

        Args:
            url: Absolute URL of the page.

        Returns:
            Response from the first successful attempt.

        Raises:
            RetriesExhaustedError: If every attempt failed.
        """
        if self._limiter is not None:
            self._limiter.try_acquire("page")

        last_error: RetrievalError | None = None
        for attempt in range(self.max_retries):
            logger.info(
                f"Fetching {url} (attempt {attempt + 1}/{self.max_retries})"
            )
            try:
                return self.resolve_request(url)
            except RetrievalError as e:
                last_error = e
                logger.warning(f"Attempt {attempt + 1} failed: {e}")

            if attempt < self.max_retries - 1:
                backoff = self.retry_base_delay * (attempt + 1)
                logger.info(f"Retrying in {backoff:.1f}s")
                time.sleep(backoff)

        raise RetriesExhaustedError(
            url=url, attempts=self.max_retries, last_error=last_error
        ) from last_error
