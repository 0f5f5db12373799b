"""Shared fixtures for the hetman tests."""

import asyncio
import socket
import threading
from collections.abc import Generator
from contextlib import closing
from pathlib import Path

import pytest
from aiohttp import web

from hetman.common.lxml_page_element import LxmlPageElement
from hetman.settings import FetchSettings
from tests.mock_server import PUZZLES, create_app, generate_puzzle_html


@pytest.fixture
def puzzle_html() -> str:
    """Markup of the consistent 4x4 mock puzzle."""
    return generate_puzzle_html(PUZZLES[1])


@pytest.fixture
def page(puzzle_html: str) -> LxmlPageElement:
    """The consistent mock puzzle, parsed."""
    return LxmlPageElement.from_html(
        puzzle_html.encode("utf-8"), "http://test/nr=1"
    )


# =============================================================================
# aiohttp test server fixtures
# =============================================================================


def find_free_port() -> int:
    """Find a free port on localhost.

    Returns:
        An available port number.
    """
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


class AioHttpTestServer:
    """Wrapper to run aiohttp server in a background thread."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"

    @property
    def base_url(self) -> str:
        """Puzzle URL prefix, ready for the identifier to be appended."""
        return f"{self.url}/index.php?page=krzyzowki&nr="

    def start(self) -> None:
        """Start the server in a background thread."""
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        self._started.wait(timeout=5.0)

    def _run_server(self) -> None:
        """Run the server in an asyncio event loop."""
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._started.set()
        self._loop.run_forever()

    def stop(self) -> None:
        """Stop the server and clean up resources."""
        if self._loop and self._runner:
            future = asyncio.run_coroutine_threadsafe(
                self._runner.cleanup(), self._loop
            )
            try:
                future.result(timeout=2.0)
            except Exception:
                pass  # Best effort cleanup

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def archive_server() -> Generator[AioHttpTestServer, None, None]:
    """Start the mock archive on a random port.

    Yields:
        AioHttpTestServer instance with the mock archive running.
    """
    server = AioHttpTestServer(create_app(), find_free_port())
    server.start()
    yield server
    server.stop()


@pytest.fixture
def settings(archive_server: AioHttpTestServer, tmp_path: Path) -> FetchSettings:
    """Settings pointing at the mock archive, without delays.

    Covers identifiers 1-8; the slow page (9) is left out.
    """
    return FetchSettings(
        base_url=archive_server.base_url,
        output_dir=tmp_path / "data",
        first_id=1,
        max_id=8,
        max_retries=2,
        retry_base_delay=0,
        delay=0,
        timeout=5.0,
    )
