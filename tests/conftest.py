"""Shared pytest fixtures for the coverscout test suite."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import structlog

from coverscout.config.settings import Settings
from coverscout.interfaces.page_fetcher import IPageFetcher

# ---------------------------------------------------------------------------
# Sample markup
# ---------------------------------------------------------------------------

# Two track items: the first carries two connection entries (one of them
# in a second .track-connection block), the second has no year, no image
# and a single entry.  Pagination shows page 2 of 4.
COVERS_PAGE_HTML = """
<html><body>
<div class="trackList">
  <section class="trackItem">
    <div class="trackCover"><img src="https://cdn.example.com/hurt.jpg" alt="Hurt"></div>
    <h3 class="trackName">
      <a itemprop="url" href="/Nine-Inch-Nails/Hurt/">
        <span itemprop="name">Hurt</span>
      </a>
      <span class="trackYear">(1994)</span>
    </h3>
    <div class="track-connection">
      <ul>
        <li>
          <a class="connectionName" href="/Johnny-Cash/Hurt/">Hurt</a> by
          <a href="/Johnny-Cash/">Johnny Cash</a> (2002)
        </li>
      </ul>
    </div>
    <div class="track-connection">
      <ul>
        <li>
          <a class="connectionName playIcon" href="/Leona-Lewis/Hurt/">Hurt</a> by
          <a href="/Leona-Lewis/">Leona Lewis</a> (2011)
        </li>
      </ul>
    </div>
  </section>
  <section class="trackItem">
    <h3 class="trackName">
      <span itemprop="name">Closer</span>
    </h3>
    <div class="track-connection">
      <ul>
        <li>
          <a class="connectionName" href="/Kings-of-Leon/Closer/">Closer</a> by
          <a href="/Kings-of-Leon/">Kings of Leon</a>
        </li>
      </ul>
    </div>
  </section>
</div>
<div class="pagination">
  <span class="page"><a href="?sp=1">1</a></span>
  <span class="curr">2</span>
  <span class="page"><a href="?sp=3">3</a></span>
  <span class="page"><a href="?sp=4">4</a></span>
  <span class="next"><a href="?sp=3">Next &gt;</a></span>
</div>
</body></html>
"""

EMPTY_PAGE_HTML = "<html><body><h1>No results</h1></body></html>"


@pytest.fixture
def covers_page_html() -> str:
    """A rendered listing page with three relations across two track items."""
    return COVERS_PAGE_HTML


@pytest.fixture
def empty_page_html() -> str:
    """A rendered page without any track-item sections."""
    return EMPTY_PAGE_HTML


# ---------------------------------------------------------------------------
# Solving-proxy helpers
# ---------------------------------------------------------------------------


def proxy_ok(html: str) -> httpx.Response:
    """A FlareSolverr success envelope carrying *html*."""
    return httpx.Response(
        200,
        json={
            "status": "ok",
            "message": "Challenge not detected!",
            "solution": {"url": "https://www.whosampled.com/", "status": 200, "response": html},
        },
    )


def proxy_error(message: str = "Error solving the challenge. Timeout after 60.0 seconds.") -> httpx.Response:
    """A FlareSolverr failure envelope."""
    return httpx.Response(500, json={"status": "error", "message": message})


class ScriptedProxy:
    """``httpx.MockTransport`` handler that replays a list of outcomes.

    Each item is either an ``httpx.Response`` to return or an exception
    instance to raise.  The last item repeats once the script runs out.
    Every request body is recorded in ``payloads``.
    """

    def __init__(self, *outcomes: httpx.Response | Exception) -> None:
        self._outcomes = list(outcomes)
        self.payloads: list[dict[str, Any]] = []

    @property
    def calls(self) -> int:
        return len(self.payloads)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.payloads.append(json.loads(request.content))
        index = min(len(self.payloads) - 1, len(self._outcomes) - 1)
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        # Fresh copy so a repeated outcome is never a reused Response object.
        return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)


class RecordingSleep:
    """Async stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_proxy_client() -> Callable[[ScriptedProxy], httpx.AsyncClient]:
    """Factory for an ``httpx.AsyncClient`` backed by a scripted proxy."""

    def _make(proxy: ScriptedProxy) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(proxy))

    return _make


# ---------------------------------------------------------------------------
# Mock collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_page_fetcher() -> IPageFetcher:
    """Mock IPageFetcher; set ``fetch.return_value`` / ``side_effect`` per test."""
    mock = MagicMock(spec=IPageFetcher)
    mock.get_provider_name.return_value = "mock-fetcher"
    mock.is_available.return_value = True
    mock.fetch = AsyncMock(return_value=COVERS_PAGE_HTML)
    return mock


@pytest.fixture
def mock_settings() -> Settings:
    """Settings with a local proxy URL and test environment."""
    return Settings(
        flaresolverr_url="http://localhost:8191/v1",
        site_base_url="https://www.whosampled.com",
        fetch_max_attempts=3,
        fetch_retry_base_delay=2.0,
        app_env="test",
    )


@pytest.fixture
def reset_logging():
    """Undo any ``configure_logging`` call made by the test.

    Streams handed to structlog during a test (``capsys`` buffers, StringIO)
    are gone afterwards; the next ``get_logger`` reconfigures from scratch.
    """
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
