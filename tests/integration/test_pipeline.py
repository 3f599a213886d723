"""End-to-end tests: CoversService over the real fetcher and extractor.

Only the network is faked. The FlareSolverr proxy is an ``httpx.MockTransport``
and backoff delays go to a recording sleep.
"""

from __future__ import annotations

import pytest

from coverscout.models.covers import PaginationInfo, RelationKind
from coverscout.providers.fetcher.flaresolverr_provider import FlareSolverrFetcher
from coverscout.services.covers_service import CoversService
from coverscout.utils.errors import InvalidInputError, NotFoundError, TooManyAttemptsError
from tests.conftest import COVERS_PAGE_HTML, EMPTY_PAGE_HTML, ScriptedProxy, proxy_error, proxy_ok


@pytest.mark.asyncio
async def test_scrape_after_transient_proxy_failure(make_proxy_client, recording_sleep, mock_settings) -> None:
    proxy = ScriptedProxy(proxy_error(), proxy_ok(COVERS_PAGE_HTML))
    async with make_proxy_client(proxy) as client:
        fetcher = FlareSolverrFetcher.from_settings(client, mock_settings, sleep=recording_sleep)
        service = CoversService(fetcher=fetcher)
        result = await service.scrape("Nine Inch Nails", RelationKind.COVERED_BY_OTHERS, "2")

    assert proxy.calls == 2
    assert recording_sleep.delays == [2.0]
    assert {p["url"] for p in proxy.payloads} == {
        "https://www.whosampled.com/Nine%20Inch%20Nails/covered/?sp=2"
    }
    assert result.pagination == PaginationInfo(current_page=2, total_pages=4)
    assert [(r.track.name, r.cover.name, r.cover.artist) for r in result.relations] == [
        ("Hurt", "Hurt", "Johnny Cash"),
        ("Hurt", "Hurt", "Leona Lewis"),
        ("Closer", "Closer", "Kings of Leon"),
    ]


@pytest.mark.asyncio
async def test_exhausted_proxy_surfaces_too_many_attempts(make_proxy_client, recording_sleep, mock_settings) -> None:
    proxy = ScriptedProxy(proxy_error())
    async with make_proxy_client(proxy) as client:
        fetcher = FlareSolverrFetcher.from_settings(client, mock_settings, sleep=recording_sleep)
        with pytest.raises(TooManyAttemptsError):
            await CoversService(fetcher=fetcher).get_covers("Moby")

    assert proxy.calls == mock_settings.fetch_max_attempts


@pytest.mark.asyncio
async def test_empty_page_is_not_found(make_proxy_client, recording_sleep, mock_settings) -> None:
    proxy = ScriptedProxy(proxy_ok(EMPTY_PAGE_HTML))
    async with make_proxy_client(proxy) as client:
        fetcher = FlareSolverrFetcher.from_settings(client, mock_settings, sleep=recording_sleep)
        with pytest.raises(NotFoundError) as exc_info:
            await CoversService(fetcher=fetcher).get_covers("Nobody")

    assert proxy.calls == 1
    assert exc_info.value.reason == "no_track_items"


@pytest.mark.asyncio
async def test_blank_artist_makes_zero_proxy_calls(make_proxy_client, recording_sleep, mock_settings) -> None:
    proxy = ScriptedProxy(proxy_ok(COVERS_PAGE_HTML))
    async with make_proxy_client(proxy) as client:
        fetcher = FlareSolverrFetcher.from_settings(client, mock_settings, sleep=recording_sleep)
        with pytest.raises(InvalidInputError):
            await CoversService(fetcher=fetcher).get_covered("")

    assert proxy.calls == 0
