"""FlareSolverr-backed page fetcher.

WhoSampled sits behind anti-bot defences, so a plain ``GET`` returns a
challenge page more often than not.  This provider asks a FlareSolverr
instance to load the URL in a real browser and hand back the rendered HTML.

Each attempt is one ``POST`` to the proxy.  Proxy faults (connection error,
client-side timeout, unparseable or non-"ok" envelope) are retried with a
linear backoff of ``retry_base_delay * attempt`` seconds.  When the attempt
budget runs out a :class:`TooManyAttemptsError` is raised, chained to the
last fault.  The delay function is injected so tests never sleep.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable
from urllib.parse import urljoin

import httpx

from coverscout.config.settings import Settings
from coverscout.interfaces.page_fetcher import IPageFetcher
from coverscout.utils.errors import (
    BadGatewayError,
    ConnectionFailureError,
    GatewayTimeoutError,
    ProviderUnavailableError,
    TooManyAttemptsError,
)
from coverscout.utils.logging import get_logger

_PROVIDER_NAME = "flaresolverr"
_DEFAULT_PROXY_URL = "http://flaresolverr:8191/v1"
_DEFAULT_BASE_URL = "https://www.whosampled.com"
_DEFAULT_MAX_ATTEMPTS = 3
_DEFAULT_RETRY_BASE_DELAY = 2.0  # seconds
_DEFAULT_MAX_TIMEOUT_MS = 60000  # proxy-side render budget
_DEFAULT_CALL_TIMEOUT = 70.0  # seconds; must outlast the render budget

SleepFunc = Callable[[float], Awaitable[None]]


class FlareSolverrFetcher(IPageFetcher):
    """Fetch rendered HTML through a FlareSolverr proxy with bounded retries.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` used for the proxy call.  Tests pass
        one built on ``httpx.MockTransport``.
    proxy_url:
        FlareSolverr endpoint, e.g. ``http://flaresolverr:8191/v1``.
    base_url:
        Origin that site-relative URLs are resolved against.
    max_attempts:
        Default attempt budget per :meth:`fetch` call.
    retry_base_delay:
        Seconds to wait after failed attempt *n* is ``retry_base_delay * n``.
    max_timeout_ms:
        ``maxTimeout`` forwarded to the proxy.
    call_timeout:
        Client-side timeout for one proxy call, in seconds.
    sleep:
        Awaitable delay function; defaults to :func:`asyncio.sleep`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        proxy_url: str = _DEFAULT_PROXY_URL,
        base_url: str = _DEFAULT_BASE_URL,
        max_attempts: int = _DEFAULT_MAX_ATTEMPTS,
        retry_base_delay: float = _DEFAULT_RETRY_BASE_DELAY,
        max_timeout_ms: int = _DEFAULT_MAX_TIMEOUT_MS,
        call_timeout: float = _DEFAULT_CALL_TIMEOUT,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._http = http_client
        self._proxy_url = proxy_url
        self._base_url = base_url.rstrip("/")
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay
        self._max_timeout_ms = max_timeout_ms
        self._call_timeout = call_timeout
        self._sleep = sleep
        self._logger = get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        http_client: httpx.AsyncClient,
        settings: Settings,
        sleep: SleepFunc = asyncio.sleep,
    ) -> FlareSolverrFetcher:
        """Build a fetcher from application :class:`Settings`."""
        return cls(
            http_client,
            proxy_url=settings.flaresolverr_url,
            base_url=settings.site_base_url,
            max_attempts=settings.fetch_max_attempts,
            retry_base_delay=settings.fetch_retry_base_delay,
            max_timeout_ms=settings.flaresolverr_max_timeout_ms,
            call_timeout=settings.flaresolverr_call_timeout,
            sleep=sleep,
        )

    # -- Helpers ---------------------------------------------------------------

    def resolve_url(self, url: str) -> str:
        """Return *url* unchanged if absolute, else joined to the site origin."""
        if url.startswith(("http://", "https://")):
            return url
        return urljoin(f"{self._base_url}/", url)

    async def _solve(self, target_url: str) -> str:
        """Run one proxy round-trip and return the rendered body.

        Raises a :class:`ProviderUnavailableError` subclass on any fault.
        """
        payload = {
            "cmd": "request.get",
            "url": target_url,
            "maxTimeout": self._max_timeout_ms,
        }
        try:
            response = await self._http.post(
                self._proxy_url,
                json=payload,
                timeout=self._call_timeout,
            )
        except httpx.TimeoutException as exc:
            raise GatewayTimeoutError(
                "FlareSolverr request timeout", provider_name=_PROVIDER_NAME
            ) from exc
        except httpx.RequestError as exc:
            raise ConnectionFailureError(
                f"FlareSolverr connection error: {exc}", provider_name=_PROVIDER_NAME
            ) from exc

        # FlareSolverr reports its own failures in the JSON body (often with
        # HTTP 500), so the envelope is inspected regardless of status code.
        try:
            body = response.json()
        except ValueError as exc:
            raise BadGatewayError(
                "Invalid FlareSolverr response", provider_name=_PROVIDER_NAME
            ) from exc

        if not isinstance(body, dict):
            raise BadGatewayError("Invalid FlareSolverr response", provider_name=_PROVIDER_NAME)

        solution = body.get("solution")
        html = solution.get("response") if isinstance(solution, dict) else None
        if body.get("status") == "ok" and isinstance(html, str):
            return html

        raise BadGatewayError(
            f"FlareSolverr error: {body.get('message') or 'Unknown error'}",
            provider_name=_PROVIDER_NAME,
        )

    # -- IPageFetcher implementation -------------------------------------------

    async def fetch(self, url: str, max_attempts: int | None = None) -> str:
        """Fetch the rendered HTML at *url*, retrying proxy faults.

        Raises
        ------
        ValueError
            If the attempt budget is below 1.
        TooManyAttemptsError
            After *max_attempts* consecutive failures.
        """
        budget = self._max_attempts if max_attempts is None else max_attempts
        if budget < 1:
            raise ValueError(f"max_attempts must be >= 1, got {budget}")

        full_url = self.resolve_url(url)
        last_error: ProviderUnavailableError | None = None

        for attempt in range(1, budget + 1):
            self._logger.debug(
                "flaresolverr_fetch_attempt",
                url=full_url,
                attempt=attempt,
                max_attempts=budget,
            )
            try:
                html = await self._solve(full_url)
            except ProviderUnavailableError as exc:
                last_error = exc
                self._logger.warning(
                    "flaresolverr_attempt_failed",
                    url=full_url,
                    attempt=attempt,
                    max_attempts=budget,
                    error_type=type(exc).__name__,
                    error=exc.message,
                )
                if attempt < budget:
                    await self._sleep(self._retry_base_delay * attempt)
                continue

            self._logger.info(
                "flaresolverr_fetch_complete",
                url=full_url,
                attempt=attempt,
                size=len(html),
            )
            return html

        self._logger.error(
            "flaresolverr_attempts_exhausted",
            url=full_url,
            attempts=budget,
            last_error=str(last_error),
        )
        raise TooManyAttemptsError(
            f"Max retries exceeded fetching {full_url}",
            provider_name=_PROVIDER_NAME,
            attempts=budget,
        ) from last_error

    def get_provider_name(self) -> str:
        """Return ``'flaresolverr'``."""
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        """``True`` when a proxy URL is configured."""
        return bool(self._proxy_url)
