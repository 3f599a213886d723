"""Custom exception hierarchy for coverscout.

All application exceptions inherit from :class:`CoverScoutError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "flaresolverr") caused the failure, and a class-level
``status_code`` the API layer uses when it converts the error to JSON.

The hierarchy is organized by who is at fault:

    CoverScoutError  (base -- catch-all for any coverscout error)
    +-- InvalidInputError        (caller passed an empty artist name, etc.)
    +-- NotFoundError            (page fetched and parsed, zero relations)
    +-- TooManyAttemptsError     (fetch attempt budget exhausted)
    +-- ConfigurationError       (startup / invalid config)
    +-- ProviderUnavailableError (solving proxy misbehaved -- retryable)
        +-- ConnectionFailureError
        +-- BadGatewayError
        +-- GatewayTimeoutError

Only the :class:`ProviderUnavailableError` branch is retried by the fetcher.
Once the attempt budget runs out the fetcher raises
:class:`TooManyAttemptsError`, so callers never see an individual proxy
fault.
"""


class CoverScoutError(Exception):
    """Base exception for all coverscout errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[flaresolverr] Request timeout``.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller-facing errors
# ---------------------------------------------------------------------------

class InvalidInputError(CoverScoutError):
    """Raised when the caller supplies an unusable argument (blank artist name)."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid input",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(CoverScoutError):
    """Raised when a fetched page yields zero cover relations.

    ``reason`` is an internal diagnostic: ``"no_track_items"`` when the page
    had no track sections at all, ``"no_connection_entries"`` when sections
    were present but none held a usable entry.  It is logged but not part of
    the response body.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "No results found",
        provider_name: str | None = None,
        *,
        artist: str | None = None,
        relation_kind: str | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._artist = artist
        self._relation_kind = relation_kind
        self._reason = reason

    @property
    def artist(self) -> str | None:
        return self._artist

    @property
    def relation_kind(self) -> str | None:
        return self._relation_kind

    @property
    def reason(self) -> str | None:
        return self._reason


class TooManyAttemptsError(CoverScoutError):
    """Raised when every fetch attempt against the solving proxy failed.

    Surfaced to clients as a rate-limited / temporarily unavailable
    condition rather than a client-input error.
    """

    status_code = 429

    def __init__(
        self,
        message: str = "Max retries exceeded",
        provider_name: str | None = None,
        *,
        attempts: int = 0,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._attempts = attempts

    @property
    def attempts(self) -> int:
        return self._attempts


class ConfigurationError(CoverScoutError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Solving-proxy faults (retryable)
# ---------------------------------------------------------------------------

class ProviderUnavailableError(CoverScoutError):
    """Raised when the solving proxy is unreachable or misbehaves.

    The fetcher's retry loop catches this (and its subclasses) and tries
    again after a backoff delay.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConnectionFailureError(ProviderUnavailableError):
    """Raised when the TCP/HTTP connection to the proxy fails."""

    status_code = 502

    def __init__(
        self,
        message: str = "Proxy connection error",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class BadGatewayError(ProviderUnavailableError):
    """Raised when the proxy answers with an unparseable or non-"ok" envelope."""

    status_code = 502

    def __init__(
        self,
        message: str = "Invalid proxy response",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class GatewayTimeoutError(ProviderUnavailableError):
    """Raised when the proxy call exceeds its client-side timeout."""

    status_code = 504

    def __init__(
        self,
        message: str = "Proxy request timeout",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
