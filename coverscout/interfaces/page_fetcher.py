"""Abstract base class for rendered-page fetchers.

The covers service only needs "give me the HTML for this URL".  Hiding the
solving proxy behind this contract keeps the orchestration testable with a
plain ``AsyncMock`` and leaves room for a different rendering backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IPageFetcher(ABC):
    """Contract for services that return the rendered HTML of a page."""

    @abstractmethod
    async def fetch(self, url: str, max_attempts: int | None = None) -> str:
        """Return the rendered HTML document at *url*.

        Parameters
        ----------
        url:
            Absolute URL, or a path relative to the target site's origin.
        max_attempts:
            Attempt budget for this call; ``None`` uses the fetcher's default.

        Returns
        -------
        str
            The rendered HTML body.

        Raises
        ------
        coverscout.utils.errors.TooManyAttemptsError
            If every attempt failed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"flaresolverr"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the fetcher is configured.

        Implementations should not perform a network round-trip here.
        """
