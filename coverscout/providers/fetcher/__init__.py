"""Rendered-page fetcher adapters (IPageFetcher implementations)."""

from coverscout.providers.fetcher.flaresolverr_provider import FlareSolverrFetcher

__all__ = ["FlareSolverrFetcher"]
