"""Public interface definitions for external service providers.

Concrete adapters live in ``coverscout.providers`` and are injected at
runtime by ``coverscout.main`` (or the CLI), so services can be unit-tested
against mocks.

    Interface      →  Concrete implementations
    ───────────────────────────────────────────
    IPageFetcher   →  FlareSolverrFetcher
"""

from coverscout.interfaces.page_fetcher import IPageFetcher

__all__ = ["IPageFetcher"]
