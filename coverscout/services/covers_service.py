"""Orchestration for cover-relationship lookups.

Glues the page fetcher and the relation extractor together for one
``(artist, relation kind, page)`` request:

    validate name -> build WhoSampled URL -> fetch rendered HTML
                  -> extract relations + pagination -> ScrapeResult

Fetch errors propagate unchanged.  A page that parses to zero relations
raises :class:`NotFoundError`; whether the page had no track sections at
all or only empty ones is logged and attached to the error as ``reason``.
"""

from __future__ import annotations

from urllib.parse import quote

from coverscout.interfaces.page_fetcher import IPageFetcher
from coverscout.models.covers import RelationKind, ScrapeResult
from coverscout.services.relation_extractor import RelationExtractor
from coverscout.utils.errors import InvalidInputError, NotFoundError
from coverscout.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://www.whosampled.com"


def build_target_url(
    artist_name: str,
    kind: RelationKind,
    page: str = "1",
    base_url: str = _DEFAULT_BASE_URL,
) -> str:
    """Build the listing URL for *artist_name* and *kind*.

    The artist name is percent-encoded as a single path segment (``/``,
    ``&``, ``?`` and spaces included).  A blank *page* falls back to ``"1"``.

    >>> build_target_url("AC/DC", RelationKind.COVERS_BY)
    'https://www.whosampled.com/AC%2FDC/covers/?sp=1'
    """
    page = str(page).strip() or "1"
    return (
        f"{base_url.rstrip('/')}/{quote(artist_name, safe='')}"
        f"/{kind.path_segment}/?sp={quote(page, safe='')}"
    )


class CoversService:
    """Looks up cover relationships for an artist on WhoSampled.

    Parameters
    ----------
    fetcher:
        Any :class:`IPageFetcher`; in production a ``FlareSolverrFetcher``.
    extractor:
        Relation extractor; a fresh :class:`RelationExtractor` by default.
    base_url:
        Origin of the target site.
    """

    def __init__(
        self,
        fetcher: IPageFetcher,
        extractor: RelationExtractor | None = None,
        base_url: str = _DEFAULT_BASE_URL,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor or RelationExtractor()
        self._base_url = base_url
        self._logger = get_logger(__name__)

    async def scrape(
        self,
        artist_name: str,
        kind: RelationKind,
        page: str | int = "1",
    ) -> ScrapeResult:
        """Fetch and parse one page of *kind* relations for *artist_name*.

        Raises
        ------
        InvalidInputError
            If *artist_name* is empty or whitespace (no request is made).
        TooManyAttemptsError
            Propagated from the fetcher when the proxy keeps failing.
        NotFoundError
            If the page holds no cover relations.
        """
        name = (artist_name or "").strip()
        if not name:
            raise InvalidInputError("No artist name was provided.")

        url = build_target_url(name, kind, str(page), base_url=self._base_url)
        self._logger.info("covers_scrape_started", artist=name, kind=kind.value, url=url)

        html = await self._fetcher.fetch(url)
        extraction = self._extractor.extract(html)

        if not extraction.relations:
            reason = (
                "no_track_items" if extraction.track_item_count == 0 else "no_connection_entries"
            )
            self._logger.warning(
                "covers_scrape_empty",
                artist=name,
                kind=kind.value,
                reason=reason,
                track_items=extraction.track_item_count,
            )
            raise NotFoundError(
                f"No covers {kind.not_found_phrase} {name} found.",
                artist=name,
                relation_kind=kind.value,
                reason=reason,
            )

        self._logger.info(
            "covers_scrape_complete",
            artist=name,
            kind=kind.value,
            relations=len(extraction.relations),
            current_page=extraction.pagination.current_page,
            total_pages=extraction.pagination.total_pages,
        )
        return ScrapeResult(
            subject_artist=name,
            relation_kind=kind,
            pagination=extraction.pagination,
            relations=extraction.relations,
        )

    async def get_covers(self, artist_name: str, page: str | int = "1") -> ScrapeResult:
        """Songs *artist_name* covered."""
        return await self.scrape(artist_name, RelationKind.COVERS_BY, page)

    async def get_covered(self, artist_name: str, page: str | int = "1") -> ScrapeResult:
        """Songs by *artist_name* that others covered."""
        return await self.scrape(artist_name, RelationKind.COVERED_BY_OTHERS, page)
