"""HTML-to-relations extraction for WhoSampled "covers" listing pages.

A listing page is a sequence of ``section.trackItem`` blocks.  Each block
names one anchor track (``h3.trackName``) and holds one or more
``.track-connection`` lists whose ``li`` entries are the related tracks.
Every entry becomes one :class:`CoverRelation`, in document order.

The site's markup is not a stable contract, so extraction degrades field by
field: a missing node yields ``None`` for that field and never raises.  Only
an entry with no usable connection name (or a section with no track name) is
dropped, because a relation without names is meaningless.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from coverscout.models.covers import (
    CoverInfo,
    CoverRelation,
    PageExtraction,
    PaginationInfo,
    TrackInfo,
)
from coverscout.utils.logging import get_logger

_TRACK_ITEM_SELECTOR = "section.trackItem"
_TRACK_NAME_SELECTOR = 'h3.trackName span[itemprop="name"]'
_TRACK_YEAR_SELECTOR = "h3.trackName .trackYear"
_TRACK_URL_SELECTOR = 'h3.trackName a[itemprop="url"]'
_TRACK_IMAGE_SELECTOR = ".trackCover img"
_CONNECTION_SELECTOR = ".track-connection"
_CONNECTION_NAME_CLASS = "connectionName"
_PAGINATION_SELECTOR = ".pagination"
_CURRENT_PAGE_SELECTOR = ".curr"
_PAGE_LINK_SELECTOR = ".page a"

_PAREN_YEAR_RE = re.compile(r"\((\d{4})\)")


def _clean(value: str | None) -> str | None:
    """Strip *value*; blank or missing becomes ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _text_of(node: Tag | None) -> str | None:
    return _clean(node.get_text()) if node is not None else None


def _attr_of(node: Tag | None, attr: str) -> str | None:
    if node is None:
        return None
    value = node.get(attr)
    # Multi-valued attributes come back as lists.
    if isinstance(value, list):
        value = " ".join(value)
    return _clean(value)


def _safe_int(value: str | None) -> int | None:
    """Parse an integer from *value*, returning ``None`` on failure."""
    try:
        return int(value.strip())
    except (ValueError, AttributeError):
        return None


def select_artist_link(entry: Tag) -> Tag | None:
    """Pick the cover artist's anchor from a connection entry.

    Rule: the first ``<a>`` in the entry that is *not* the
    ``a.connectionName`` link.  The site currently renders the artist as the
    secondary anchor after the song title.

    This depends on anchor order in the site's present layout; if WhoSampled
    adds another link (label, featured artist) ahead of the artist, this
    rule will pick the wrong one.
    """
    for link in entry.find_all("a"):
        if _CONNECTION_NAME_CLASS not in (link.get("class") or []):
            return link
    return None


class RelationExtractor:
    """Turns a rendered covers/covered listing page into structured data.

    Stateless and pure: the same HTML always yields the same result, and no
    method performs I/O.
    """

    def __init__(self) -> None:
        self._logger = get_logger(__name__)

    # -- Public API ------------------------------------------------------------

    def extract(self, html: str) -> PageExtraction:
        """Parse *html* once and return relations, pagination and section count."""
        soup = BeautifulSoup(html or "", "html.parser")
        sections = soup.select(_TRACK_ITEM_SELECTOR)
        relations = self._relations_from_sections(sections)
        pagination = self._pagination_from_soup(soup)

        self._logger.debug(
            "relation_extraction_complete",
            track_items=len(sections),
            relations=len(relations),
            current_page=pagination.current_page,
            total_pages=pagination.total_pages,
        )
        return PageExtraction(
            relations=relations,
            pagination=pagination,
            track_item_count=len(sections),
        )

    def extract_relations(self, html: str) -> list[CoverRelation]:
        """Return every cover relation on the page, in document order.

        Empty input, or a page without track-item sections, gives ``[]``.
        """
        soup = BeautifulSoup(html or "", "html.parser")
        return self._relations_from_sections(soup.select(_TRACK_ITEM_SELECTOR))

    def extract_pagination(self, html: str) -> PaginationInfo:
        """Return the page's pagination state, ``{1, 1}`` when there is none."""
        return self._pagination_from_soup(BeautifulSoup(html or "", "html.parser"))

    # -- Track items -----------------------------------------------------------

    def _relations_from_sections(self, sections: list[Tag]) -> list[CoverRelation]:
        relations: list[CoverRelation] = []
        for position, section in enumerate(sections):
            track = self._parse_track(section)
            if track is None:
                self._logger.debug("track_item_skipped_no_name", position=position)
                continue

            for connection in section.select(_CONNECTION_SELECTOR):
                for entry in connection.find_all("li"):
                    cover = self._parse_cover(entry)
                    if cover is None:
                        self._logger.debug(
                            "connection_entry_skipped_no_name",
                            track=track.name,
                        )
                        continue
                    relations.append(CoverRelation(track=track, cover=cover))
        return relations

    @staticmethod
    def _parse_track(section: Tag) -> TrackInfo | None:
        name = _text_of(section.select_one(_TRACK_NAME_SELECTOR))
        if name is None:
            return None

        raw_year = _text_of(section.select_one(_TRACK_YEAR_SELECTOR))
        year = _clean(raw_year.replace("(", "").replace(")", "")) if raw_year else None

        return TrackInfo(
            name=name,
            year=year,
            url=_attr_of(section.select_one(_TRACK_URL_SELECTOR), "href"),
            image_url=_attr_of(section.select_one(_TRACK_IMAGE_SELECTOR), "src"),
        )

    @staticmethod
    def _parse_cover(entry: Tag) -> CoverInfo | None:
        name_link = entry.find("a", class_=_CONNECTION_NAME_CLASS)
        name = _text_of(name_link)
        if name is None:
            return None

        artist_link = select_artist_link(entry)
        year_match = _PAREN_YEAR_RE.search(entry.get_text())

        return CoverInfo(
            name=name,
            url=_attr_of(name_link, "href"),
            artist=_text_of(artist_link),
            artist_url=_attr_of(artist_link, "href"),
            year=year_match.group(1) if year_match else None,
        )

    # -- Pagination ------------------------------------------------------------

    @staticmethod
    def _pagination_from_soup(soup: BeautifulSoup) -> PaginationInfo:
        control = soup.select_one(_PAGINATION_SELECTOR)
        if control is None:
            return PaginationInfo(current_page=1, total_pages=1)

        current = _safe_int(_text_of(control.select_one(_CURRENT_PAGE_SELECTOR)))
        if current is None or current < 1:
            current = 1

        total = current
        for link in control.select(_PAGE_LINK_SELECTOR):
            page_number = _safe_int(link.get_text())
            if page_number is not None and page_number > total:
                total = page_number

        return PaginationInfo(current_page=current, total_pages=total)
