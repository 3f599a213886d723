"""Domain models for cover-song relationships scraped from WhoSampled.

All models are frozen Pydantic v2 models.  Python attributes are snake_case;
the JSON form uses camelCase aliases (``image_url`` -> ``imageUrl``,
``current_page`` -> ``currentPage``) so the API envelope matches what
existing clients of the service expect.

Key relationships:
    - CoverRelation pairs one TrackInfo (the track-item on the page) with
      one CoverInfo (a connection entry inside it)
    - ScrapeResult owns a list of CoverRelation plus its PaginationInfo
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Shared config: immutable, camelCase on the wire, snake_case in Python.
_MODEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RelationKind(str, Enum):  # noqa: UP042
    """Which direction of cover relationship is being queried.

    The value is what appears as ``type`` in the response envelope.
    """

    COVERS_BY = "covers_by"                  # songs the artist covered
    COVERED_BY_OTHERS = "covered_by_others"  # songs by others covering the artist

    @property
    def path_segment(self) -> str:
        """URL path segment on the source site (``covers`` / ``covered``)."""
        return "covers" if self is RelationKind.COVERS_BY else "covered"

    @property
    def not_found_phrase(self) -> str:
        """Preposition used in not-found messages: covers *by* / covers *of*."""
        return "by" if self is RelationKind.COVERS_BY else "of"


class TrackInfo(BaseModel):
    """The anchor track of a track-item section.

    Depending on the relation kind this is either the song being covered or
    the song doing the covering.
    """

    model_config = _MODEL_CONFIG

    name: str = Field(min_length=1)
    year: str | None = None        # "1975", parentheses already stripped
    url: str | None = None         # site-relative detail-page link
    image_url: str | None = None   # cover-art <img src>


class CoverInfo(BaseModel):
    """The related track listed in a connection entry."""

    model_config = _MODEL_CONFIG

    name: str = Field(min_length=1)
    artist: str | None = None
    artist_url: str | None = None
    year: str | None = None
    url: str | None = None


class CoverRelation(BaseModel):
    """One cover link: a track-item's track paired with one connection entry."""

    model_config = _MODEL_CONFIG

    track: TrackInfo
    cover: CoverInfo


class PaginationInfo(BaseModel):
    """Current page and page count for a listing; ``{1, 1}`` for single pages."""

    model_config = _MODEL_CONFIG

    current_page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _total_covers_current(self) -> PaginationInfo:
        if self.total_pages < self.current_page:
            raise ValueError("total_pages must be >= current_page")
        return self


class PageExtraction(BaseModel):
    """Everything the relation extractor pulls out of one rendered page.

    ``track_item_count`` counts track-item sections found, whether or not
    they produced any relation.  It lets callers tell a page with no
    sections apart from one whose sections held no usable entries.
    """

    model_config = _MODEL_CONFIG

    relations: list[CoverRelation] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)
    track_item_count: int = Field(default=0, ge=0)


class ScrapeResult(BaseModel):
    """The unit returned to callers for one (artist, kind, page) request."""

    model_config = _MODEL_CONFIG

    subject_artist: str
    relation_kind: RelationKind
    pagination: PaginationInfo
    relations: list[CoverRelation] = Field(default_factory=list)
