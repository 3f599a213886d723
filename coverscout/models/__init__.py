"""coverscout domain models — re-exports all public model classes."""

from __future__ import annotations

from coverscout.models.covers import (
    CoverInfo,
    CoverRelation,
    PageExtraction,
    PaginationInfo,
    RelationKind,
    ScrapeResult,
    TrackInfo,
)

__all__ = [
    "CoverInfo",
    "CoverRelation",
    "PageExtraction",
    "PaginationInfo",
    "RelationKind",
    "ScrapeResult",
    "TrackInfo",
]
