"""Pydantic response schemas for the coverscout API.

Convention: response schemas end with "Response".  The covers envelope keeps
the field names existing clients already consume (``artist``, ``type``,
``pagination``, ``data``); nested models serialize with camelCase aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from coverscout.models.covers import CoverRelation, PaginationInfo, RelationKind, ScrapeResult


class CoversResponse(BaseModel):
    """Envelope returned by both covers endpoints."""

    artist: str
    type: RelationKind
    pagination: PaginationInfo
    data: list[CoverRelation] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ScrapeResult) -> CoversResponse:
        return cls(
            artist=result.subject_artist,
            type=result.relation_kind,
            pagination=result.pagination,
            data=result.relations,
        )


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
