"""Business-logic services: HTML extraction and scrape orchestration."""

from coverscout.services.covers_service import CoversService, build_target_url
from coverscout.services.relation_extractor import RelationExtractor, select_artist_link

__all__ = [
    "CoversService",
    "RelationExtractor",
    "build_target_url",
    "select_artist_link",
]
