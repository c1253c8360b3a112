"""Normalised registry entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class LinkType(StrEnum):
    CATEGORY = "category"
    MECHANIC = "mechanic"
    FAMILY = "family"
    IMPLEMENTATION = "implementation"
    DESIGNER = "designer"
    ARTIST = "artist"
    PUBLISHER = "publisher"


@dataclass(frozen=True, slots=True)
class ExternalGame:
    """Full registry detail for one game, as consumed by field sync and match summaries."""

    id: int
    constructed_url: str
    primary_name: str | None = None
    year_published: int | None = None
    min_players: int | None = None
    max_players: int | None = None
    playing_time: int | None = None
    min_playtime: int | None = None
    max_playtime: int | None = None
    min_age: int | None = None
    image_url: str | None = None
    details: dict[LinkType, list[str]] = field(default_factory=dict[LinkType, list[str]])

    def linked(self, link_type: LinkType) -> list[str]:
        return self.details.get(link_type, [])


@dataclass(frozen=True, slots=True)
class SearchHit:
    id: int
    name: str | None = None
    year_published: int | None = None
    kind: str | None = None


@dataclass(frozen=True, slots=True)
class SearchResult:
    total: int
    hits: tuple[SearchHit, ...] = ()
