"""Translate BoardGameGeek payloads into registry entities."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from shelfsync.domain.model import ExternalGame, LinkType, SearchHit, SearchResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import BggName, BggSearchResponse, BggThing

log = getLogger(__name__)

GAME_URL_TEMPLATE: Final[str] = "https://www.boardgamegeek.com/boardgame/{id}"

_LINK_TYPE_MAP: dict[str, LinkType] = {
    "boardgamecategory": LinkType.CATEGORY,
    "boardgamemechanic": LinkType.MECHANIC,
    "boardgamefamily": LinkType.FAMILY,
    "boardgameimplementation": LinkType.IMPLEMENTATION,
    "boardgamedesigner": LinkType.DESIGNER,
    "boardgameartist": LinkType.ARTIST,
    "boardgamepublisher": LinkType.PUBLISHER,
}

# Image urls come back with their parentheses double-escaped, both before and
# after XML entity decoding.
_IMAGE_URL_FIXES: tuple[tuple[str, str], ...] = (
    ("&amp;&amp;#35;40;", "("),
    ("&amp;&amp;#35;41;", ")"),
    ("&&#35;40;", "("),
    ("&&#35;41;", ")"),
)


def game_url(game_id: int) -> str:
    return GAME_URL_TEMPLATE.format(id=game_id)


def clean_image_url(url: str | None) -> str | None:
    if not url:
        return None
    for escaped, plain in _IMAGE_URL_FIXES:
        url = url.replace(escaped, plain)
    return url


def primary_name(names: Sequence[BggName]) -> str | None:
    """Join the primary names; a lone name is used whatever its type."""

    if not names:
        return None
    if len(names) == 1:
        return names[0].value
    primaries = [name.value for name in names if name.type == "primary"]
    return " / ".join(primaries) or None


def translate_thing(thing: BggThing) -> ExternalGame:
    details: dict[LinkType, list[str]] = {}
    for link in thing.links:
        link_type = _LINK_TYPE_MAP.get(link.type)
        if link_type is None:
            continue
        details.setdefault(link_type, []).append(link.value)

    return ExternalGame(
        id=thing.id,
        constructed_url=game_url(thing.id),
        primary_name=primary_name(thing.names),
        year_published=thing.year_published,
        min_players=thing.min_players,
        max_players=thing.max_players,
        playing_time=thing.playing_time,
        min_playtime=thing.min_playtime,
        max_playtime=thing.max_playtime,
        min_age=thing.min_age,
        image_url=clean_image_url(thing.image),
        details=details,
    )


def translate_search(response: BggSearchResponse) -> SearchResult:
    hits = tuple(
        SearchHit(
            id=item.id,
            name=primary_name(item.names),
            year_published=item.year_published,
            kind=item.type,
        )
        for item in response.items
    )
    return SearchResult(total=response.total or len(hits), hits=hits)
