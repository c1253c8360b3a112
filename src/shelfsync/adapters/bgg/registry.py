"""``GameRegistry`` implementation backed by BoardGameGeek."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.config.bgg import get_bgg_config

from .client import MAX_IDS_PER_REQUEST, BggAPIError, BggClient, should_cache_payload
from .translator import translate_search, translate_thing

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shelfsync.domain.model import ExternalGame, SearchResult

log = getLogger(__name__)


class BggRegistry:
    def __init__(self, client: BggClient) -> None:
        self._client = client

    def close(self) -> None:
        self._client.close()

    def search(self, text: str, *, exact: bool) -> SearchResult:
        response = self._client.search(query=text, exact=exact)
        result = translate_search(response)
        log.debug("Search %r (exact=%s) returned %d hits", text, exact, len(result.hits))
        return result

    def fetch_games(self, game_ids: Sequence[int]) -> list[ExternalGame]:
        games: list[ExternalGame] = []
        ids = list(game_ids)
        for start in range(0, len(ids), MAX_IDS_PER_REQUEST):
            response = self._client.fetch_things(ids=ids[start : start + MAX_IDS_PER_REQUEST])
            games.extend(translate_thing(thing) for thing in response.items)
        return games

    def fetch_game(self, game_id: int) -> ExternalGame:
        games = self.fetch_games([game_id])
        for game in games:
            if game.id == game_id:
                return game
        raise BggAPIError(f"BoardGameGeek has no item with id {game_id}")


def build_bgg_registry() -> BggRegistry:
    """Create a registry using the environment's BoardGameGeek configuration."""

    config = get_bgg_config(cache_predicate=should_cache_payload)
    return BggRegistry(BggClient(config=config))
