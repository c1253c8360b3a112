"""Port for the external game registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shelfsync.domain.model import ExternalGame, SearchResult


@runtime_checkable
class GameRegistry(Protocol):
    """Search and detail lookups against the reference registry.

    Implementations own their retry, backoff and rate limiting and raise
    ``RegistryError`` once they give up.
    """

    def search(self, text: str, *, exact: bool) -> SearchResult: ...

    def fetch_games(self, game_ids: Sequence[int]) -> list[ExternalGame]: ...

    def fetch_game(self, game_id: int) -> ExternalGame: ...


__all__ = ["GameRegistry"]
