"""BoardGameGeek XML API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from defusedxml import DefusedXmlException, ElementTree
from pydantic import ValidationError

from shelfsync.adapters.http_resilience import ResilientClient
from shelfsync.domain.errors import RegistryError

from .schema import (
    BggSearchResponse,
    BggThingResponse,
    error_message,
    items_payload,
    parse_xml,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Sequence
    from types import TracebackType
    from xml.etree.ElementTree import Element

    from shelfsync.config.bgg import BggConfig
    from shelfsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

SEARCH_TYPES: Final[str] = "boardgame,boardgameexpansion,boardgameaccessory"
MAX_IDS_PER_REQUEST: Final[int] = 20

_UNCACHEABLE_MARKERS: Final[tuple[bytes, ...]] = (b"<error", b"Please try again later")


def should_cache_payload(body: bytes) -> bool:
    return not any(marker in body for marker in _UNCACHEABLE_MARKERS)


class BggAPIError(RegistryError):
    """Raised when BoardGameGeek returns an error or an unreadable response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BggClient:
    """Low-level client for the BoardGameGeek XML API 2.

    Calls are synchronous for the caller but share one event loop, so the rate
    limiter and connection pool of the underlying ``ResilientClient`` hold for
    the lifetime of the client. Call ``close`` (or use it as a context manager)
    when done.
    """

    def __init__(
        self,
        *,
        config: BggConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def __enter__(self) -> BggClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        if self._client is not None:
            self._runner.run(self._client.aclose())
            self._client = None
        self._runner.close()
        self._runner = None

    def search(self, *, query: str, exact: bool) -> BggSearchResponse:
        params = {"query": query, "type": SEARCH_TYPES}
        if exact:
            params["exact"] = "1"
        root = self._run(self._get_xml("search", params))
        try:
            return BggSearchResponse.model_validate(items_payload(root))
        except ValidationError as exc:
            raise BggAPIError(f"Unexpected BoardGameGeek search response: {exc}") from exc

    def fetch_things(self, *, ids: Sequence[int]) -> BggThingResponse:
        if len(ids) > MAX_IDS_PER_REQUEST:
            raise ValueError(f"At most {MAX_IDS_PER_REQUEST} ids per request, got {len(ids)}")
        params = {"id": ",".join(str(game_id) for game_id in ids)}
        root = self._run(self._get_xml("thing", params))
        try:
            return BggThingResponse.model_validate(items_payload(root))
        except ValidationError as exc:
            raise BggAPIError(f"Unexpected BoardGameGeek thing response: {exc}") from exc

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coro)

    async def _get_xml(self, path: str, params: dict[str, str]) -> Element:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise BggAPIError(
                f"BoardGameGeek {path} request failed: {exc}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise BggAPIError(f"BoardGameGeek {path} request failed: {exc}") from exc

        if response.status_code == httpx.codes.ACCEPTED:
            raise BggAPIError(
                f"BoardGameGeek queued the {path} request, try again later",
                status_code=response.status_code,
            )
        try:
            root = parse_xml(response.content)
        except (ElementTree.ParseError, DefusedXmlException) as exc:
            raise BggAPIError(f"Unreadable BoardGameGeek {path} response: {exc}") from exc

        message = error_message(root)
        if message is not None:
            log.error("BoardGameGeek %s error: %s", path, message)
            raise BggAPIError(message, status_code=response.status_code)
        return root
