"""HTTP client for the Notion API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import ValidationError

from shelfsync.adapters.http_resilience import ResilientClient
from shelfsync.domain.errors import WorkspaceError

from .schema import NotionErrorResponse, NotionPage, NotionQueryResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Iterator
    from types import TracebackType

    from shelfsync.config.http_resilience import ResilienceConfig
    from shelfsync.config.notion import NotionConfig

log = getLogger(__name__)

PAGE_SIZE: Final[int] = 100


class NotionAPIError(WorkspaceError):
    """Raised when Notion rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class NotionClient:
    """Synchronous facade over the Notion database and page endpoints.

    Like the registry client it keeps one event loop alive so the rate limiter
    spans every call made during a run.
    """

    def __init__(
        self,
        *,
        config: NotionConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self.database_id = config.database_id
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    def __enter__(self) -> NotionClient:
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

    def query_database(self, *, start_cursor: str | None = None) -> NotionQueryResponse:
        body: dict[str, object] = {"page_size": PAGE_SIZE}
        if start_cursor is not None:
            body["start_cursor"] = start_cursor
        payload = self._run(self._request("POST", f"databases/{self.database_id}/query", body))
        try:
            return NotionQueryResponse.model_validate(payload)
        except ValidationError as exc:
            raise NotionAPIError(f"Unexpected database query response: {exc}") from exc

    def iter_pages(self) -> Iterator[NotionPage]:
        """Yield every page of the database, following pagination cursors."""

        cursor: str | None = None
        while True:
            response = self.query_database(start_cursor=cursor)
            yield from response.results
            if not response.has_more or response.next_cursor is None:
                return
            cursor = response.next_cursor

    def update_page(self, page_id: str, body: dict[str, object]) -> None:
        self._run(self._request("PATCH", f"pages/{page_id}", body))

    def _run[T](self, coro: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coro)

    async def _request(self, method: str, path: str, body: dict[str, object]) -> object:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        try:
            response = await self._client.request(method, path, json=body)
        except httpx.HTTPError as exc:
            raise NotionAPIError(f"Notion {method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _error_from_response(response)
        try:
            return response.json()
        except ValueError as exc:
            raise NotionAPIError(f"Notion returned invalid JSON for {path}") from exc


def _error_from_response(response: httpx.Response) -> NotionAPIError:
    try:
        error = NotionErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        error = NotionErrorResponse(status=response.status_code, message=response.text[:200])
    log.error("Notion API error (%s): %s", error.code or response.status_code, error.message)
    return NotionAPIError(error.message, status_code=response.status_code, code=error.code)
