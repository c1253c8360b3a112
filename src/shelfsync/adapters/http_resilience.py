"""Async HTTP client shared by the BoardGameGeek and Notion adapters.

Every request passes through a retrying transport. A rate limiter and a hishel
response cache are added when the service's ``ResilienceConfig`` asks for them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as CachedResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from shelfsync.config.storage import get_http_cache_path

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.config.http_resilience import (
        CacheConfig,
        ResilienceConfig,
        RetryPolicy,
        ShouldCacheHook,
    )


def retry_from_policy(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        backoff_jitter=policy.backoff_jitter,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


class _BodyPredicateFilter(BaseFilter[CachedResponse]):
    """Stores a response only when ``predicate`` accepts its body."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: CachedResponse, body: bytes | None) -> bool:  # noqa: ARG002
        return body is None or bool(self._predicate(body))


def cache_storage(cache: CacheConfig) -> AsyncSqliteStorage:
    if cache.backend == "memory":
        database_path = ":memory:"
    else:
        database_path = cache.sqlite_path or str(get_http_cache_path())
    return AsyncSqliteStorage(database_path=database_path, default_ttl=cache.default_ttl_seconds)


def cache_policy(cache: CacheConfig) -> FilterPolicy | None:
    if cache.should_cache is None:
        return None
    return FilterPolicy(response_filters=[_BodyPredicateFilter(cache.should_cache)])


class ResilientClient:
    """One service's connection pool, with its retries, rate limit and cache."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        rate = config.ratelimit
        self._limiter = AsyncLimiter(rate.max_calls, rate.per_seconds) if rate else None

        transport = RetryTransport(retry=retry_from_policy(config.retry))
        headers = dict(config.default_headers or {})
        base_url = config.base_url or ""
        if config.cache is None:
            self._client = httpx.AsyncClient(
                base_url=base_url,
                headers=headers,
                timeout=config.timeout_seconds,
                transport=transport,
            )
        else:
            self._client = AsyncCacheClient(
                base_url=base_url,
                headers=headers,
                timeout=config.timeout_seconds,
                transport=transport,
                storage=cache_storage(config.cache),
                policy=cache_policy(config.cache),
            )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object = None,
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, url, params=params, json=json)
        async with self._limiter:
            return await self._client.request(method, url, params=params, json=json)

    async def get(self, url: str, *, params: Mapping[str, str] | None = None) -> httpx.Response:
        return await self.request("GET", url, params=params)
