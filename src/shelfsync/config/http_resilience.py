"""Settings for the retrying, rate limited and caching HTTP clients.

Each remote service gets one ``ResilienceConfig``; the adapters turn it into a
``ResilientClient``. Values are frozen so a config can be shared between runs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, Literal

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

# Decides from the raw response body whether a response may be stored.
ShouldCacheHook = Callable[[bytes], bool]

DEFAULT_RETRY_STATUSES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})
# database queries and page updates are idempotent
DEFAULT_RETRY_METHODS: Final[frozenset[str]] = frozenset(
    {"GET", "HEAD", "OPTIONS", "PATCH", "POST"}
)
TRANSIENT_ERRORS: Final[tuple[type[httpx.HTTPError], ...]] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True)
class RateLimit:
    """At most ``max_calls`` requests per ``per_seconds`` window."""

    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    backoff_jitter: float = 1.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = DEFAULT_RETRY_METHODS
    status_forcelist: frozenset[int] = DEFAULT_RETRY_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = TRANSIENT_ERRORS


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Response cache settings.

    The ``sqlite`` backend persists under the data directory unless
    ``sqlite_path`` points elsewhere; ``memory`` lasts for one run.
    """

    backend: Literal["sqlite", "memory"] = "memory"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = None
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
    default_headers: Mapping[str, str] | None = None
