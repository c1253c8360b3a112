"""BoardGameGeek configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy, ShouldCacheHook

DEFAULT_BGG_BASE_URL = "https://boardgamegeek.com/xmlapi2/"
BGG_TIMEOUT_SECONDS = 10.0
BGG_USER_AGENT = "shelfsync (https://github.com/shelfsync/shelfsync)"
# cached registry responses are reused for a week
BGG_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60


@dataclass(frozen=True, slots=True)
class BggConfig:
    resilience: ResilienceConfig


def get_bgg_config(*, cache_predicate: ShouldCacheHook | None = None) -> BggConfig:
    headers = {"User-Agent": BGG_USER_AGENT}
    token = optional_env_var("BGG_API_TOKEN")
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="bgg",
        base_url=os.getenv("BGG_BASE_URL") or DEFAULT_BGG_BASE_URL,
        timeout_seconds=BGG_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=1, per_seconds=2.0),
        # 202 means the request was queued server-side; asking again later succeeds
        retry=RetryPolicy(
            total=5,
            backoff_factor=1.0,
            status_forcelist=frozenset({202, 429, 500, 502, 503, 504}),
        ),
        cache=CacheConfig(
            backend="sqlite",
            default_ttl_seconds=BGG_CACHE_TTL_SECONDS,
            should_cache=cache_predicate,
        ),
        default_headers=headers,
    )
    return BggConfig(resilience=resilience)
