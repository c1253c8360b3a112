"""Notion workspace configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

NOTION_BASE_URL = "https://api.notion.com/v1/"
NOTION_API_VERSION = "2022-06-28"
NOTION_TOKEN_FILE = Path(".config/notion_token")
NOTION_DATABASE_ID_FILE = Path(".config/database_id")
# name used by earlier releases of the sync script
LEGACY_DATABASE_ID_VAR = "DATABASE_ID"


@dataclass(frozen=True, slots=True)
class NotionConfig:
    """Holds Notion API credentials and the catalog database id."""

    token: str
    database_id: str
    resilience: ResilienceConfig


def get_notion_config(*, resilience: ResilienceConfig | None = None) -> NotionConfig:
    values = require_env_vars(
        ("NOTION_TOKEN", "NOTION_DATABASE_ID"),
        fallback_files={
            "NOTION_TOKEN": NOTION_TOKEN_FILE,
            "NOTION_DATABASE_ID": NOTION_DATABASE_ID_FILE,
        },
        aliases={"NOTION_DATABASE_ID": LEGACY_DATABASE_ID_VAR},
    )
    token = values["NOTION_TOKEN"]
    return NotionConfig(
        token=token,
        database_id=values["NOTION_DATABASE_ID"],
        resilience=resilience
        or ResilienceConfig(
            name="notion",
            base_url=NOTION_BASE_URL,
            ratelimit=RateLimit(max_calls=3, per_seconds=1.0),
            retry=RetryPolicy(total=4),
            # page queries must always reflect the live database
            cache=None,
            default_headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": NOTION_API_VERSION,
            },
        ),
    )
