"""Shared fixtures for Notion adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from shelfsync.config.http_resilience import ResilienceConfig
from shelfsync.config.notion import NotionConfig

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "notion"


def load_fixture(name: str) -> dict[str, object]:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def query_pages() -> list[dict[str, object]]:
    return [load_fixture("query_first.json"), load_fixture("query_second.json")]


@pytest.fixture
def notion_config() -> NotionConfig:
    return NotionConfig(
        token="secret-token",
        database_id="db-123",
        resilience=ResilienceConfig(
            name="notion",
            base_url="https://notion.test/v1/",
            cache=None,
            default_headers={"Authorization": "Bearer secret-token"},
        ),
    )
