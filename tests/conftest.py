from __future__ import annotations

from datetime import UTC, datetime

import pytest


@pytest.fixture
def stamp() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path_factory: pytest.TempPathFactory,
) -> None:
    for name in (
        "NOTION_TOKEN",
        "NOTION_DATABASE_ID",
        "DATABASE_ID",
        "BGG_API_TOKEN",
        "BGG_BASE_URL",
        "SHELFSYNC_CATEGORIES",
        "SHELFSYNC_DEFAULT_CATEGORY",
        "SHELFSYNC_EXPORT_PATH",
        "SHELFSYNC_HEADER_PATH",
        "SHELFSYNC_FOOTER_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHELFSYNC_DATA_DIR", str(tmp_path_factory.mktemp("data")))
