"""Workspace adapter exposing the Notion catalog database through the domain ports."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.config.notion import get_notion_config

from .client import NotionClient
from .translator import translate_page, updates_payload

if TYPE_CHECKING:
    from collections.abc import Iterator

    from shelfsync.domain.model import FieldUpdates
    from shelfsync.domain.record import CatalogRecord

log = getLogger(__name__)


class NotionWorkspace:
    """``RecordSource`` and ``RecordSink`` over a single Notion database."""

    def __init__(self, client: NotionClient) -> None:
        self._client = client

    def close(self) -> None:
        self._client.close()

    def list_records(self) -> Iterator[CatalogRecord]:
        for page in self._client.iter_pages():
            if page.archived:
                continue
            yield translate_page(page)

    def update(self, record_id: str, updates: FieldUpdates) -> None:
        if not updates:
            return
        log.debug("Updating page %s: %s", record_id, ", ".join(updates))
        self._client.update_page(record_id, updates_payload(updates))


def build_notion_workspace() -> NotionWorkspace:
    return NotionWorkspace(NotionClient(config=get_notion_config()))
