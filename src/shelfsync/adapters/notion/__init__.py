"""Notion workspace adapter."""

from __future__ import annotations

from .client import NotionAPIError, NotionClient
from .schema import NotionPage, NotionProperty, NotionQueryResponse
from .translator import property_value, translate_page, updates_payload
from .workspace import NotionWorkspace, build_notion_workspace

__all__ = [
    "NotionAPIError",
    "NotionClient",
    "NotionPage",
    "NotionProperty",
    "NotionQueryResponse",
    "NotionWorkspace",
    "build_notion_workspace",
    "property_value",
    "translate_page",
    "updates_payload",
]
