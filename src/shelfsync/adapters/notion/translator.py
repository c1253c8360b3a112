"""Translate between Notion page payloads and catalog records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.domain.model import (
    CheckboxProperty,
    DateProperty,
    DateWrite,
    FormulaProperty,
    NumberProperty,
    NumberWrite,
    RelationProperty,
    RichTextProperty,
    RichTextWrite,
    RollupProperty,
    SelectProperty,
    TitleProperty,
    UrlProperty,
    UrlWrite,
)
from shelfsync.domain.record import CatalogRecord

if TYPE_CHECKING:
    from shelfsync.domain.model import FieldUpdates, FieldWrite, PropertyValue

    from .schema import NotionFormula, NotionPage, NotionProperty, NotionRichText

log = getLogger(__name__)


def _spans(texts: list[NotionRichText]) -> tuple[str, ...]:
    return tuple(text.plain_text for text in texts)


def _formula_text(formula: NotionFormula) -> str | None:
    if formula.type == "string":
        return formula.string
    if formula.type == "number" and formula.number is not None:
        number = formula.number
        return str(int(number)) if number.is_integer() else str(number)
    if formula.type == "boolean" and formula.boolean is not None:
        return str(formula.boolean).lower()
    return None


def _rollup_item_text(item: NotionProperty) -> str:
    if item.type == "title":
        return "".join(_spans(item.title))
    if item.type == "rich_text":
        return "".join(_spans(item.rich_text))
    if item.type == "formula" and item.formula is not None:
        return _formula_text(item.formula) or ""
    if item.type == "number" and item.number is not None:
        return str(item.number)
    return ""


def _number(value: float | None) -> int | float | None:
    if value is not None and float(value).is_integer():
        return int(value)
    return value


def property_value(payload: NotionProperty) -> PropertyValue | None:
    """Map one Notion property onto its domain value; unknown kinds give ``None``."""

    kind = payload.type
    if kind == "title":
        return TitleProperty(spans=_spans(payload.title))
    if kind == "rich_text":
        return RichTextProperty(spans=_spans(payload.rich_text))
    if kind == "number":
        return NumberProperty(value=_number(payload.number))
    if kind == "url":
        return UrlProperty(value=payload.url)
    if kind == "checkbox":
        return CheckboxProperty(checked=bool(payload.checkbox))
    if kind == "select":
        return SelectProperty(name=payload.select.name if payload.select else None)
    if kind == "relation":
        return RelationProperty(ids=tuple(relation.id for relation in payload.relation))
    if kind == "rollup":
        items = payload.rollup.array if payload.rollup else []
        return RollupProperty(values=tuple(_rollup_item_text(item) for item in items))
    if kind == "formula":
        return FormulaProperty(value=_formula_text(payload.formula) if payload.formula else None)
    if kind == "date":
        return DateProperty(start=payload.date.start if payload.date else None)
    return None


def translate_page(page: NotionPage) -> CatalogRecord:
    properties: dict[str, PropertyValue] = {}
    for key, payload in page.properties.items():
        value = property_value(payload)
        if value is None:
            log.debug("Ignoring %s property %r on page %s", payload.type, key, page.id)
            continue
        properties[key] = value
    return CatalogRecord(page.id, properties)


def write_payload(write: FieldWrite) -> dict[str, object]:
    if isinstance(write, NumberWrite):
        return {"number": write.value}
    if isinstance(write, UrlWrite):
        return {"url": write.value}
    if isinstance(write, RichTextWrite):
        return {"rich_text": [{"type": "text", "text": {"content": write.content}}]}
    if isinstance(write, DateWrite):
        return {"date": {"start": write.start.isoformat()}}
    raise TypeError(f"Unsupported field write: {write!r}")


def updates_payload(updates: FieldUpdates) -> dict[str, object]:
    """Build the body of a page update request."""

    return {"properties": {key: write_payload(write) for key, write in updates.items()}}
