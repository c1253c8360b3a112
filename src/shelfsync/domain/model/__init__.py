"""Value types shared by the reconciliation core."""

from __future__ import annotations

from .external import ExternalGame, LinkType, SearchHit, SearchResult
from .properties import (
    CheckboxProperty,
    DateProperty,
    FormulaProperty,
    NumberProperty,
    PropertyValue,
    RelationProperty,
    RichTextProperty,
    RollupProperty,
    SelectProperty,
    TitleProperty,
    UrlProperty,
)
from .writes import (
    DateWrite,
    FieldUpdates,
    FieldWrite,
    NumberWrite,
    RichTextWrite,
    UrlWrite,
    as_property,
)

__all__ = [
    "CheckboxProperty",
    "DateProperty",
    "DateWrite",
    "ExternalGame",
    "FieldUpdates",
    "FieldWrite",
    "FormulaProperty",
    "LinkType",
    "NumberProperty",
    "NumberWrite",
    "PropertyValue",
    "RelationProperty",
    "RichTextProperty",
    "RichTextWrite",
    "RollupProperty",
    "SearchHit",
    "SearchResult",
    "SelectProperty",
    "TitleProperty",
    "UrlProperty",
    "UrlWrite",
    "as_property",
]
