"""Catalog record wrapping one workspace entry's property bag."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .model.properties import (
    CheckboxProperty,
    FormulaProperty,
    NumberProperty,
    RelationProperty,
    RichTextProperty,
    RollupProperty,
    SelectProperty,
    TitleProperty,
    UrlProperty,
)
from .model.writes import as_property
from .schema import (
    CATEGORY_KEY,
    DATA_COMPLETE_KEY,
    DISPLAY_NAME_KEY,
    EXPANSION_OF_KEY,
    EXTERNAL_ID_KEY,
    MINOR_EXPANSION_KEY,
    NAME_KEY,
    PARENT_DISPLAY_NAME_KEY,
    PENDING_CANDIDATES_KEY,
    PLACEHOLDER_NAMES,
    URL_KEY,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .model.properties import PropertyValue
    from .model.writes import FieldUpdates


class CatalogRecord:
    """One locally curated game entry.

    The record owns its property bag; relatives are referenced by id only and
    resolved through a ``CatalogIndex``.
    """

    __slots__ = ("_properties", "id")

    def __init__(self, record_id: str, properties: Mapping[str, PropertyValue]) -> None:
        self.id = record_id
        self._properties: dict[str, PropertyValue] = dict(properties)

    def __repr__(self) -> str:
        return f"CatalogRecord(id={self.id!r}, name={self.name!r})"

    @property
    def properties(self) -> Mapping[str, PropertyValue]:
        return self._properties

    def get(self, key: str) -> PropertyValue | None:
        return self._properties.get(key)

    @property
    def name(self) -> str:
        value = self._properties.get(NAME_KEY)
        if isinstance(value, TitleProperty) and value.spans:
            return value.spans[0]
        return ""

    @property
    def has_name(self) -> bool:
        name = self.name
        return bool(name) and name not in PLACEHOLDER_NAMES

    @property
    def display_name(self) -> str:
        value = self._properties.get(DISPLAY_NAME_KEY)
        if isinstance(value, FormulaProperty) and value.value:
            return value.value
        return self.name

    @property
    def parent_display_name(self) -> str | None:
        value = self._properties.get(PARENT_DISPLAY_NAME_KEY)
        if isinstance(value, RollupProperty):
            for entry in value.values:
                if entry:
                    return entry
        return None

    @property
    def external_id(self) -> int | None:
        value = self._properties.get(EXTERNAL_ID_KEY)
        if isinstance(value, NumberProperty) and value.value:
            return int(value.value)
        return None

    @property
    def category(self) -> str | None:
        value = self._properties.get(CATEGORY_KEY)
        if isinstance(value, SelectProperty):
            return value.name
        return None

    @property
    def expansion_of(self) -> str | None:
        value = self._properties.get(EXPANSION_OF_KEY)
        if isinstance(value, RelationProperty) and value.ids:
            return value.ids[0]
        return None

    @property
    def is_expansion(self) -> bool:
        return self.expansion_of is not None

    @property
    def is_minor_expansion(self) -> bool:
        return self._checkbox(MINOR_EXPANSION_KEY)

    @property
    def data_complete(self) -> bool:
        return self._checkbox(DATA_COMPLETE_KEY)

    @property
    def pending_candidates(self) -> str | None:
        value = self._properties.get(PENDING_CANDIDATES_KEY)
        if isinstance(value, RichTextProperty) and value.text:
            return value.text
        return None

    @property
    def url(self) -> str | None:
        value = self._properties.get(URL_KEY)
        if isinstance(value, UrlProperty) and value.value:
            return value.value
        return None

    def apply(self, updates: FieldUpdates) -> None:
        """Reflect a successful sink write in the local property bag."""

        for key, write in updates.items():
            self._properties[key] = as_property(write)

    def _checkbox(self, key: str) -> bool:
        value = self._properties.get(key)
        return isinstance(value, CheckboxProperty) and value.checked
