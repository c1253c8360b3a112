"""Static schema of the workspace properties the core reads and fills.

``FIELD_SCHEMA`` lists the synced attributes in the order they are processed;
the remaining constants name the properties read through typed accessors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from .errors import UnmappableFieldError
from .model.properties import NumberProperty, RelationProperty, RichTextProperty, UrlProperty
from .model.writes import NumberWrite, RichTextWrite, UrlWrite

if TYPE_CHECKING:
    from .model.properties import PropertyValue
    from .model.writes import FieldWrite

NAME_KEY: Final[str] = "Name"
EXTERNAL_ID_KEY: Final[str] = "bgg_id"
PENDING_CANDIDATES_KEY: Final[str] = "bgg_potential_matches"
LAST_SYNC_KEY: Final[str] = "api_latest_sync"
DATA_COMPLETE_KEY: Final[str] = "data_complete"
CATEGORY_KEY: Final[str] = "Category"
EXPANSION_OF_KEY: Final[str] = "Expansion of"
MINOR_EXPANSION_KEY: Final[str] = "Minor expansion"
DISPLAY_NAME_KEY: Final[str] = "Display name"
PARENT_DISPLAY_NAME_KEY: Final[str] = "Parent display name"
ALTERNATE_NAME_KEY: Final[str] = "Alternate name"
URL_KEY: Final[str] = "BGG"

PLACEHOLDER_NAMES: Final[frozenset[str]] = frozenset({"undefined"})


class FieldKind(StrEnum):
    NUMBER = "number"
    URL = "url"
    TEXT = "text"
    RELATION = "relation"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    local_key: str
    external_key: str
    kind: FieldKind

    def is_set(self, value: PropertyValue | None) -> bool:
        """Return whether the local property already holds a usable value."""

        if value is None:
            return False
        if self.kind is FieldKind.NUMBER:
            return isinstance(value, NumberProperty) and bool(value.value)
        if self.kind is FieldKind.URL:
            return isinstance(value, UrlProperty) and bool(value.value)
        if self.kind is FieldKind.TEXT:
            return isinstance(value, RichTextProperty) and any(value.spans)
        return isinstance(value, RelationProperty) and bool(value.ids)

    def to_write(self, raw: object) -> FieldWrite:
        """Convert an external value into this field's write payload."""

        if self.kind is FieldKind.NUMBER:
            # bool is an int subclass but never a meaningful count
            if isinstance(raw, bool) or not isinstance(raw, int | float):
                raise self._unmappable(raw)
            return NumberWrite(value=raw)
        if self.kind is FieldKind.URL:
            if not isinstance(raw, str) or not raw.strip():
                raise self._unmappable(raw)
            return UrlWrite(value=raw.strip())
        if self.kind is FieldKind.TEXT:
            if not isinstance(raw, str):
                raise self._unmappable(raw)
            return RichTextWrite(content=raw)
        raise self._unmappable(raw)

    def _unmappable(self, raw: object) -> UnmappableFieldError:
        return UnmappableFieldError(
            f"Cannot write {type(raw).__name__} value to {self.kind} field {self.local_key!r}",
            field=self.local_key,
            payload=raw,
        )


FIELD_SCHEMA: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("Players min", "min_players", FieldKind.NUMBER),
    FieldSpec("Players max", "max_players", FieldKind.NUMBER),
    FieldSpec("Playtime min", "min_playtime", FieldKind.NUMBER),
    FieldSpec("Playtime max", "max_playtime", FieldKind.NUMBER),
    FieldSpec("Age", "min_age", FieldKind.NUMBER),
    FieldSpec("Published year", "year_published", FieldKind.NUMBER),
    FieldSpec("bgg_name", "primary_name", FieldKind.TEXT),
    FieldSpec(URL_KEY, "constructed_url", FieldKind.URL),
    FieldSpec("bgg_image_url", "image_url", FieldKind.URL),
)
