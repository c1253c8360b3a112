"""Field write payloads accepted by the record sink."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .properties import DateProperty, NumberProperty, RichTextProperty, UrlProperty

if TYPE_CHECKING:
    from datetime import datetime

    from .properties import PropertyValue


@dataclass(frozen=True, slots=True)
class NumberWrite:
    value: int | float


@dataclass(frozen=True, slots=True)
class UrlWrite:
    value: str


@dataclass(frozen=True, slots=True)
class RichTextWrite:
    content: str


@dataclass(frozen=True, slots=True)
class DateWrite:
    start: datetime


type FieldWrite = NumberWrite | UrlWrite | RichTextWrite | DateWrite
type FieldUpdates = dict[str, FieldWrite]


def as_property(write: FieldWrite) -> PropertyValue:
    """Return the property value a record holds once ``write`` has been applied."""

    if isinstance(write, NumberWrite):
        return NumberProperty(value=write.value)
    if isinstance(write, UrlWrite):
        return UrlProperty(value=write.value)
    if isinstance(write, RichTextWrite):
        return RichTextProperty(spans=(write.content,))
    return DateProperty(start=write.start.isoformat())
