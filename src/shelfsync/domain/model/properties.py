"""Typed values of a workspace record's property bag.

Each class mirrors one property kind the workspace exposes. Text-like kinds keep
their ordered spans as plain strings; styling is not needed by the core.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TitleProperty:
    spans: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RichTextProperty:
    spans: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "".join(self.spans)


@dataclass(frozen=True, slots=True)
class NumberProperty:
    value: int | float | None = None


@dataclass(frozen=True, slots=True)
class UrlProperty:
    value: str | None = None


@dataclass(frozen=True, slots=True)
class CheckboxProperty:
    checked: bool = False


@dataclass(frozen=True, slots=True)
class SelectProperty:
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RelationProperty:
    ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RollupProperty:
    """Computed values gathered from related records, in relation order."""

    values: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FormulaProperty:
    value: str | None = None


@dataclass(frozen=True, slots=True)
class DateProperty:
    start: str | None = None


type PropertyValue = (
    TitleProperty
    | RichTextProperty
    | NumberProperty
    | UrlProperty
    | CheckboxProperty
    | SelectProperty
    | RelationProperty
    | RollupProperty
    | FormulaProperty
    | DateProperty
)
