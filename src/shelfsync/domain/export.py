"""Group and order the catalog for publication.

The result is a plain ``ExportDocument``; turning it into markup is the job of
the HTML adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import HierarchyCycleError
from .hierarchy import ancestors, minor_suffix, split_expansions

if TYPE_CHECKING:
    from .catalog import CatalogIndex
    from .record import CatalogRecord

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExportLayout:
    """Known categories in output order, plus the bucket for everything else.

    Only the default bucket gets letter markers, since it is the one long
    alphabetical list.
    """

    categories: tuple[str, ...]
    default_category: str

    @property
    def order(self) -> tuple[str, ...]:
        return (*self.categories, self.default_category)

    def bucket_for(self, category: str | None) -> str:
        if category is not None and category in self.categories:
            return category
        return self.default_category


@dataclass(frozen=True, slots=True)
class ExportEntry:
    title: str
    url: str | None = None
    suffix: str = ""
    expansions: tuple[ExportEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class LetterMarker:
    letter: str


type ExportItem = ExportEntry | LetterMarker


@dataclass(slots=True)
class ExportSection:
    category: str
    items: list[ExportItem] = field(default_factory=list["ExportItem"])

    @property
    def entries(self) -> list[ExportEntry]:
        return [item for item in self.items if isinstance(item, ExportEntry)]


@dataclass(slots=True)
class ExportDocument:
    sections: list[ExportSection] = field(default_factory=list["ExportSection"])

    def section(self, category: str) -> ExportSection | None:
        return next((s for s in self.sections if s.category == category), None)


def build_export(index: CatalogIndex, layout: ExportLayout) -> ExportDocument:
    """Build the grouped document from every named top-level record in ``index``."""

    sections = {category: ExportSection(category) for category in layout.order}
    previous_letter: str | None = None
    placed: set[str] = set()

    for record in index.sorted():
        if not record.has_name or not _is_top_level(record, index):
            continue
        placed.add(record.id)
        placed.update(child.id for child in index.children_of(record.id))
        bucket = layout.bucket_for(record.category)
        section = sections[bucket]
        if bucket == layout.default_category:
            letter = record.name[:1].upper()
            if letter != previous_letter:
                section.items.append(LetterMarker(letter))
                previous_letter = letter
        section.items.append(_entry(record, index))

    for record in index.sorted():
        if record.has_name and record.id not in placed:
            _report_left_out(record, index)

    document = ExportDocument(
        sections=[sections[category] for category in layout.order if sections[category].items]
    )
    log.info(
        "Export contains %d entries in %d sections",
        sum(len(section.entries) for section in document.sections),
        len(document.sections),
    )
    return document


def _is_top_level(record: CatalogRecord, index: CatalogIndex) -> bool:
    parent_id = record.expansion_of
    if parent_id is None:
        return True
    parent = index.get(parent_id)
    if parent is None or not parent.has_name:
        log.warning("Parent of expansion %s is not in the catalog, listing it alone", record.name)
        return True
    return False


def _report_left_out(record: CatalogRecord, index: CatalogIndex) -> None:
    try:
        depth = len(ancestors(record, index))
    except HierarchyCycleError:
        log.warning("Expansion %s is part of a parent cycle and is left out", record.name)
        return
    log.warning("Expansion %s is nested %d levels deep and is left out", record.name, depth)


def _entry(record: CatalogRecord, index: CatalogIndex) -> ExportEntry:
    major, minor = split_expansions(record, index)
    return ExportEntry(
        title=record.display_name,
        url=record.url,
        suffix=minor_suffix(minor),
        expansions=tuple(ExportEntry(title=child.display_name, url=child.url) for child in major),
    )
