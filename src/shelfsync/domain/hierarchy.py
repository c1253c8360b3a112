"""Base game / expansion relationships between catalog records."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .catalog import name_key
from .errors import HierarchyCycleError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .catalog import CatalogIndex
    from .record import CatalogRecord

log = getLogger(__name__)

MAX_HIERARCHY_DEPTH: Final[int] = 16


def query_title(record: CatalogRecord, index: CatalogIndex) -> str:
    """Return the title used to search the registry for ``record``.

    Expansion titles are rarely unique on their own, so children are searched as
    ``"<parent title>: <name>"``. The parent title comes from the precomputed
    rollup; when that is empty the directly referenced parent is looked up once.
    """

    parent_id = record.expansion_of
    if parent_id is None:
        return record.name
    parent_title = record.parent_display_name
    if parent_title is None:
        parent = index.get(parent_id)
        parent_title = parent.display_name if parent is not None else None
    if not parent_title:
        log.debug("No parent title for expansion %s, searching by own name", record.name)
        return record.name
    return f"{parent_title}: {record.name}"


def expansions(record: CatalogRecord, index: CatalogIndex) -> list[CatalogRecord]:
    return index.children_of(record.id)


def split_expansions(
    record: CatalogRecord,
    index: CatalogIndex,
) -> tuple[list[CatalogRecord], list[CatalogRecord]]:
    """Return ``(major, minor)`` expansions of ``record``, each ordered by name."""

    major: list[CatalogRecord] = []
    minor: list[CatalogRecord] = []
    for child in sorted(expansions(record, index), key=name_key):
        if not child.has_name:
            continue
        (minor if child.is_minor_expansion else major).append(child)
    return major, minor


def minor_suffix(minors: Iterable[CatalogRecord]) -> str:
    names = [f"+ {child.display_name}" for child in minors]
    if not names:
        return ""
    return f" ({', '.join(names)})"


def ancestors(record: CatalogRecord, index: CatalogIndex) -> list[CatalogRecord]:
    """Walk the parent chain of ``record``, nearest parent first.

    Stops at the first parent that is missing from the index. Raises
    ``HierarchyCycleError`` when the chain revisits a record or grows longer
    than ``MAX_HIERARCHY_DEPTH``.
    """

    chain: list[CatalogRecord] = []
    seen = {record.id}
    current = record
    while (parent_id := current.expansion_of) is not None:
        if parent_id in seen or len(chain) >= MAX_HIERARCHY_DEPTH:
            ids = (record.id, *(item.id for item in chain), parent_id)
            raise HierarchyCycleError(f"Parent chain of {record.name!r} does not end", chain=ids)
        parent = index.get(parent_id)
        if parent is None:
            break
        chain.append(parent)
        seen.add(parent_id)
        current = parent
    return chain


@dataclass(slots=True)
class HierarchyProblems:
    orphans: list[CatalogRecord]
    cycles: list[CatalogRecord]

    def __bool__(self) -> bool:
        return bool(self.orphans or self.cycles)


def hierarchy_problems(index: CatalogIndex) -> HierarchyProblems:
    """Collect expansions whose parent is missing and records caught in a cycle."""

    problems = HierarchyProblems(orphans=[], cycles=[])
    for record in index:
        parent_id = record.expansion_of
        if parent_id is None:
            continue
        if parent_id not in index:
            problems.orphans.append(record)
            continue
        try:
            ancestors(record, index)
        except HierarchyCycleError:
            problems.cycles.append(record)
    return problems
