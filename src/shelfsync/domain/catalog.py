"""Ordered, id-deduplicated collection of catalog records."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from _typeshed import SupportsRichComparison

    from .record import CatalogRecord

log = getLogger(__name__)


def name_key(record: CatalogRecord) -> str:
    return record.name.upper()


class CatalogIndex:
    """Owns every record of a run; relations are resolved by id through it.

    Iteration follows insertion order, which is also the order external writes
    happen in. ``sorted`` returns a separate ordering for export.
    """

    def __init__(self, records: Iterable[CatalogRecord] = ()) -> None:
        self._records: dict[str, CatalogRecord] = {}
        for record in records:
            self.include(record)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(self._records.values())

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def include(self, record: CatalogRecord) -> bool:
        """Add ``record`` unless one with the same id exists; the first one wins."""

        if record.id in self._records:
            log.debug("Dropping duplicate record %s (%s)", record.id, record.name)
            return False
        self._records[record.id] = record
        return True

    def get(self, record_id: str) -> CatalogRecord | None:
        return self._records.get(record_id)

    def sorted(
        self,
        key: Callable[[CatalogRecord], SupportsRichComparison] = name_key,
    ) -> list[CatalogRecord]:
        return sorted(self._records.values(), key=key)

    def children_of(self, record_id: str) -> list[CatalogRecord]:
        return [record for record in self._records.values() if record.expansion_of == record_id]
