"""Ports for the workspace database holding the catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shelfsync.domain.model import FieldUpdates
    from shelfsync.domain.record import CatalogRecord


@runtime_checkable
class RecordSource(Protocol):
    """Lists the current snapshot of every catalog record."""

    def list_records(self) -> Iterable[CatalogRecord]: ...


@runtime_checkable
class RecordSink(Protocol):
    """Writes typed field updates to one record, replacing each named field."""

    def update(self, record_id: str, updates: FieldUpdates) -> None: ...


__all__ = ["RecordSink", "RecordSource"]
