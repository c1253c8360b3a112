"""Fill empty local fields of linked records from registry detail.

Only empty fields are written, so running the sync again over the same data
issues no write at all, and a run that stopped half way converges on rerun.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import RegistryError, UnmappableFieldError, WorkspaceError
from .model import DateWrite, NumberProperty
from .schema import FIELD_SCHEMA, LAST_SYNC_KEY

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from .model import ExternalGame, FieldUpdates
    from .ports import GameRegistry, RecordSink
    from .record import CatalogRecord
    from .schema import FieldSpec

log = getLogger(__name__)


class SyncOutcome(StrEnum):
    COMPLETE = "complete"
    UNLINKED = "unlinked"
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(slots=True)
class SyncResult:
    record_id: str
    outcome: SyncOutcome
    fields: tuple[str, ...] = ()


@dataclass(slots=True)
class FieldSyncEngine:
    registry: GameRegistry
    sink: RecordSink
    stamp: datetime
    schema: Sequence[FieldSpec] = FIELD_SCHEMA

    def sync_all(self, queue: Iterable[CatalogRecord]) -> list[SyncResult]:
        return [self.sync(record) for record in queue]

    def sync(self, record: CatalogRecord) -> SyncResult:
        """Write every missing schema field of ``record`` in a single update."""

        if record.data_complete:
            log.debug("%s is marked as complete, skipping", record.name)
            return SyncResult(record.id, SyncOutcome.COMPLETE)
        external_id = record.external_id
        if external_id is None:
            return SyncResult(record.id, SyncOutcome.UNLINKED)

        log.info("Checking details for %s / %s", record.name, external_id)
        try:
            updates = self.pending_updates(record, external_id)
        except RegistryError as exc:
            log.warning("Could not fetch details for %s: %s", record.name, exc)
            return SyncResult(record.id, SyncOutcome.FAILED)
        if not updates:
            return SyncResult(record.id, SyncOutcome.UP_TO_DATE)

        fields = tuple(updates)
        updates[LAST_SYNC_KEY] = DateWrite(start=self.stamp)
        log.info("Updating %s: %s", record.name, ", ".join(fields))
        try:
            self.sink.update(record.id, updates)
        except WorkspaceError as exc:
            log.warning("Update of %s was rejected: %s", record.name, exc)
            return SyncResult(record.id, SyncOutcome.FAILED, fields=fields)
        record.apply(updates)
        return SyncResult(record.id, SyncOutcome.UPDATED, fields=fields)

    def pending_updates(self, record: CatalogRecord, external_id: int) -> FieldUpdates:
        """Collect writes for empty fields, fetching registry detail at most once."""

        game: ExternalGame | None = None
        updates: FieldUpdates = {}
        for spec in self.schema:
            current = record.get(spec.local_key)
            if spec.is_set(current):
                continue
            if game is None:
                log.debug("Missing data for at least %s, fetching %s", spec.local_key, external_id)
                game = self.registry.fetch_game(external_id)
            raw = getattr(game, spec.external_key, None)
            if raw is None or raw == "":
                continue
            # a stored zero reads as unset but must not be rewritten every run
            if isinstance(current, NumberProperty) and current.value == raw:
                continue
            try:
                updates[spec.local_key] = spec.to_write(raw)
            except UnmappableFieldError as exc:
                log.warning("%s for %s; registry payload: %r", exc, record.name, game)
        return updates
