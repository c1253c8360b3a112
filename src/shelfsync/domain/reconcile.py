"""Domain service running one reconciliation pass over the catalog."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .catalog import CatalogIndex
from .field_sync import FieldSyncEngine, SyncOutcome, SyncResult
from .matching import MatchOutcome, MatchResult, SearchMatcher
from .record import CatalogRecord

if TYPE_CHECKING:
    from datetime import datetime

    from .ports import GameRegistry, RecordSink, RecordSource

TraceHook = Callable[[CatalogRecord, str], None]

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """Outcome of a reconciliation pass."""

    listed: int
    matches: list[MatchResult] = field(default_factory=list[MatchResult])
    syncs: list[SyncResult] = field(default_factory=list[SyncResult])

    @property
    def match_counts(self) -> Counter[MatchOutcome]:
        return Counter(result.outcome for result in self.matches)

    @property
    def sync_counts(self) -> Counter[SyncOutcome]:
        return Counter(result.outcome for result in self.syncs)


def load_catalog(source: RecordSource, *, trace: TraceHook | None = None) -> CatalogIndex:
    """Build the catalog index from the current workspace snapshot."""

    index = CatalogIndex()
    for record in source.list_records():
        if index.include(record) and trace is not None:
            trace(record, "ingest")
    log.info("Count of items: %d", len(index))
    return index


def reconcile_catalog(
    index: CatalogIndex,
    *,
    registry: GameRegistry,
    sink: RecordSink,
    stamp: datetime,
    limit: int | None = None,
    trace: TraceHook | None = None,
) -> ReconcileResult:
    """Match unresolved records, then fill missing fields of every linked record.

    Records are handled one at a time in index order. ``limit`` caps how many
    named records are looked at, which keeps trial runs short.
    """

    matcher = SearchMatcher(registry=registry, sink=sink, index=index, stamp=stamp)
    engine = FieldSyncEngine(registry=registry, sink=sink, stamp=stamp)
    result = ReconcileResult(listed=len(index))
    queue: list[CatalogRecord] = []

    for record in index:
        if not record.has_name:
            result.matches.append(MatchResult(record.id, MatchOutcome.SKIPPED))
            continue
        if limit is not None and len(result.matches) - _skipped(result) >= limit:
            break
        log.info("*** Processing game: %s", record.name)
        match = matcher.match(record)
        result.matches.append(match)
        if trace is not None:
            trace(record, f"match:{match.outcome}")
        if match.needs_detail_sync:
            queue.append(record)

    log.info("Proceeding to check details for %d records", len(queue))
    for record in queue:
        sync = engine.sync(record)
        result.syncs.append(sync)
        if trace is not None:
            trace(record, f"sync:{sync.outcome}")

    return result


def _skipped(result: ReconcileResult) -> int:
    return sum(1 for match in result.matches if match.outcome is MatchOutcome.SKIPPED)
