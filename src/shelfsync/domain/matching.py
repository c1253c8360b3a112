"""Resolve catalog records to registry ids.

A record is searched by its query title (see ``hierarchy.query_title``). Exact
search results are trusted; when exact search finds nothing a loose search is
run, its hits are de-duplicated, and the count decides the outcome:

* no hit: nothing is written and the record stays unresolved for this run;
* one hit: its id is committed to the record right away;
* several hits: a summary of every candidate is stored for a human to pick from.
  The matcher never picks among candidates itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .errors import RegistryError, WorkspaceError
from .hierarchy import query_title
from .model import DateWrite, ExternalGame, LinkType, NumberWrite, RichTextWrite
from .schema import EXTERNAL_ID_KEY, LAST_SYNC_KEY, PENDING_CANDIDATES_KEY

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from .catalog import CatalogIndex
    from .model import FieldUpdates, SearchHit
    from .ports import GameRegistry, RecordSink
    from .record import CatalogRecord

log = getLogger(__name__)

MAX_CANDIDATES_LENGTH: Final[int] = 2000
TRUNCATION_MARKER: Final[str] = "..."
GROUP_LIMIT: Final[int] = 3
UNKNOWN: Final[str] = "?"
DETAIL_BATCH_SIZE: Final[int] = 20


class MatchOutcome(StrEnum):
    SKIPPED = "skipped"
    LINKED = "linked"
    PENDING = "pending"
    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"
    FAILED = "failed"


@dataclass(slots=True)
class MatchResult:
    record_id: str
    outcome: MatchOutcome
    query: str | None = None
    external_id: int | None = None
    candidates: str | None = None

    @property
    def needs_detail_sync(self) -> bool:
        return self.outcome in {MatchOutcome.LINKED, MatchOutcome.MATCHED}


def normalize_query(title: str) -> str:
    # the registry mishandles colons even when URL-encoded
    return title.replace(":", " ")


def unique_hits(hits: Iterable[SearchHit]) -> list[SearchHit]:
    seen: set[int] = set()
    unique: list[SearchHit] = []
    for hit in hits:
        if hit.id in seen:
            continue
        seen.add(hit.id)
        unique.append(hit)
    return unique


def group_string(names: Sequence[str] | None, limit: int = GROUP_LIMIT) -> str:
    if not names:
        return UNKNOWN
    text = ", ".join(names[:limit])
    if len(names) > limit:
        text = f"{text} + {len(names) - limit} more"
    return text


def candidate_summary(game: ExternalGame) -> str:
    """Format one candidate as a single line a human can pick from."""

    def known(value: object) -> str:
        return UNKNOWN if value is None or value == "" else str(value)

    designers = group_string(game.linked(LinkType.DESIGNER))
    publishers = group_string(game.linked(LinkType.PUBLISHER))
    return (
        f"[{game.id}: {known(game.primary_name)} ({known(game.year_published)}) "
        f"{known(game.min_players)}-{known(game.max_players)} players, "
        f"{known(game.playing_time)} min by {designers} from {publishers}]"
    )


def join_candidates(summaries: Iterable[str]) -> str:
    joined = "\n".join(summaries)
    if len(joined) > MAX_CANDIDATES_LENGTH:
        keep = MAX_CANDIDATES_LENGTH - len(TRUNCATION_MARKER)
        joined = joined[:keep] + TRUNCATION_MARKER
    return joined


@dataclass(slots=True)
class SearchMatcher:
    """Searches the registry for unresolved records and records the outcome."""

    registry: GameRegistry
    sink: RecordSink
    index: CatalogIndex
    stamp: datetime

    def match(self, record: CatalogRecord) -> MatchResult:
        if not record.has_name:
            return MatchResult(record.id, MatchOutcome.SKIPPED)
        if record.external_id is not None:
            return MatchResult(record.id, MatchOutcome.LINKED, external_id=record.external_id)
        if record.pending_candidates is not None:
            log.info("%s already has potential matches, skipping", record.name)
            return MatchResult(record.id, MatchOutcome.PENDING)

        query = normalize_query(query_title(record, self.index))
        log.info("Searching registry for %r", query)
        try:
            hits, exact = self._search(query)
            if not hits:
                log.info("No matches found for %s", record.name)
                return MatchResult(record.id, MatchOutcome.NO_MATCH, query=query)
            if exact or len(hits) == 1:
                return self._commit(record, hits[0], query=query)
            return self._record_candidates(record, hits, query=query)
        except RegistryError as exc:
            log.warning("Registry lookup failed for %s: %s", record.name, exc)
        except WorkspaceError as exc:
            log.warning("Could not store match for %s: %s", record.name, exc)
        return MatchResult(record.id, MatchOutcome.FAILED, query=query)

    def _search(self, query: str) -> tuple[list[SearchHit], bool]:
        exact = self.registry.search(query, exact=True)
        if exact.hits:
            return list(exact.hits), True
        loose = self.registry.search(query, exact=False)
        return unique_hits(loose.hits), False

    def _commit(self, record: CatalogRecord, hit: SearchHit, *, query: str) -> MatchResult:
        log.info(
            "Found single match for %s: %s (%s) with id %s",
            record.name,
            hit.name,
            hit.year_published,
            hit.id,
        )
        updates: FieldUpdates = {
            EXTERNAL_ID_KEY: NumberWrite(value=hit.id),
            LAST_SYNC_KEY: DateWrite(start=self.stamp),
        }
        self.sink.update(record.id, updates)
        record.apply(updates)
        return MatchResult(record.id, MatchOutcome.MATCHED, query=query, external_id=hit.id)

    def _record_candidates(
        self,
        record: CatalogRecord,
        hits: list[SearchHit],
        *,
        query: str,
    ) -> MatchResult:
        log.info("Found %d potential matches for %s", len(hits), record.name)
        games = self._candidate_games(hits)
        candidates = join_candidates(candidate_summary(game) for game in games)
        updates: FieldUpdates = {
            PENDING_CANDIDATES_KEY: RichTextWrite(content=candidates),
            LAST_SYNC_KEY: DateWrite(start=self.stamp),
        }
        self.sink.update(record.id, updates)
        record.apply(updates)
        return MatchResult(record.id, MatchOutcome.AMBIGUOUS, query=query, candidates=candidates)

    def _candidate_games(self, hits: list[SearchHit]) -> list[ExternalGame]:
        by_id: dict[int, ExternalGame] = {}
        ids = [hit.id for hit in hits]
        for start in range(0, len(ids), DETAIL_BATCH_SIZE):
            for game in self.registry.fetch_games(ids[start : start + DETAIL_BATCH_SIZE]):
                by_id[game.id] = game
        games: list[ExternalGame] = []
        for hit in hits:
            game = by_id.get(hit.id)
            if game is None:
                game = ExternalGame(
                    id=hit.id,
                    constructed_url="",
                    primary_name=hit.name,
                    year_published=hit.year_published,
                )
            games.append(game)
        return games
