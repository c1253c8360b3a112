from __future__ import annotations

from typing import TYPE_CHECKING

from shelfsync.domain.catalog import CatalogIndex
from shelfsync.domain.matching import (
    MAX_CANDIDATES_LENGTH,
    MatchOutcome,
    SearchMatcher,
    candidate_summary,
    group_string,
    join_candidates,
    normalize_query,
    unique_hits,
)
from shelfsync.domain.model import DateWrite, ExternalGame, LinkType, NumberWrite, SearchHit
from shelfsync.domain.schema import EXTERNAL_ID_KEY, LAST_SYNC_KEY, PENDING_CANDIDATES_KEY
from tests.helpers.catalog import FakeRegistry, FakeSink, make_game, make_record

if TYPE_CHECKING:
    from datetime import datetime

    from shelfsync.domain.record import CatalogRecord


def _matcher(
    registry: FakeRegistry,
    sink: FakeSink,
    stamp: datetime,
    *records: CatalogRecord,
) -> SearchMatcher:
    return SearchMatcher(registry=registry, sink=sink, index=CatalogIndex(records), stamp=stamp)


def test_normalize_query_replaces_colons() -> None:
    assert normalize_query("Carcassonne: The River") == "Carcassonne  The River"


def test_unique_hits_keeps_first_occurrence_in_order() -> None:
    hits = [SearchHit(id=5, name="a"), SearchHit(id=5, name="b"), SearchHit(id=7, name="c")]

    assert [hit.id for hit in unique_hits(hits)] == [5, 7]
    assert unique_hits(hits)[0].name == "a"


def test_group_string_caps_long_groups() -> None:
    assert group_string(None) == "?"
    assert group_string([]) == "?"
    assert group_string(["A", "B"]) == "A, B"
    assert group_string(["A", "B", "C", "D", "E"]) == "A, B, C + 2 more"


def test_candidate_summary_lists_key_facts() -> None:
    game = make_game(
        5,
        primary_name="Azul",
        year_published=2017,
        playing_time=45,
        details={
            LinkType.DESIGNER: ["Michael Kiesling"],
            LinkType.PUBLISHER: ["Plan B", "Next Move", "Asmodee", "Hobby World"],
        },
    )

    assert candidate_summary(game) == (
        "[5: Azul (2017) 2-4 players, 45 min by Michael Kiesling "
        "from Plan B, Next Move, Asmodee + 1 more]"
    )


def test_candidate_summary_marks_unknown_values() -> None:
    game = ExternalGame(id=7, constructed_url="", primary_name="Other", year_published=None)

    assert candidate_summary(game) == "[7: Other (?) ?-? players, ? min by ? from ?]"


def test_join_candidates_truncates_to_field_limit() -> None:
    joined = join_candidates(["x" * 2500])

    assert len(joined) == MAX_CANDIDATES_LENGTH
    assert joined.endswith("...")
    assert joined[:-3] == "x" * (MAX_CANDIDATES_LENGTH - 3)


def test_join_candidates_keeps_text_at_the_limit() -> None:
    text = "y" * MAX_CANDIDATES_LENGTH

    assert join_candidates([text]) == text
    assert join_candidates(["a", "b"]) == "a\nb"


def test_record_without_name_is_skipped(stamp: datetime) -> None:
    registry = FakeRegistry()
    record = make_record("undefined")

    result = _matcher(registry, FakeSink(), stamp, record).match(record)

    assert result.outcome is MatchOutcome.SKIPPED
    assert registry.searches == []


def test_linked_record_is_not_searched(stamp: datetime) -> None:
    registry = FakeRegistry()
    record = make_record("Azul", external_id=230802)

    result = _matcher(registry, FakeSink(), stamp, record).match(record)

    assert result.outcome is MatchOutcome.LINKED
    assert result.external_id == 230802
    assert result.needs_detail_sync
    assert registry.searches == []


def test_record_with_pending_candidates_is_left_for_review(stamp: datetime) -> None:
    registry = FakeRegistry()
    sink = FakeSink()
    record = make_record("Azul", candidates="[1: Azul]\n[2: Azul Mini]")

    result = _matcher(registry, sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.PENDING
    assert not result.needs_detail_sync
    assert registry.searches == []
    assert sink.updates == []


def test_exact_hit_is_committed_without_loose_search(stamp: datetime) -> None:
    registry = FakeRegistry(
        exact={"Azul": [SearchHit(id=230802, name="Azul"), SearchHit(id=1, name="Azul")]}
    )
    sink = FakeSink()
    record = make_record("Azul", record_id="azul")

    result = _matcher(registry, sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.MATCHED
    assert result.external_id == 230802
    assert registry.searches == [("Azul", True)]
    assert sink.updates == [
        (
            "azul",
            {
                EXTERNAL_ID_KEY: NumberWrite(value=230802),
                LAST_SYNC_KEY: DateWrite(start=stamp),
            },
        )
    ]
    assert record.external_id == 230802


def test_single_loose_hit_after_dedup_is_committed(stamp: datetime) -> None:
    registry = FakeRegistry(loose={"Azul": [SearchHit(id=5), SearchHit(id=5)]})
    sink = FakeSink()
    record = make_record("Azul", record_id="azul")

    result = _matcher(registry, sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.MATCHED
    assert result.external_id == 5
    assert registry.searches == [("Azul", True), ("Azul", False)]
    assert sink.updates_for("azul")[0][EXTERNAL_ID_KEY] == NumberWrite(value=5)


def test_several_loose_hits_store_candidates(stamp: datetime) -> None:
    registry = FakeRegistry(
        loose={"Azul": [SearchHit(id=5), SearchHit(id=5), SearchHit(id=7)]},
        games=[
            make_game(5, primary_name="Azul", year_published=2017),
            make_game(7, primary_name="Azul Mini", year_published=2021),
        ],
    )
    sink = FakeSink()
    record = make_record("Azul", record_id="azul")

    result = _matcher(registry, sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.AMBIGUOUS
    assert not result.needs_detail_sync
    assert registry.fetches == [(5, 7)]
    assert result.candidates is not None
    lines = result.candidates.splitlines()
    assert [line.split(":")[0] for line in lines] == ["[5", "[7"]
    updates = sink.updates_for("azul")
    assert len(updates) == 1
    assert set(updates[0]) == {PENDING_CANDIDATES_KEY, LAST_SYNC_KEY}
    assert EXTERNAL_ID_KEY not in updates[0]
    assert record.pending_candidates == result.candidates
    assert record.external_id is None


def test_candidates_without_detail_use_search_data(stamp: datetime) -> None:
    registry = FakeRegistry(
        loose={
            "Azul": [
                SearchHit(id=5, name="Azul", year_published=2017),
                SearchHit(id=9, name="Azul Duel", year_published=2022),
            ]
        },
        games=[make_game(5, primary_name="Azul", year_published=2017)],
    )
    record = make_record("Azul")

    result = _matcher(registry, FakeSink(), stamp, record).match(record)

    assert result.candidates is not None
    fallback = result.candidates.splitlines()[1]
    assert fallback == "[9: Azul Duel (2022) ?-? players, ? min by ? from ?]"


def test_many_candidates_are_truncated(stamp: datetime) -> None:
    hits = [SearchHit(id=game_id, name="X" * 60) for game_id in range(1, 61)]
    registry = FakeRegistry(loose={"Azul": hits})
    record = make_record("Azul")

    result = _matcher(registry, FakeSink(), stamp, record).match(record)

    assert result.outcome is MatchOutcome.AMBIGUOUS
    assert result.candidates is not None
    assert len(result.candidates) == MAX_CANDIDATES_LENGTH
    assert result.candidates.endswith("...")
    assert [len(batch) for batch in registry.fetches] == [20, 20, 20]


def test_no_hits_writes_nothing(stamp: datetime) -> None:
    registry = FakeRegistry()
    sink = FakeSink()
    record = make_record("Unknown Game")

    result = _matcher(registry, sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.NO_MATCH
    assert sink.updates == []


def test_expansion_is_searched_with_parent_title(stamp: datetime) -> None:
    parent = make_record("Carcassonne", record_id="base")
    child = make_record(
        "The River",
        record_id="river",
        expansion_of="base",
        parent_display_name="Carcassonne",
    )
    registry = FakeRegistry(exact={"Carcassonne  The River": [SearchHit(id=12)]})

    result = _matcher(registry, FakeSink(), stamp, parent, child).match(child)

    assert result.outcome is MatchOutcome.MATCHED
    assert result.query == "Carcassonne  The River"


def test_registry_failure_abandons_record(stamp: datetime) -> None:
    sink = FakeSink()
    record = make_record("Azul")

    result = _matcher(FakeRegistry(fail_search=True), sink, stamp, record).match(record)

    assert result.outcome is MatchOutcome.FAILED
    assert sink.updates == []


def test_rejected_write_leaves_record_unchanged(stamp: datetime) -> None:
    registry = FakeRegistry(exact={"Azul": [SearchHit(id=5)]})
    record = make_record("Azul", record_id="azul")

    result = _matcher(registry, FakeSink(reject=["azul"]), stamp, record).match(record)

    assert result.outcome is MatchOutcome.FAILED
    assert record.external_id is None
