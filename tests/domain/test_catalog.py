from __future__ import annotations

from shelfsync.domain.catalog import CatalogIndex
from tests.helpers.catalog import make_record


def test_include_keeps_first_record_for_duplicate_ids() -> None:
    first = make_record("Azul", record_id="a")
    duplicate = make_record("Azul (copy)", record_id="a")
    index = CatalogIndex()

    assert index.include(first) is True
    assert index.include(duplicate) is False

    assert len(index) == 1
    assert index.get("a") is first


def test_iteration_follows_insertion_order() -> None:
    records = [make_record(name, record_id=name) for name in ("Wingspan", "azul", "Catan")]
    index = CatalogIndex(records)

    assert [record.id for record in index] == ["Wingspan", "azul", "Catan"]
    assert [record.name for record in index.sorted()] == ["azul", "Catan", "Wingspan"]


def test_children_of_resolves_relations_by_id() -> None:
    base = make_record("Carcassonne", record_id="base")
    river = make_record("The River", record_id="river", expansion_of="base")
    abbey = make_record("Abbey", record_id="abbey", expansion_of="base")
    other = make_record("Azul", record_id="other")
    index = CatalogIndex([base, river, abbey, other])

    assert index.children_of("base") == [river, abbey]
    assert index.children_of("other") == []
    assert "river" in index
    assert "missing" not in index
