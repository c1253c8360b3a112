"""Translation between Notion payloads and catalog records."""

from __future__ import annotations

from datetime import UTC, datetime

from shelfsync.adapters.notion.schema import NotionProperty, NotionQueryResponse
from shelfsync.adapters.notion.translator import property_value, translate_page, updates_payload
from shelfsync.domain.model import (
    DateProperty,
    DateWrite,
    FormulaProperty,
    NumberProperty,
    NumberWrite,
    RichTextWrite,
    RollupProperty,
    UrlWrite,
)


def test_translate_page_builds_record(query_pages: list[dict[str, object]]) -> None:
    response = NotionQueryResponse.model_validate(query_pages[0])

    base, river = (translate_page(page) for page in response.results)

    assert base.id == "0b6c7d3e-1111-4a5e-9f00-000000000001"
    assert base.name == "Carcassonne"
    assert base.external_id == 822
    assert base.category == "Family"
    assert base.data_complete
    assert not base.is_expansion
    assert base.url == "https://www.boardgamegeek.com/boardgame/822"
    assert base.display_name == "Carcassonne"
    assert base.get("api_latest_sync") == DateProperty(start="2024-04-01T10:00:00.000+00:00")
    assert base.get("Owner") is None

    assert river.expansion_of == base.id
    assert river.is_minor_expansion
    assert river.category is None
    assert river.external_id is None
    assert river.pending_candidates is None
    assert river.parent_display_name == "Carcassonne"


def test_rich_text_spans_are_joined(query_pages: list[dict[str, object]]) -> None:
    response = NotionQueryResponse.model_validate(query_pages[1])

    record = translate_page(response.results[1])

    assert not record.has_name
    assert record.pending_candidates == "[1: A]\n[2: B]"


def test_property_value_handles_formula_and_rollup_kinds() -> None:
    number_formula = NotionProperty.model_validate(
        {"type": "formula", "formula": {"type": "number", "number": 3.0}}
    )
    rollup = NotionProperty.model_validate(
        {
            "type": "rollup",
            "rollup": {
                "type": "array",
                "array": [
                    {"type": "title", "title": [{"plain_text": "Azul"}]},
                    {"type": "rich_text", "rich_text": [{"plain_text": "x"}, {"plain_text": "y"}]},
                ],
            },
        }
    )
    number = NotionProperty.model_validate({"type": "number", "number": 2.5})

    assert property_value(number_formula) == FormulaProperty(value="3")
    assert property_value(rollup) == RollupProperty(values=("Azul", "xy"))
    assert property_value(number) == NumberProperty(value=2.5)
    assert property_value(NotionProperty.model_validate({"type": "people"})) is None


def test_updates_payload_uses_notion_property_shapes() -> None:
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    payload = updates_payload(
        {
            "bgg_id": NumberWrite(value=822),
            "BGG": UrlWrite(value="https://www.boardgamegeek.com/boardgame/822"),
            "bgg_name": RichTextWrite(content="Carcassonne"),
            "api_latest_sync": DateWrite(start=stamp),
        }
    )

    assert payload == {
        "properties": {
            "bgg_id": {"number": 822},
            "BGG": {"url": "https://www.boardgamegeek.com/boardgame/822"},
            "bgg_name": {"rich_text": [{"type": "text", "text": {"content": "Carcassonne"}}]},
            "api_latest_sync": {"date": {"start": "2024-05-01T12:00:00+00:00"}},
        }
    }
