"""Translation of BoardGameGeek payloads into registry entities."""

from __future__ import annotations

from shelfsync.adapters.bgg.schema import (
    BggName,
    BggSearchResponse,
    BggThingResponse,
    items_payload,
    parse_xml,
)
from shelfsync.adapters.bgg.translator import (
    clean_image_url,
    game_url,
    primary_name,
    translate_search,
    translate_thing,
)
from shelfsync.domain.model import LinkType


def test_translate_thing_maps_detail(thing_xml: bytes) -> None:
    response = BggThingResponse.model_validate(items_payload(parse_xml(thing_xml)))

    game = translate_thing(response.items[0])

    assert game.id == 230802
    assert game.constructed_url == "https://www.boardgamegeek.com/boardgame/230802"
    assert game.primary_name == "Azul"
    assert game.year_published == 2017
    assert game.playing_time == 45
    assert game.image_url == (
        "https://cf.geekdo-images.com/tz19PfklMdAdjxV9WArraA__original/img/pic3718275(1).jpg"
    )
    assert game.linked(LinkType.DESIGNER) == ["Michael Kiesling"]
    assert game.linked(LinkType.PUBLISHER) == ["Plan B Games", "Next Move Games"]
    assert game.linked(LinkType.CATEGORY) == ["Abstract Strategy"]
    assert game.linked(LinkType.FAMILY) == []


def test_translate_search_keeps_duplicates_for_the_matcher(search_xml: bytes) -> None:
    response = BggSearchResponse.model_validate(items_payload(parse_xml(search_xml)))

    result = translate_search(response)

    assert result.total == 3
    assert [hit.id for hit in result.hits] == [230802, 256226, 230802]
    assert result.hits[1].name == "Azul: Crystal Mosaic"
    assert result.hits[1].kind == "boardgameexpansion"


def test_primary_name_rules() -> None:
    assert primary_name([]) is None
    assert primary_name([BggName(type="alternate", value="Only")]) == "Only"
    assert (
        primary_name(
            [
                BggName(type="primary", value="First"),
                BggName(type="alternate", value="Other"),
                BggName(type="primary", value="Second"),
            ]
        )
        == "First / Second"
    )


def test_clean_image_url_fixes_escaped_parentheses() -> None:
    assert clean_image_url(None) is None
    assert clean_image_url("") is None
    assert clean_image_url("a&amp;&amp;#35;40;b&amp;&amp;#35;41;") == "a(b)"
    assert clean_image_url("a&&#35;40;b&&#35;41;") == "a(b)"
    assert clean_image_url("https://x/y.png") == "https://x/y.png"


def test_game_url() -> None:
    assert game_url(13) == "https://www.boardgamegeek.com/boardgame/13"
