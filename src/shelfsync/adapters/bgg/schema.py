"""Pydantic models describing BoardGameGeek XML API 2 payloads.

The API speaks XML; ``items_payload`` flattens an ``<items>`` document into the
plain mapping shape the models validate. Scalar children carry their content in
a ``value`` attribute, ``name`` and ``link`` children repeat.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from defusedxml import ElementTree
from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

log = getLogger(__name__)

_REPEATED_TAGS = frozenset({"name", "link"})


def parse_xml(body: bytes) -> Element:
    return ElementTree.fromstring(body)


def error_message(root: Element) -> str | None:
    """Return the message of an ``<error>``/``<errors>`` document, if ``root`` is one."""

    if root.tag not in {"error", "errors"}:
        return None
    message = root.findtext(".//message")
    return (message or "").strip() or "Unspecified BoardGameGeek error"


def element_payload(element: Element) -> dict[str, object]:
    payload: dict[str, object] = dict(element.attrib)
    for child in element:
        if child.tag in _REPEATED_TAGS:
            entries = payload.setdefault(child.tag, [])
            if isinstance(entries, list):
                entries.append(dict(child.attrib))
        elif "value" in child.attrib:
            payload[child.tag] = child.attrib["value"]
        elif len(child) == 0:
            payload[child.tag] = child.text
    return payload


def items_payload(root: Element) -> dict[str, object]:
    return {
        "total": root.get("total"),
        "item": [element_payload(item) for item in root.findall("item")],
    }


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _optional_int(value: object) -> object:
    value = _blank_to_none(value)
    if not isinstance(value, str):
        return value
    try:
        return int(value)
    except ValueError:
        log.warning("Ignoring unreadable BoardGameGeek number %r", value)
        return None


def _zero_if_missing(value: object) -> object:
    return value if value not in (None, "") else 0


def _as_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    return value


class BggBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BggName(BggBaseModel):
    type: str = "primary"
    value: str
    sort_index: int | None = Field(default=None, alias="sortindex")


class BggLink(BggBaseModel):
    type: str
    id: int
    value: str


class BggSearchItem(BggBaseModel):
    id: int
    type: str | None = None
    names: list[BggName] = Field(default_factory=list["BggName"], alias="name")
    year_published: int | None = Field(default=None, alias="yearpublished")

    _normalize_names = field_validator("names", mode="before")(_as_list)
    _normalize_year = field_validator("year_published", mode="before")(_optional_int)


class BggSearchResponse(BggBaseModel):
    total: int = 0
    items: list[BggSearchItem] = Field(default_factory=list["BggSearchItem"], alias="item")

    _normalize_total = field_validator("total", mode="before")(_zero_if_missing)
    _normalize_items = field_validator("items", mode="before")(_as_list)


class BggThing(BggBaseModel):
    id: int
    type: str | None = None
    thumbnail: str | None = None
    image: str | None = None
    names: list[BggName] = Field(default_factory=list["BggName"], alias="name")
    description: str | None = None
    year_published: int | None = Field(default=None, alias="yearpublished")
    min_players: int | None = Field(default=None, alias="minplayers")
    max_players: int | None = Field(default=None, alias="maxplayers")
    playing_time: int | None = Field(default=None, alias="playingtime")
    min_playtime: int | None = Field(default=None, alias="minplaytime")
    max_playtime: int | None = Field(default=None, alias="maxplaytime")
    min_age: int | None = Field(default=None, alias="minage")
    links: list[BggLink] = Field(default_factory=list["BggLink"], alias="link")

    _normalize_lists = field_validator("names", "links", mode="before")(_as_list)
    _normalize_numbers = field_validator(
        "year_published",
        "min_players",
        "max_players",
        "playing_time",
        "min_playtime",
        "max_playtime",
        "min_age",
        mode="before",
    )(_optional_int)
    _normalize_images = field_validator("image", "thumbnail", mode="before")(_blank_to_none)


class BggThingResponse(BggBaseModel):
    items: list[BggThing] = Field(default_factory=list["BggThing"], alias="item")

    _normalize_items = field_validator("items", mode="before")(_as_list)
