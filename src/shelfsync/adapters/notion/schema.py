"""Pydantic models for the Notion API payloads the catalog reads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _none_to_list(value: object) -> object:
    return [] if value is None else value


class NotionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class NotionRichText(NotionBaseModel):
    plain_text: str = ""


class NotionSelect(NotionBaseModel):
    name: str | None = None


class NotionRelation(NotionBaseModel):
    id: str


class NotionDate(NotionBaseModel):
    start: str | None = None


class NotionFormula(NotionBaseModel):
    type: str
    string: str | None = None
    number: float | None = None
    boolean: bool | None = None


class NotionRollup(NotionBaseModel):
    type: str
    array: list[NotionProperty] = Field(default_factory=list["NotionProperty"])
    number: float | None = None

    _normalize_array = field_validator("array", mode="before")(_none_to_list)


class NotionProperty(NotionBaseModel):
    """One entry of a page's ``properties`` map, or one item of a rollup array."""

    type: str
    title: list[NotionRichText] = Field(default_factory=list["NotionRichText"])
    rich_text: list[NotionRichText] = Field(default_factory=list["NotionRichText"])
    number: float | None = None
    url: str | None = None
    checkbox: bool | None = None
    select: NotionSelect | None = None
    relation: list[NotionRelation] = Field(default_factory=list["NotionRelation"])
    rollup: NotionRollup | None = None
    formula: NotionFormula | None = None
    date: NotionDate | None = None

    _normalize_lists = field_validator("title", "rich_text", "relation", mode="before")(
        _none_to_list
    )


class NotionPage(NotionBaseModel):
    id: str
    archived: bool = False
    properties: dict[str, NotionProperty] = Field(default_factory=dict[str, "NotionProperty"])


class NotionQueryResponse(NotionBaseModel):
    results: list[NotionPage] = Field(default_factory=list["NotionPage"])
    has_more: bool = False
    next_cursor: str | None = None


class NotionErrorResponse(NotionBaseModel):
    status: int | None = None
    code: str | None = None
    message: str = "Unspecified Notion error"


NotionRollup.model_rebuild()
NotionProperty.model_rebuild()
