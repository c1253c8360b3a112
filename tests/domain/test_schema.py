from __future__ import annotations

import pytest

from shelfsync.domain.errors import UnmappableFieldError
from shelfsync.domain.model import (
    NumberProperty,
    NumberWrite,
    RelationProperty,
    RichTextProperty,
    RichTextWrite,
    UrlProperty,
    UrlWrite,
)
from shelfsync.domain.schema import FIELD_SCHEMA, FieldKind, FieldSpec


def test_field_schema_covers_synced_attributes_in_order() -> None:
    assert [spec.local_key for spec in FIELD_SCHEMA] == [
        "Players min",
        "Players max",
        "Playtime min",
        "Playtime max",
        "Age",
        "Published year",
        "bgg_name",
        "BGG",
        "bgg_image_url",
    ]


@pytest.mark.parametrize(
    ("kind", "value", "expected"),
    [
        (FieldKind.NUMBER, None, False),
        (FieldKind.NUMBER, NumberProperty(value=None), False),
        (FieldKind.NUMBER, NumberProperty(value=0), False),
        (FieldKind.NUMBER, NumberProperty(value=3), True),
        (FieldKind.URL, UrlProperty(value=""), False),
        (FieldKind.URL, UrlProperty(value="https://example.com"), True),
        (FieldKind.TEXT, RichTextProperty(spans=()), False),
        (FieldKind.TEXT, RichTextProperty(spans=("x",)), True),
        (FieldKind.RELATION, RelationProperty(ids=()), False),
        (FieldKind.RELATION, RelationProperty(ids=("a",)), True),
    ],
)
def test_is_set_per_kind(kind: FieldKind, value: object, expected: bool) -> None:
    spec = FieldSpec("Field", "field", kind)

    assert spec.is_set(value) is expected  # type: ignore[arg-type]


def test_to_write_builds_typed_payloads() -> None:
    assert FieldSpec("n", "n", FieldKind.NUMBER).to_write(4) == NumberWrite(value=4)
    assert FieldSpec("u", "u", FieldKind.URL).to_write(" https://x ") == UrlWrite(value="https://x")
    assert FieldSpec("t", "t", FieldKind.TEXT).to_write("Azul") == RichTextWrite(content="Azul")


@pytest.mark.parametrize(
    ("kind", "raw"),
    [
        (FieldKind.NUMBER, "4"),
        (FieldKind.NUMBER, True),
        (FieldKind.URL, 12),
        (FieldKind.TEXT, ["a"]),
        (FieldKind.RELATION, "id"),
    ],
)
def test_to_write_rejects_unmappable_values(kind: FieldKind, raw: object) -> None:
    spec = FieldSpec("Field", "field", kind)

    with pytest.raises(UnmappableFieldError) as excinfo:
        spec.to_write(raw)

    assert excinfo.value.field == "Field"
    assert excinfo.value.payload == raw
