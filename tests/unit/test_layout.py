"""Tests for layout size utilities."""

from __future__ import annotations

from telegramcodec import (
    REMAINDER,
    DataField,
    EmbeddedField,
    IterationField,
    Telegram,
    TelegramConverter,
    field_widths,
    fixed_size,
)


class Line(Telegram):
    code: str | None = DataField(1)
    quantity: int | None = DataField(5)


class Batch(Telegram):
    batch_id: str | None = DataField(4)
    first: Line | None = EmbeddedField()
    lines: list[Line] = IterationField(3)
    memo: str | None = DataField(10, ignorable=True)


class Order(Telegram):
    line_count: int | None = DataField(2)
    lines: list[Line] = IterationField(count_field="line_count")


class Packet(Telegram):
    size: int | None = DataField(3)
    body: str | None = DataField(length_field="size")


class Trailer(Telegram):
    code: str | None = DataField(2)
    rest: bytes | None = DataField(REMAINDER)


def test_fixed_size_simple() -> None:
    assert fixed_size(Line) == 6


def test_fixed_size_nested() -> None:
    # 4 + 6 + 3 * 6 + 10
    assert fixed_size(Batch) == 38


def test_fixed_size_accepts_instance() -> None:
    assert fixed_size(Batch(batch_id="B1")) == 38


def test_field_widths() -> None:
    assert field_widths(Batch) == {"batch_id": 4, "first": 6, "lines": 18, "memo": 10}


def test_referenced_count_is_dynamic() -> None:
    assert field_widths(Order) == {"line_count": 2, "lines": None}
    assert fixed_size(Order) is None


def test_referenced_length_is_dynamic() -> None:
    assert field_widths(Packet)["body"] is None
    assert fixed_size(Packet) is None


def test_remainder_is_dynamic() -> None:
    assert field_widths(Trailer) == {"code": 2, "rest": None}
    assert fixed_size(Trailer) is None


def test_fixed_size_matches_encoding() -> None:
    data = TelegramConverter("ascii").encode(Batch(batch_id="B1", memo="x"))
    assert len(data) == fixed_size(Batch)
