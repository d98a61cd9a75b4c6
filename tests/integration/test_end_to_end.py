"""End-to-end integration tests."""

from __future__ import annotations

import datetime
import enum
import io
from typing import ClassVar, Optional

import pytest

from telegramcodec import (
    DataAlignment,
    DataField,
    EmbeddedField,
    IterationField,
    Telegram,
    TelegramConverter,
    decode,
    encode,
    field_widths,
    fixed_size,
)
from telegramcodec.codec import ByteReader

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


class Month(enum.IntEnum):
    """Month carried by its number."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class Week(enum.Enum):
    """Weekday carried by its name."""

    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6
    SUN = 7


class Detail(Telegram):
    """Repeated value object."""

    text_value: Optional[str] = DataField(100)
    int_value: Optional[int] = DataField(15)


class NestedLoop(Telegram):
    """Counted list of value objects."""

    count: Optional[int] = DataField(4)
    details: list[Detail] = IterationField(count_field="count")


class Record(Telegram):
    """Telegram with one field of every supported kind."""

    int_value: Optional[int] = DataField(15)
    long_value: Optional[int] = DataField(30)
    float_value: Optional[float] = DataField(30)
    text_value: Optional[str] = DataField(40)
    month_value: Optional[Month] = DataField(2)
    date_value: Optional[datetime.date] = DataField(10, format=DATE_FORMAT)
    datetime_value: Optional[datetime.datetime] = DataField(19, format=DATETIME_FORMAT)
    week_value: Optional[Week] = DataField(3)
    bool_value: Optional[bool] = DataField(6)
    byte_value: Optional[bytes] = DataField(3)

    detail: Optional[Detail] = EmbeddedField()
    nested_loop: Optional[NestedLoop] = EmbeddedField()

    details: list[Detail] = IterationField(2)

    telegram_max_bytes: ClassVar[Optional[int]] = 2048


def expected_bytes(record: Record, charset: str) -> bytes:
    """Build the record by padding each field on the right."""

    def pad(text: str, width: int) -> bytes:
        data = text.encode(charset)
        return data + b" " * (width - len(data))

    def detail_bytes(detail: Detail) -> bytes:
        return pad(detail.text_value or "", 100) + pad(str(detail.int_value), 15)

    head = (
        pad(str(record.int_value), 15)
        + pad(str(record.long_value), 30)
        + pad(str(record.float_value), 30)
        + pad(record.text_value or "", 40)
        + pad(str(int(record.month_value)), 2)
        + pad(record.date_value.strftime(DATE_FORMAT), 10)
        + pad(record.datetime_value.strftime(DATETIME_FORMAT), 19)
        + pad(record.week_value.name, 3)
        + pad("true" if record.bool_value else "false", 6)
    )
    loop = record.nested_loop
    return (
        head
        + record.byte_value
        + detail_bytes(record.detail)
        + pad(str(loop.count), 4)
        + b"".join(detail_bytes(detail) for detail in loop.details)
        + b"".join(detail_bytes(detail) for detail in record.details)
    )


def make_record(text: str = "telegram text") -> Record:
    return Record(
        int_value=-102,
        long_value=9_007_199_254_740_993,
        float_value=3.14159,
        text_value=text,
        month_value=Month.NOVEMBER,
        date_value=datetime.date(2024, 2, 29),
        datetime_value=datetime.datetime(2024, 2, 29, 23, 59, 58),
        week_value=Week.SAT,
        bool_value=False,
        byte_value=b"\x01\x02\x03",
        detail=Detail(text_value="embedded", int_value=7),
        nested_loop=NestedLoop(
            count=3,
            details=[
                Detail(text_value="first", int_value=1),
                Detail(text_value="second", int_value=-2),
                Detail(text_value="third", int_value=300),
            ],
        ),
        details=[
            Detail(text_value="list one", int_value=11),
            Detail(text_value="list two", int_value=22),
        ],
    )


@pytest.mark.parametrize(
    ("charset", "text"),
    [("utf-8", "telegram text"), ("utf-8", "전문 데이터"), ("euc-kr", "전문 데이터")],
)
def test_decode_full_record(charset: str, text: str) -> None:
    """Test decoding a record built field by field."""
    expected = make_record(text)
    data = expected_bytes(expected, charset)

    actual = TelegramConverter(charset).decode(io.BytesIO(data), Record)

    assert actual == expected
    assert actual.month_value is Month.NOVEMBER
    assert actual.nested_loop.details[2].int_value == 300


@pytest.mark.parametrize(
    ("charset", "text"),
    [("utf-8", "telegram text"), ("utf-8", "전문 데이터"), ("euc-kr", "전문 데이터")],
)
def test_encode_full_record(charset: str, text: str) -> None:
    """Test encoding matches the record built field by field."""
    record = make_record(text)

    actual = TelegramConverter(charset).encode(record, DataAlignment.LEFT)

    assert actual == expected_bytes(record, charset)


def test_roundtrip_right_aligned() -> None:
    """Test right alignment round-trips the whole record."""
    converter = TelegramConverter("utf-8")
    record = make_record()

    data = converter.encode(record, DataAlignment.RIGHT)

    assert data.startswith(b" " * 11 + b"-102")
    assert converter.decode(data, Record) == record


def test_empty_input_gives_empty_lists() -> None:
    """Test decoding nothing still returns list fields as empty lists."""
    actual = decode(b"", Record, charset="utf-8")

    assert actual is not None
    assert actual.details == []
    assert actual.int_value is None
    assert actual.detail is None


def test_record_size() -> None:
    """Test size analysis on the full record."""
    widths = field_widths(Record)

    assert widths["detail"] == 115
    assert widths["details"] == 230
    assert widths["nested_loop"] is None
    assert fixed_size(Record) is None
    assert fixed_size(Detail) == 115


def test_multiple_records_in_one_stream() -> None:
    """Test decoding consecutive telegrams of different types from one stream."""
    converter = TelegramConverter("utf-8")
    loop = NestedLoop(count=1, details=[Detail(text_value="x", int_value=1)])
    stream = ByteReader(
        converter.encode(Detail(text_value="head", int_value=0))
        + converter.encode(loop)
        + converter.encode(Detail(text_value="tail", int_value=9))
    )

    assert converter.decode(stream, Detail).text_value == "head"
    assert converter.decode(stream, NestedLoop) == loop
    assert converter.decode(stream, Detail).int_value == 9
    assert stream.exhausted()


def test_module_level_roundtrip() -> None:
    """Test the module-level encode/decode shortcuts."""
    record = make_record()

    data = encode(record, charset="utf-8")

    assert decode(data, Record, charset="utf-8") == record
