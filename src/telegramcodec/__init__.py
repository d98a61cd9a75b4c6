"""telegramcodec: Fixed-Layout Telegram Codec

A Python library for converting between flat, fixed-width byte records
("telegrams") and Pydantic models. Designed for legacy interchange formats
where every field occupies a fixed number of bytes, or a number of bytes
given by an earlier field, with nested records and repeated groups.

Key Features:
- Pydantic-based telegram modeling
- Widths and repeat counts taken from earlier fields
- Nested telegrams and repeated lists
- Left or right alignment with charset-aware space padding
- Pluggable parsing and formatting for custom value types

Quick Start:
    >>> from telegramcodec import DataField, IterationField, Telegram, decode, encode
    >>>
    >>> class OrderLine(Telegram):
    ...     code: str | None = DataField(1)
    ...     quantity: int | None = DataField(5)
    >>>
    >>> class Order(Telegram):
    ...     line_count: int | None = DataField(2)
    ...     lines: list[OrderLine] = IterationField(count_field="line_count")
    >>>
    >>> order = decode(b"2 A1    B2    ", Order, charset="ascii")
    >>> encode(order, charset="ascii")
    b'2 A1    B2    '
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import DataAlignment, TelegramSchema
from .config import ConverterConfig
from .converter import TelegramConverter, decode, encode, read_text
from .exceptions import (
    ConversionError,
    DecodeError,
    EncodeError,
    ErrorKind,
    SchemaError,
    TelegramError,
)
from .models import REMAINDER, DataField, EmbeddedField, IterationField, Telegram
from .utils import field_widths, fixed_size

__all__ = [
    # Core API
    "Telegram",
    "TelegramConverter",
    "decode",
    "encode",
    "read_text",
    "DataAlignment",
    "ConverterConfig",
    # Field helpers
    "DataField",
    "EmbeddedField",
    "IterationField",
    "REMAINDER",
    # Exceptions
    "TelegramError",
    "ConversionError",
    "SchemaError",
    "EncodeError",
    "DecodeError",
    "ErrorKind",
    # Layout
    "TelegramSchema",
    "field_widths",
    "fixed_size",
    # Version
    "__version__",
]
