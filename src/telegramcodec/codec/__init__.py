"""Fixed-layout codec for telegramcodec.

This module provides the decoding and encoding engines along with the layout
schema, value coercion and padding policies they share.
"""

from __future__ import annotations

from .alignment import DataAlignment
from .coercion import ValueCoercer
from .decoder import Decoder
from .encoder import Encoder
from .schema import FieldKind, FieldSchema, TelegramSchema, resolve_size
from .stream import ByteReader, ByteWriter

__all__ = [
    "Decoder",
    "Encoder",
    "DataAlignment",
    "ValueCoercer",
    "TelegramSchema",
    "FieldSchema",
    "FieldKind",
    "resolve_size",
    "ByteReader",
    "ByteWriter",
]
