"""Fixed-layout decoder for telegram models.

This module provides the Decoder that builds a telegram instance from a byte
source, walking the layout table depth-first in declaration order over a
single forward-only cursor.
"""

from __future__ import annotations

import logging
from typing import Any, Type, TypeVar

from pydantic import BaseModel

from ..exceptions import ConversionError, DecodeError, ErrorKind
from ..models.fields import REMAINDER
from .coercion import ValueCoercer
from .schema import FieldKind, FieldSchema, TelegramSchema
from .stream import ByteReader, ByteSource

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Decoder:
    """Converts bytes into telegram instances.

    Truncated input is tolerated: once the source runs out, remaining fields
    keep their defaults and remaining list fields become empty lists.

    Example:
        >>> decoder = Decoder(ValueCoercer("ascii"))
        >>> order = decoder.decode(b"2 A1    B2    ", Order)
        >>> [line.code for line in order.lines]
        ['A', 'B']
    """

    def __init__(self, coercer: ValueCoercer) -> None:
        self.coercer = coercer

    def decode(self, source: ByteSource | ByteReader, message_class: Type[T]) -> T:
        """Decode one telegram from ``source``.

        Args:
            source: Bytes, a binary stream, or a ByteReader shared between calls
            message_class: Telegram class to decode to

        Returns:
            Fully populated telegram instance

        Raises:
            SchemaError: If the telegram layout is invalid
            DecodeError: If any field cannot be read or converted
            ConversionError: For any other failure, with its ErrorKind
        """
        if source is None or message_class is None:
            raise DecodeError(
                "Neither source nor message_class may be None.", kind=ErrorKind.ARGUMENT_MISSING
            )

        try:
            reader = source if isinstance(source, ByteReader) else ByteReader(source)
        except TypeError as err:
            raise DecodeError(str(err), kind=ErrorKind.ARGUMENT_MISSING, cause=err) from err

        try:
            return self._decode_record(reader, message_class)
        except ConversionError:
            raise
        except Exception as err:
            raise DecodeError(
                f"Failed to decode {getattr(message_class, '__name__', message_class)}: {err}",
                kind=ErrorKind.FIELD_ACCESS_FAILED,
                cause=err,
            ) from err

    def _decode_record(self, reader: ByteReader, message_class: Type[T]) -> T:
        schema = TelegramSchema.for_model(message_class)
        instance = schema.create()

        for field_schema in schema.fields:
            if reader.exhausted():
                if field_schema.is_list:
                    field_schema.set(instance, [])
                continue

            logger.debug(
                "decoding %s.%s at offset %d",
                message_class.__name__,
                field_schema.name,
                reader.position(),
            )
            field_schema.set(instance, self._decode_field(reader, field_schema, instance))

        return instance

    def _decode_field(self, reader: ByteReader, field_schema: FieldSchema, instance: Any) -> Any:
        if field_schema.kind is FieldKind.ITERATION:
            count = field_schema.resolve_count(instance)
            return [self._decode_record(reader, field_schema.python_type) for _ in range(count)]

        if field_schema.kind is FieldKind.EMBEDDED:
            return self._decode_record(reader, field_schema.python_type)

        width = field_schema.resolve_width(instance)
        raw = reader.read_all() if width == REMAINDER else reader.read(width)
        if len(raw) < width:
            logger.debug(
                "short read for %s: wanted %d bytes, got %d", field_schema.name, width, len(raw)
            )
        return self.coercer.bytes_to_value(field_schema.python_type, raw, field_schema.format)
