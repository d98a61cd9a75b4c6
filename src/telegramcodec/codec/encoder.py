"""Fixed-layout encoder for telegram models.

This module provides the Encoder that turns a telegram instance into its byte
record: every field is rendered as text, padded to its width and appended in
declaration order.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from ..exceptions import ConversionError, EncodeError, ErrorKind
from .alignment import DataAlignment
from .coercion import ValueCoercer, is_byte_slice
from .schema import FieldKind, FieldSchema, TelegramSchema
from .stream import ByteWriter

logger = logging.getLogger(__name__)


class Encoder:
    """Converts telegram instances into bytes.

    Short lists are filled up to their count with default elements and a
    missing embedded telegram is written as a default one, so any instance
    of a valid layout can be encoded.

    Example:
        >>> encoder = Encoder(ValueCoercer("ascii"))
        >>> encoder.encode(Name(first="AB"), DataAlignment.RIGHT)
        b'   AB'
    """

    def __init__(self, coercer: ValueCoercer) -> None:
        self.coercer = coercer

    def encode(self, message: BaseModel, alignment: DataAlignment = DataAlignment.LEFT) -> bytes:
        """Encode a telegram to its fixed-layout byte record.

        Args:
            message: Telegram instance to encode
            alignment: Where values sit inside their fixed-width slot

        Returns:
            Encoded bytes

        Raises:
            SchemaError: If the telegram layout is invalid
            EncodeError: If a value cannot be rendered or does not fit its width
            ConversionError: For any other failure, with its ErrorKind
        """
        if message is None:
            raise EncodeError("message must not be None.", kind=ErrorKind.ARGUMENT_MISSING)

        writer = ByteWriter()
        try:
            self._encode_record(writer, message, alignment)
        except ConversionError:
            raise
        except Exception as err:
            raise EncodeError(
                f"Failed to encode {type(message).__name__}: {err}",
                kind=ErrorKind.FIELD_ACCESS_FAILED,
                cause=err,
            ) from err
        return writer.to_bytes()

    def _encode_record(self, writer: ByteWriter, message: Any, alignment: DataAlignment) -> None:
        message_class = type(message)
        schema = TelegramSchema.for_model(message_class)
        start = len(writer)

        for field_schema in schema.fields:
            value = field_schema.get(message)
            if field_schema.ignorable and value is None:
                continue

            if field_schema.kind is FieldKind.ITERATION:
                self._encode_list(writer, field_schema, message, value, alignment)
            elif field_schema.kind is FieldKind.EMBEDDED:
                if value is None:
                    value = TelegramSchema.for_model(field_schema.python_type).create()
                self._encode_record(writer, value, alignment)
            else:
                writer.write(self._encode_data(field_schema, message, value, alignment))

        max_bytes = getattr(message_class, "telegram_max_bytes", None)
        size = len(writer) - start
        if max_bytes is not None and size > max_bytes:
            raise EncodeError(
                f"Encoded telegram size ({size} bytes) exceeds "
                f"{message_class.__name__}.telegram_max_bytes={max_bytes}"
            )

    def _encode_list(
        self,
        writer: ByteWriter,
        field_schema: FieldSchema,
        message: Any,
        value: Any,
        alignment: DataAlignment,
    ) -> None:
        count = field_schema.resolve_count(message)
        elements = list(value) if value is not None else []
        if len(elements) > count:
            logger.warning(
                "%s.%s holds %d elements, only the first %d are encoded",
                type(message).__name__,
                field_schema.name,
                len(elements),
                count,
            )

        element_schema = TelegramSchema.for_model(field_schema.python_type)
        for index in range(count):
            element = elements[index] if index < len(elements) else element_schema.create()
            self._encode_record(writer, element, alignment)

    def _encode_data(
        self, field_schema: FieldSchema, message: Any, value: Any, alignment: DataAlignment
    ) -> bytes:
        if is_byte_slice(field_schema.python_type):
            data = bytes(value) if value is not None else b""
        else:
            text = self.coercer.value_to_text(field_schema.python_type, value, field_schema.format)
            data = self.coercer.encode_text(text)

        width = field_schema.resolve_width(message)
        try:
            return alignment.apply_pad(data, width, self.coercer.fill)
        except ValueError as err:
            raise EncodeError(
                f"Field {field_schema.name}: value {value!r} is {len(data)} bytes, "
                f"wider than its width of {width}",
                kind=ErrorKind.FORMAT_INVALID,
                cause=err,
            ) from err
