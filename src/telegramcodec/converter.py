"""Entry point for converting between telegrams and bytes.

TelegramConverter bundles a charset and optional custom-type hooks with the
decoding and encoding engines. The module-level decode(), encode() and
read_text() functions build a one-off converter per call.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel

from .codec.alignment import DataAlignment
from .codec.coercion import FormatHook, ParseHook, TypePredicate, ValueCoercer
from .codec.decoder import Decoder
from .codec.encoder import Encoder
from .codec.stream import ByteReader, ByteSource
from .config import ConverterConfig
from .exceptions import ConversionError, DecodeError, ErrorKind

T = TypeVar("T", bound=BaseModel)


class TelegramConverter:
    """Converts byte records to telegrams and back.

    Custom value types are supported by injecting a predicate together with a
    parse/format hook pair; the hooks are consulted before the built-in rules.

    Examples:
        ```python
        from telegramcodec import DataAlignment, TelegramConverter

        converter = TelegramConverter("euc-kr")
        order = converter.decode(data, Order)
        data = converter.encode(order, DataAlignment.RIGHT)

        # Custom types
        converter = TelegramConverter(
            "ascii",
            is_custom_type=lambda t: issubclass(t, Money),
            parse_custom=lambda t, text: t.parse(text),
            format_custom=str,
        )
        ```
    """

    def __init__(
        self,
        charset: Optional[str] = None,
        *,
        config: Optional[ConverterConfig] = None,
        is_custom_type: Optional[TypePredicate] = None,
        parse_custom: Optional[ParseHook] = None,
        format_custom: Optional[FormatHook] = None,
    ) -> None:
        """Initialize a converter.

        Args:
            charset: Codec name for text fields (default: platform encoding)
            config: Full configuration, mutually exclusive with charset
            is_custom_type: Returns True for types handled by the hooks
            parse_custom: Builds a custom value from its trimmed text
            format_custom: Renders a custom value as text

        Raises:
            ValueError: If the charset is unknown or the hooks are incomplete
        """
        if config is not None and charset is not None:
            raise ValueError("pass either charset or config, not both")

        self.config = config if config is not None else ConverterConfig(charset=charset)
        self.coercer = ValueCoercer(
            self.config.charset,  # type: ignore[arg-type]
            is_custom_type=is_custom_type,
            parse_custom=parse_custom,
            format_custom=format_custom,
        )
        self._decoder = Decoder(self.coercer)
        self._encoder = Encoder(self.coercer)

    @property
    def charset(self) -> str:
        return self.coercer.charset

    def decode(self, source: ByteSource | ByteReader, message_class: Type[T]) -> T:
        """Decode one telegram.

        Args:
            source: Bytes, a binary stream, or a ByteReader
            message_class: Telegram class to decode to

        Returns:
            Decoded telegram instance

        Raises:
            ConversionError: If decoding fails for any reason
        """
        return self._decoder.decode(source, message_class)

    def encode(self, message: BaseModel, alignment: DataAlignment = DataAlignment.LEFT) -> bytes:
        """Encode one telegram.

        Args:
            message: Telegram instance
            alignment: Where values sit inside their fixed-width slot

        Returns:
            Encoded bytes

        Raises:
            ConversionError: If encoding fails for any reason
        """
        return self._encoder.encode(message, alignment)

    def read_text(self, source: ByteSource | ByteReader, length: int) -> str:
        """Read ``length`` bytes and return them as trimmed text.

        Useful for ad hoc fields outside a telegram layout, such as a record
        type prefix that decides which telegram class follows.

        Raises:
            ConversionError: If the source is missing, length is negative, or
                the bytes are not valid in the charset
        """
        if source is None:
            raise DecodeError("source must not be None.", kind=ErrorKind.ARGUMENT_MISSING)

        try:
            reader = source if isinstance(source, ByteReader) else ByteReader(source)
            return self.coercer.decode_text(reader.read(length))
        except ConversionError:
            raise
        except (TypeError, ValueError) as err:
            raise DecodeError(str(err), kind=ErrorKind.ARGUMENT_MISSING, cause=err) from err


def decode(
    source: ByteSource | ByteReader, message_class: Type[T], charset: Optional[str] = None
) -> T:
    """Decode one telegram with a default converter.

    Example:
        >>> order = decode(b"2 A1    B2    ", Order, charset="ascii")
    """
    return TelegramConverter(charset).decode(source, message_class)


def encode(
    message: BaseModel,
    alignment: DataAlignment = DataAlignment.LEFT,
    charset: Optional[str] = None,
) -> bytes:
    """Encode one telegram with a default converter.

    Example:
        >>> encode(order, DataAlignment.LEFT, charset="ascii")
        b"2 A1    B2    "
    """
    return TelegramConverter(charset).encode(message, alignment)


def read_text(source: Any, length: int, charset: Optional[str] = None) -> str:
    """Read ``length`` bytes from ``source`` as trimmed text with a default converter."""
    return TelegramConverter(charset).read_text(source, length)
