"""Conversion between raw field bytes and typed values.

Each elementary field is carried as charset-encoded text. This module turns
that text into the declared Python type and back. Custom types are handled by
hooks injected at construction, consulted before the built-in rules.
"""

from __future__ import annotations

import datetime
import enum
import logging
from decimal import Decimal
from typing import Any, Callable, Optional, get_origin

from ..config import normalize_charset
from ..exceptions import ConversionError, DecodeError, EncodeError, ErrorKind

logger = logging.getLogger(__name__)

TypePredicate = Callable[[type], bool]
ParseHook = Callable[[type, str], Any]
FormatHook = Callable[[Any], str]

# Control characters and spaces, stripped from both ends of decoded text
_TRIM_CHARS = "".join(chr(code) for code in range(0x21))

_NUMERIC_TYPES = (int, float, Decimal)


def trim(text: str) -> str:
    return text.strip(_TRIM_CHARS).strip()


def is_class(declared_type: Any) -> bool:
    return isinstance(declared_type, type) and get_origin(declared_type) is None


def is_byte_slice(declared_type: Any) -> bool:
    return is_class(declared_type) and issubclass(declared_type, (bytes, bytearray))


def is_text(declared_type: type) -> bool:
    return issubclass(declared_type, str) and not issubclass(declared_type, enum.Enum)


def is_ordinal_enum(declared_type: type) -> bool:
    """Enums whose wire form is their integer value (IntEnum, calendar.Month)."""
    return issubclass(declared_type, enum.Enum) and issubclass(declared_type, int)


def is_temporal(declared_type: type) -> bool:
    return issubclass(declared_type, (datetime.date, datetime.time))


def _never(declared_type: type) -> bool:
    return False


class ValueCoercer:
    """Converts field bytes to values and values to field text.

    Rules are tried in order, first match wins:

    1. bytes/bytearray are passed through untouched
    2. blank text decodes to None for every other type
    3. str
    4. custom types (injected predicate and hooks)
    5. ordinal enums by integer value
    6. enums by member name, bool, int, float and Decimal
    7. date, datetime and time with the field's format
    8. anything else decodes to None and encodes to empty text

    Example:
        >>> coercer = ValueCoercer("ascii")
        >>> coercer.bytes_to_value(int, b"  42 ")
        42
        >>> coercer.value_to_text(bool, True)
        'true'
    """

    def __init__(
        self,
        charset: str,
        is_custom_type: Optional[TypePredicate] = None,
        parse_custom: Optional[ParseHook] = None,
        format_custom: Optional[FormatHook] = None,
    ) -> None:
        """Initialize a coercer.

        Args:
            charset: Codec name used for all text fields
            is_custom_type: Returns True for types handled by the hooks
            parse_custom: Builds a value of the given type from trimmed text
            format_custom: Renders a custom value as text

        Raises:
            ValueError: If the charset is unusable, or a predicate is given
                without both hooks
        """
        if is_custom_type is not None and (parse_custom is None or format_custom is None):
            raise ValueError("is_custom_type requires both parse_custom and format_custom")

        self.charset = normalize_charset(charset)
        self._is_custom_type: TypePredicate = is_custom_type or _never
        self._parse_custom = parse_custom
        self._format_custom = format_custom
        self.fill = " ".encode(self.charset)

    def decode_text(self, raw: bytes) -> str:
        """Decode raw bytes with the charset and trim surrounding whitespace.

        Raises:
            DecodeError: If the bytes are not valid in the charset
        """
        try:
            return trim(bytes(raw).decode(self.charset))
        except UnicodeDecodeError as err:
            raise DecodeError(
                f"invalid {self.charset} data: {err}", kind=ErrorKind.FORMAT_INVALID, cause=err
            ) from err

    def encode_text(self, text: str) -> bytes:
        """Encode text with the charset.

        Raises:
            EncodeError: If the text cannot be represented in the charset
        """
        try:
            return text.encode(self.charset)
        except UnicodeEncodeError as err:
            raise EncodeError(
                f"cannot encode {text!r} as {self.charset}: {err}",
                kind=ErrorKind.FORMAT_INVALID,
                cause=err,
            ) from err

    def bytes_to_value(self, declared_type: type, raw: bytes, fmt: Optional[str] = None) -> Any:
        """Convert a field's bytes to a value of ``declared_type``.

        Args:
            declared_type: Field value type
            raw: Bytes read for the field
            fmt: Date/time pattern of the field

        Returns:
            Converted value, or None for blank input and unsupported types

        Raises:
            DecodeError: If the text is not a valid literal of the type, or a
                date/time field has no format
        """
        if is_byte_slice(declared_type):
            return declared_type(raw)

        text = self.decode_text(raw)
        if not text:
            return None

        if not is_class(declared_type) or declared_type is type(None):
            logger.debug("no conversion rule for %r, leaving value unset", declared_type)
            return None

        if is_text(declared_type):
            return text

        try:
            if self._is_custom_type(declared_type):
                return self._parse_custom(declared_type, text)  # type: ignore[misc]
            if is_ordinal_enum(declared_type):
                return declared_type(int(text))
            if issubclass(declared_type, enum.Enum):
                return declared_type[text]
            if issubclass(declared_type, bool):
                return text.lower() == "true"
            if issubclass(declared_type, _NUMERIC_TYPES):
                return declared_type(text)
            if is_temporal(declared_type):
                return self._parse_temporal(declared_type, text, fmt)
        except ConversionError:
            raise
        except Exception as err:
            raise DecodeError(
                f"cannot convert {text!r} to {declared_type.__name__}: {err}",
                kind=ErrorKind.FORMAT_INVALID,
                cause=err,
            ) from err

        logger.debug("no conversion rule for %s, leaving value unset", declared_type.__name__)
        return None

    def value_to_text(self, declared_type: type, value: Any, fmt: Optional[str] = None) -> str:
        """Convert a value of ``declared_type`` to its field text.

        Returns:
            Text to be padded, empty for None and unsupported types

        Raises:
            EncodeError: If the value cannot be rendered, or a date/time field
                has no format
        """
        if value is None:
            return ""

        if not is_class(declared_type) or declared_type is type(None):
            logger.debug("no conversion rule for %r, writing blank", declared_type)
            return ""

        if is_text(declared_type):
            return str(value)

        try:
            if self._is_custom_type(declared_type):
                return self._format_custom(value)  # type: ignore[misc]
            if is_ordinal_enum(declared_type):
                return str(int(value))
            if issubclass(declared_type, enum.Enum):
                return value.name
            if issubclass(declared_type, bool):
                return "true" if value else "false"
            if issubclass(declared_type, _NUMERIC_TYPES):
                return str(value)
            if is_temporal(declared_type):
                return value.strftime(self._require_format(declared_type, fmt, EncodeError))
        except ConversionError:
            raise
        except Exception as err:
            raise EncodeError(
                f"cannot convert {value!r} from {declared_type.__name__}: {err}",
                kind=ErrorKind.FORMAT_INVALID,
                cause=err,
            ) from err

        logger.debug("no conversion rule for %s, writing blank", declared_type.__name__)
        return ""

    def _parse_temporal(self, declared_type: type, text: str, fmt: Optional[str]) -> Any:
        parsed = datetime.datetime.strptime(
            text, self._require_format(declared_type, fmt, DecodeError)
        )
        if issubclass(declared_type, datetime.datetime):
            return parsed
        if issubclass(declared_type, datetime.date):
            return parsed.date()
        if parsed.tzinfo is not None:
            return parsed.timetz()
        return parsed.time()

    @staticmethod
    def _require_format(
        declared_type: type, fmt: Optional[str], error: type[ConversionError]
    ) -> str:
        if fmt is None or not fmt.strip():
            raise error(
                f"Date format must not be empty for {declared_type.__name__} fields",
                kind=ErrorKind.FORMAT_INVALID,
            )
        return fmt
