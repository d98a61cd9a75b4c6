"""Exception hierarchy for telegramcodec.

Every failure raised by a decode or encode call is a ConversionError. The
``kind`` attribute tells callers what went wrong without parsing messages,
and the original exception (if any) is kept as ``cause``.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Category of a conversion failure."""

    ARGUMENT_MISSING = "argument-missing"
    CONSTRUCTION_FAILED = "construction-failed"
    FIELD_ACCESS_FAILED = "field-access-failed"
    FORMAT_INVALID = "format-invalid"
    IO_FAILED = "io-failed"
    SCHEMA_INVALID = "schema-invalid"


class TelegramError(Exception):
    """Base exception for all telegramcodec errors."""

    pass


class ConversionError(TelegramError):
    """Raised when a conversion (decode) or deconversion (encode) fails.

    Attributes:
        kind: Failure category
        cause: Underlying exception, if the failure wraps one
    """

    default_kind = ErrorKind.FORMAT_INVALID

    def __init__(
        self,
        message: str,
        kind: ErrorKind | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.kind = kind if kind is not None else self.default_kind
        self.cause = cause
        super().__init__(f"The conversion process failed. ({message})")


class SchemaError(ConversionError):
    """Raised when a telegram layout is invalid.

    Examples:
        - Length or count reference names an unknown or later field
        - Embedded/list element type is not a Telegram
        - Embedded/list types form a cycle
        - Negative literal width or count
    """

    default_kind = ErrorKind.SCHEMA_INVALID


class DecodeError(ConversionError):
    """Raised when bytes cannot be converted into a telegram.

    Examples:
        - Malformed numeric or date literal
        - Missing date/time format
        - Length reference holding a non-integer value
        - Read failure on the underlying stream

    Truncated input is not an error: trailing fields keep their defaults.
    """

    pass


class EncodeError(ConversionError):
    """Raised when a telegram cannot be converted into bytes.

    Examples:
        - Value wider than its configured width
        - Missing date/time format
        - Encoded telegram exceeds telegram_max_bytes
    """

    pass
