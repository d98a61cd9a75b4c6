"""Field layout helpers.

This module provides the functions used to attach a byte layout to telegram
fields. Each helper returns a Pydantic FieldInfo whose ``json_schema_extra``
carries the layout under the ``telegram`` key, which is what
``telegramcodec.codec.schema`` reads back.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

# Layout key inside json_schema_extra
LAYOUT_KEY = "telegram"

# Width marker: consume (or emit) the rest of the stream unpadded
REMAINDER = -1

DATA = "data"
EMBEDDED = "embedded"
ITERATION = "iteration"


def _with_layout(layout: dict[str, Any], kwargs: dict[str, Any]) -> FieldInfo:
    extra = kwargs.pop("json_schema_extra", None) or {}
    if not isinstance(extra, dict):
        raise TypeError("json_schema_extra must be a dict when combined with a telegram layout")
    return cast(FieldInfo, Field(json_schema_extra={**extra, LAYOUT_KEY: layout}, **kwargs))


def DataField(
    length: int = 0,
    *,
    length_field: str | None = None,
    format: str | None = None,
    ignorable: bool = False,
    **kwargs: Any,
) -> FieldInfo:
    """Create an elementary field occupying a fixed or referenced number of bytes.

    Args:
        length: Width in bytes. ``0`` takes the width from ``length_field``,
            ``REMAINDER`` (-1) consumes the rest of the stream.
        length_field: Name of an earlier integer field holding the width
        format: strftime/strptime pattern, required for date/time fields
        ignorable: Emit nothing on encode when the value is None
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Raises:
        ValueError: If the width is neither positive, REMAINDER nor referenced

    Example:
        >>> class Message(Telegram):
        ...     size: int | None = DataField(4)
        ...     text: str | None = DataField(length_field="size")
        ...     sent_at: datetime | None = DataField(14, format="%Y%m%d%H%M%S")
    """
    if length < REMAINDER:
        raise ValueError(f"length must be >= {REMAINDER}, got {length}")
    if length == 0 and not length_field:
        raise ValueError("length=0 requires length_field")
    if length != 0 and length_field:
        raise ValueError("length and length_field are mutually exclusive")

    kwargs.setdefault("default", None)
    return _with_layout(
        {
            "kind": DATA,
            "length": length,
            "length_field": length_field,
            "format": format,
            "ignorable": ignorable,
        },
        kwargs,
    )


def EmbeddedField(*, ignorable: bool = False, **kwargs: Any) -> FieldInfo:
    """Create a field holding a nested telegram decoded in place.

    Example:
        >>> class Message(Telegram):
        ...     header: Header | None = EmbeddedField()
    """
    kwargs.setdefault("default", None)
    return _with_layout({"kind": EMBEDDED, "ignorable": ignorable}, kwargs)


def IterationField(
    count: int = 0,
    *,
    count_field: str | None = None,
    ignorable: bool = False,
    **kwargs: Any,
) -> FieldInfo:
    """Create a list field repeating a nested telegram.

    Args:
        count: Number of elements. ``0`` takes the count from ``count_field``.
        count_field: Name of an earlier integer field holding the count
        ignorable: Emit nothing on encode when the value is None
        **kwargs: Additional Field() arguments

    Raises:
        ValueError: If neither a positive count nor a count field is given

    Example:
        >>> class Order(Telegram):
        ...     line_count: int | None = DataField(2)
        ...     lines: list[OrderLine] = IterationField(count_field="line_count")
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0 and not count_field:
        raise ValueError("count=0 requires count_field")
    if count != 0 and count_field:
        raise ValueError("count and count_field are mutually exclusive")

    if "default" not in kwargs:
        kwargs.setdefault("default_factory", list)
    return _with_layout(
        {"kind": ITERATION, "count": count, "count_field": count_field, "ignorable": ignorable},
        kwargs,
    )
