"""Telegram size calculation utilities.

This module provides functions to calculate the encoded size of telegrams
without actually encoding them. Widths taken from sibling fields or from the
stream remainder are only known per instance, so they report as None.
"""

from __future__ import annotations

from pydantic import BaseModel

from ..codec.schema import FieldKind, FieldSchema, TelegramSchema
from ..models.fields import REMAINDER


def _model_class(message_or_class: BaseModel | type[BaseModel]) -> type[BaseModel]:
    # Get the class if we were passed an instance
    if isinstance(message_or_class, BaseModel):
        return type(message_or_class)
    return message_or_class


def field_width(field_schema: FieldSchema) -> int | None:
    """Return the static width of one field in bytes, or None if dynamic."""
    if field_schema.kind is FieldKind.EMBEDDED:
        return fixed_size(field_schema.python_type)

    if field_schema.kind is FieldKind.ITERATION:
        if field_schema.count_field:
            return None
        element_size = fixed_size(field_schema.python_type)
        return None if element_size is None else field_schema.count * element_size

    if field_schema.length_field or field_schema.length == REMAINDER:
        return None
    return field_schema.length


def field_widths(message_or_class: BaseModel | type[BaseModel]) -> dict[str, int | None]:
    """Get the width in bytes of each described field of a telegram.

    Args:
        message_or_class: Telegram instance or class to analyze

    Returns:
        Dictionary mapping field names to their width, None where the width
        depends on field values or the stream length

    Raises:
        SchemaError: If the layout is invalid

    Example:
        >>> field_widths(Order)
        {'line_count': 2, 'lines': None}
    """
    schema = TelegramSchema.for_model(_model_class(message_or_class))
    return {field_schema.name: field_width(field_schema) for field_schema in schema.fields}


def fixed_size(message_or_class: BaseModel | type[BaseModel]) -> int | None:
    """Calculate the encoded size of a telegram in bytes.

    Ignorable fields are counted at their full width.

    Args:
        message_or_class: Telegram instance or class

    Returns:
        Total size, or None if any width or count is dynamic

    Raises:
        SchemaError: If the layout is invalid

    Example:
        >>> fixed_size(OrderLine)
        6
    """
    widths = field_widths(message_or_class)
    if any(width is None for width in widths.values()):
        return None
    return sum(widths.values())  # type: ignore[arg-type]
