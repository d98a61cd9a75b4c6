"""Telegram layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..codec.schema import FieldKind, FieldSchema, TelegramSchema
from ..models.base import Telegram
from ..models.fields import REMAINDER
from ..utils.layout import field_width, fixed_size

LINE_WIDTH = 54


def analyze_file(file_path: Path) -> None:
    """Analyze all Telegram classes in a Python file.

    Args:
        file_path: Path to Python file containing telegram definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only include classes defined in this file (not imported)
    telegram_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not Telegram and issubclass(obj, Telegram) and obj.__module__ == "user_module"
    ]

    if not telegram_classes:
        print(f"No Telegram classes found in {file_path}")
        return

    print("|" * 7, "telegramcodec: Fixed-Layout Telegram Codec", "|" * 7)
    print(f"{len(telegram_classes)} telegram{'s' if len(telegram_classes) != 1 else ''} loaded.")
    print("Widths are in bytes; '?' marks widths known only per record.")
    print()

    for telegram_class in telegram_classes:
        analyze_telegram_class(telegram_class)


def describe_field(field_schema: FieldSchema) -> str:
    """Describe where a field's width comes from."""
    if field_schema.kind is FieldKind.ITERATION:
        count = field_schema.count_field or str(field_schema.count)
        description = f"{count} x {field_schema.python_type.__name__}"
    elif field_schema.kind is FieldKind.EMBEDDED:
        description = field_schema.python_type.__name__
    elif field_schema.length == REMAINDER:
        description = "rest of stream"
    elif field_schema.length_field:
        description = f"length from {field_schema.length_field}"
    else:
        description = field_schema.python_type.__name__

    if field_schema.format:
        description += f" '{field_schema.format}'"
    if field_schema.ignorable:
        description += " (ignorable)"
    return description


def analyze_telegram_class(telegram_class: type[Telegram]) -> None:
    """Analyze a single telegram class and print its field layout.

    Args:
        telegram_class: Telegram class to analyze
    """
    print(f"{'=' * 19} {telegram_class.__name__} {'=' * 19}")

    schema = TelegramSchema.for_model(telegram_class)
    total = fixed_size(telegram_class)
    max_bytes = getattr(telegram_class, "telegram_max_bytes", None)

    if total is None:
        print("Record size: variable")
    else:
        print(f"Record size: {total} bytes")
    if max_bytes is not None:
        print(f"Allowed maximum size: {max_bytes} bytes")
    print()

    print(f"{'-' * 27} Fields {'-' * 27}")
    offset: int | None = 0
    for i, field_schema in enumerate(schema.fields, 1):
        width = field_width(field_schema)
        width_text = "?" if width is None else str(width)
        offset_text = "?" if offset is None else str(offset)

        field_desc = f"{i}. @{offset_text} {field_schema.name}"
        info = describe_field(field_schema)
        dots_needed = LINE_WIDTH - len(field_desc) - len(width_text) - len(info) - 2
        dots = "." * max(1, dots_needed)
        print(f"        {field_desc}{dots}{width_text} {info}")

        offset = None if offset is None or width is None else offset + width

    print()
