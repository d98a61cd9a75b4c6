"""Pydantic telegram modeling for telegramcodec.

This module provides the Telegram base class and the field helpers used to
declare fixed-width byte layouts.
"""

from __future__ import annotations

from .base import Telegram
from .fields import REMAINDER, DataField, EmbeddedField, IterationField

__all__ = [
    "Telegram",
    "DataField",
    "EmbeddedField",
    "IterationField",
    "REMAINDER",
]
