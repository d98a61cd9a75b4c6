"""Utility functions for telegramcodec.

This module provides layout size calculation.
"""

from __future__ import annotations

from .layout import field_width, field_widths, fixed_size

__all__ = [
    "field_width",
    "field_widths",
    "fixed_size",
]
