"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from telegramcodec import TelegramConverter
from telegramcodec.codec import ValueCoercer


@pytest.fixture
def converter() -> TelegramConverter:
    """ASCII converter without custom types."""
    return TelegramConverter("ascii")


@pytest.fixture
def coercer() -> ValueCoercer:
    """ASCII value coercer without custom types."""
    return ValueCoercer("ascii")
