"""Base telegram class and telegramcodec-specific Pydantic configuration.

This module provides the Telegram class that all fixed-layout records should inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Telegram(BaseModel):
    """Base class for all telegrams.

    Telegrams declare their byte layout with the field helpers from
    ``telegramcodec.models.fields``. Only fields carrying such a descriptor take
    part in conversion; their declaration order is the order on the wire.

    Every described field has a default, so a telegram can always be built
    empty (``model_construct()``) and populated field by field while decoding.

    Example:
        >>> class Header(Telegram):
        ...     code: str | None = DataField(4)
        ...     length: int | None = DataField(3)
        ...     body: bytes | None = DataField(length_field="length")
        ...
        ...     telegram_max_bytes: ClassVar[int | None] = 512

    Attributes:
        telegram_max_bytes: Maximum encoded size in bytes (optional, checked on encode)
    """

    model_config = ConfigDict(
        # Decoded values are taken as-is, blank fields become None
        strict=False,
        arbitrary_types_allowed=True,
        validate_assignment=False,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    telegram_max_bytes: ClassVar[int | None] = None
