"""Configuration for telegram converters."""

from __future__ import annotations

import codecs
import locale
from dataclasses import dataclass


def default_charset() -> str:
    """Return the platform's preferred encoding."""
    return locale.getpreferredencoding(False)


def normalize_charset(charset: str) -> str:
    """Return the canonical codec name of ``charset``.

    Raises:
        ValueError: If the charset is unknown, is not a text encoding, or
            writes a byte order mark (use e.g. "utf-16-le" instead of "utf-16")
    """
    try:
        name = codecs.lookup(charset).name
        one, two = " ".encode(name), "  ".encode(name)
    except LookupError as err:
        raise ValueError(f"unknown charset: {charset!r} ({err})") from err
    if len(two) != 2 * len(one):
        raise ValueError(
            f"charset {charset!r} writes a byte order mark into every field; "
            "use an explicit byte order variant"
        )
    return name


@dataclass
class ConverterConfig:
    """Settings shared by every decode/encode call of a converter.

    Attributes:
        charset: Codec name for all text fields (default: platform encoding).
            Legacy telegrams are commonly "ascii", "cp949", "euc-kr" or "utf-8".

    Padding is not configured here: the alignment is chosen per encode call.

    Examples:
        ```python
        config = ConverterConfig(charset="euc-kr")
        converter = TelegramConverter(config=config)
        ```
    """

    charset: str | None = None

    def __post_init__(self) -> None:
        """Resolve and validate the charset."""
        if self.charset is None:
            self.charset = default_charset()

        self.charset = normalize_charset(self.charset)
