"""Padding policies applied to fixed-width fields on encode."""

from __future__ import annotations

import enum

from ..models.fields import REMAINDER


class DataAlignment(enum.Enum):
    """Where the data sits inside its fixed-width slot.

    LEFT keeps the data at the start and pads after it ("AB   "), RIGHT pads
    before the data ("   AB"). Decoding trims either form back to "AB".
    """

    LEFT = "left"
    RIGHT = "right"

    def apply_pad(self, data: bytes, width: int, fill: bytes = b" ") -> bytes:
        """Pad ``data`` to exactly ``width`` bytes.

        Args:
            data: Encoded field value
            width: Target width in bytes, or REMAINDER for no padding
            fill: Encoded fill character (a space in the data charset)

        Returns:
            Padded bytes

        Raises:
            ValueError: If data is wider than width
        """
        if width == REMAINDER:
            return data

        missing = width - len(data)
        if missing < 0:
            raise ValueError(f"{len(data)} bytes do not fit in a width of {width}")

        padding = (fill * missing)[:missing]
        if self is DataAlignment.LEFT:
            return data + padding
        return padding + data
