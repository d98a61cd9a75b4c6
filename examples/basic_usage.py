#!/usr/bin/env python3
"""Basic usage example for telegramcodec.

This example demonstrates:
1. Describing a fixed-layout telegram with Pydantic
2. Encoding to a padded byte record
3. Decoding back to a Pydantic model
4. Calculating record sizes
"""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from typing import ClassVar

from telegramcodec import (
    DataAlignment,
    DataField,
    EmbeddedField,
    IterationField,
    Telegram,
    TelegramConverter,
    field_widths,
    fixed_size,
)


class Side(enum.Enum):
    BUY = "B"
    SELL = "S"


class Header(Telegram):
    """Common telegram header."""

    telegram_code: str | None = DataField(4)
    sent_at: datetime.datetime | None = DataField(14, format="%Y%m%d%H%M%S")


class OrderLine(Telegram):
    """One order line."""

    symbol: str | None = DataField(6)
    side: Side | None = DataField(4)
    quantity: int | None = DataField(7)
    price: Decimal | None = DataField(10)


class OrderTelegram(Telegram):
    """Order telegram with a counted list of lines."""

    header: Header | None = EmbeddedField()
    account: str | None = DataField(8)
    urgent: bool | None = DataField(5)
    line_count: int | None = DataField(2)
    lines: list[OrderLine] = IterationField(count_field="line_count")

    telegram_max_bytes: ClassVar[int | None] = 512


class Heartbeat(Telegram):
    """Fixed-size keep-alive telegram."""

    header: Header | None = EmbeddedField()
    sequence: int | None = DataField(6)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("telegramcodec Basic Usage Example")
    print("=" * 60)
    print()

    converter = TelegramConverter("ascii")

    # Create a telegram instance
    print("1. Creating an order telegram...")
    order = OrderTelegram(
        header=Header(telegram_code="ORD1", sent_at=datetime.datetime(2024, 3, 1, 9, 30)),
        account="ACC-0042",
        urgent=False,
        line_count=2,
        lines=[
            OrderLine(symbol="ACME", side=Side.BUY, quantity=100, price=Decimal("12.50")),
            OrderLine(symbol="GLOBX", side=Side.SELL, quantity=25, price=Decimal("101.25")),
        ],
    )
    print(f"   Account: {order.account}")
    print(f"   Lines: {order.line_count}")
    print()

    # Analyze field widths
    print("2. Analyzing field widths...")
    for field_name, width in field_widths(Heartbeat).items():
        print(f"   Heartbeat.{field_name}: {width} bytes")
    print(f"   Heartbeat total: {fixed_size(Heartbeat)} bytes")
    print(f"   OrderTelegram total: {fixed_size(OrderTelegram)} (depends on line_count)")
    print()

    # Encode the telegram
    print("3. Encoding to a fixed-layout record...")
    left = converter.encode(order)
    right = converter.encode(order, DataAlignment.RIGHT)
    print(f"   Left aligned ({len(left)} bytes):  {left!r}")
    print(f"   Right aligned ({len(right)} bytes): {right!r}")
    print()

    # Decode the telegram
    print("4. Decoding back to a telegram...")
    decoded = converter.decode(left, OrderTelegram)
    for line in decoded.lines:
        print(f"   {line.side.name if line.side else '?':4} {line.quantity} {line.symbol} @ {line.price}")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    assert decoded == order, "Round-trip failed!"
    print("   Round-trip successful!")
    print()

    # Truncated input keeps what was received
    print("6. Decoding a truncated record...")
    partial = converter.decode(left[:30], OrderTelegram)
    print(f"   header={partial.header}")
    print(f"   account={partial.account!r} lines={partial.lines}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
