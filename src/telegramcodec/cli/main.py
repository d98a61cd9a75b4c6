"""Main CLI entry point for telegramcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file
from ..exceptions import TelegramError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the telegramcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="telegramcodec: Fixed-Layout Telegram Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  telegramcodec --analyze telegrams.py      Show the byte layout of each telegram
  telegramcodec --version                   Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze telegram layouts and show field widths and offsets",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log layout registration details",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"telegramcodec {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except TelegramError as e:
            print(f"Error: invalid telegram layout: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
