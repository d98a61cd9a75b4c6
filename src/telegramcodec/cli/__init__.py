"""Command-line tools for telegramcodec."""
