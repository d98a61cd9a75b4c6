"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from telegramcodec.cli.main import main

TELEGRAMS = '''
from typing import ClassVar

from telegramcodec import DataField, EmbeddedField, IterationField, REMAINDER, Telegram


class Line(Telegram):
    code: str | None = DataField(1)
    quantity: int | None = DataField(5)


class Order(Telegram):
    line_count: int | None = DataField(2)
    first: Line | None = EmbeddedField()
    lines: list[Line] = IterationField(count_field="line_count")
    rest: bytes | None = DataField(REMAINDER)

    telegram_max_bytes: ClassVar[int | None] = 100
'''


@pytest.fixture
def telegram_file(tmp_path: Path) -> Path:
    path = tmp_path / "telegrams.py"
    path.write_text(TELEGRAMS)
    return path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "telegramcodec.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "telegramcodec: Fixed-Layout Telegram Codec" in result.stdout
    assert "--analyze" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "telegramcodec.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "telegramcodec 0.1.0" in result.stdout


def test_cli_analyze(telegram_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test --analyze prints every telegram layout."""
    assert main(["--analyze", str(telegram_file)]) == 0

    out = capsys.readouterr().out
    assert "telegramcodec: Fixed-Layout Telegram Codec" in out
    assert "2 telegrams loaded." in out
    assert "Record size: 6 bytes" in out
    assert "Record size: variable" in out
    assert "Allowed maximum size: 100 bytes" in out
    assert "length from" not in out
    assert "line_count x Line" in out
    assert "rest of stream" in out


def test_cli_analyze_offsets(telegram_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test offsets stop being known after a dynamic field."""
    main(["--analyze", str(telegram_file)])

    out = capsys.readouterr().out
    assert "@0 line_count" in out
    assert "@2 first" in out
    assert "@8 lines" in out
    assert "@? rest" in out


def test_cli_analyze_example_file() -> None:
    """Test CLI --analyze with a real example file."""
    example_file = Path("examples/basic_usage.py")
    if not example_file.exists():
        pytest.skip("Example file not found")

    result = subprocess.run(
        [sys.executable, "-m", "telegramcodec.cli.main", "--analyze", str(example_file)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "telegrams loaded" in result.stdout
    assert "OrderTelegram" in result.stdout


def test_cli_analyze_invalid_layout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test --analyze reports layout errors."""
    path = tmp_path / "broken.py"
    path.write_text(
        "from telegramcodec import DataField, Telegram\n"
        "\n"
        "class Broken(Telegram):\n"
        "    body: str | None = DataField(length_field='size')\n"
        "    size: int | None = DataField(2)\n"
    )

    assert main(["--analyze", str(path)]) == 1
    assert "invalid telegram layout" in capsys.readouterr().err


def test_cli_analyze_no_telegrams(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test --analyze on a file without telegrams."""
    path = tmp_path / "empty.py"
    path.write_text("VALUE = 1\n")

    assert main(["--analyze", str(path)]) == 0
    assert "No Telegram classes found" in capsys.readouterr().out


def test_cli_analyze_missing_file() -> None:
    """Test CLI --analyze with missing file."""
    result = subprocess.run(
        [sys.executable, "-m", "telegramcodec.cli.main", "--analyze", "nonexistent.py"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 1
    assert "Error" in result.stderr or "not found" in result.stderr.lower()


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = subprocess.run(
        [sys.executable, "-m", "telegramcodec.cli.main"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "telegramcodec: Fixed-Layout Telegram Codec" in result.stdout
