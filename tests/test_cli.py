"""
Tests for symsub - Command-Line Interface
=========================================

These tests run the click command through CliRunner in an isolated
filesystem and check output files and exit codes.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from symsub import __version__
from symsub.cli.errors import ExitCode
from symsub.cli.symsub import main


@pytest.fixture
def runner(monkeypatch):
    for name in ("SYMSUB_INITIAL_CAPACITY", "SYMSUB_MAX_CAPACITY",
                 "SYMSUB_ENCODING", "SYMSUB_ON_OVERFLOW"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


class TestBasicUsage:
    """Successful runs."""

    def test_writes_next_ordinal(self, runner):
        with runner.isolated_filesystem():
            Path("toolchain3.sh").write_bytes(b"export CC=gcc\n")
            result = runner.invoke(main, ["toolchain3.sh", "gcc", "clang"])

            assert result.exit_code == 0, result.output
            assert Path("toolchain4.sh").read_bytes() == b"export CC=clang\n"
            # Input untouched
            assert Path("toolchain3.sh").read_bytes() == b"export CC=gcc\n"

    def test_explicit_output(self, runner):
        with runner.isolated_filesystem():
            Path("notes.txt").write_text("red green red")
            result = runner.invoke(main, ["notes.txt", "red", "blue", "-o", "out.txt"])

            assert result.exit_code == 0, result.output
            assert Path("out.txt").read_text() == "blue green blue"

    def test_stdout(self, runner):
        with runner.isolated_filesystem():
            Path("notes.txt").write_text("red green red")
            result = runner.invoke(main, ["notes.txt", "green", "gray", "--stdout"])

            assert result.exit_code == 0
            assert "red gray red" in result.output
            assert not Path("notes2.txt").exists()

    def test_stdout_keeps_high_bytes(self, runner):
        """Bytes above 0x7F are printed exactly as they were read."""
        with runner.isolated_filesystem():
            Path("in1.txt").write_bytes(b"caf\xe9 gcc\n")
            result = runner.invoke(main, ["in1.txt", "gcc", "cc", "--stdout"])

            assert result.exit_code == 0
            assert result.stdout_bytes == b"caf\xe9 cc\n"

    def test_verbose(self, runner):
        with runner.isolated_filesystem():
            Path("a1.txt").write_text("x y x")
            result = runner.invoke(main, ["-v", "a1.txt", "x", "z"])

            assert result.exit_code == 0
            assert "Wrote a2.txt" in result.output
            assert "replaced: 2" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestBufferOptions:
    """Capacity and overflow options."""

    def test_small_initial_capacity(self, runner):
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("supercalifragilistic word")
            result = runner.invoke(
                main, ["w1.txt", "word", "term", "--initial-capacity", "2"]
            )

            assert result.exit_code == 0, result.output
            assert Path("w2.txt").read_text() == "supercalifragilistic term"

    def test_overflow_abort(self, runner):
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("supercalifragilistic word")
            result = runner.invoke(
                main,
                ["w1.txt", "word", "term", "--initial-capacity", "4", "--max-capacity", "8"],
            )

            assert result.exit_code == ExitCode.PROCESSING_ERROR
            assert "cannot grow" in result.output

    def test_overflow_split(self, runner):
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("supercalifragilistic word")
            result = runner.invoke(
                main,
                [
                    "w1.txt", "word", "term",
                    "--initial-capacity", "4", "--max-capacity", "8",
                    "--on-overflow", "split",
                ],
            )

            assert result.exit_code == 0, result.output
            assert Path("w2.txt").read_text() == "supercalifragilistic term"

    def test_environment_config(self, runner, monkeypatch):
        monkeypatch.setenv("SYMSUB_INITIAL_CAPACITY", "4")
        monkeypatch.setenv("SYMSUB_MAX_CAPACITY", "4")
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("longword")
            result = runner.invoke(main, ["w1.txt", "a", "b"])

            assert result.exit_code == ExitCode.PROCESSING_ERROR

    def test_invalid_capacity_combination(self, runner):
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("x")
            result = runner.invoke(
                main,
                ["w1.txt", "x", "y", "--initial-capacity", "64", "--max-capacity", "8"],
            )

            assert result.exit_code == ExitCode.PROCESSING_ERROR
            assert "max capacity" in result.output

    def test_ceiling_alone_caps_initial_capacity(self, runner):
        """--max-capacity below the default initial capacity works on its own."""
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("short words only")
            result = runner.invoke(main, ["w1.txt", "only", "just", "--max-capacity", "64"])

            assert result.exit_code == 0, result.output
            assert Path("w2.txt").read_text() == "short words just"

    def test_ceiling_alone_still_enforced(self, runner):
        with runner.isolated_filesystem():
            Path("w1.txt").write_text("x" * 100)
            result = runner.invoke(main, ["w1.txt", "a", "b", "--max-capacity", "64"])

            assert result.exit_code == ExitCode.PROCESSING_ERROR
            assert "cannot grow past 64" in result.output


class TestErrors:
    """Argument and input errors."""

    def test_missing_arguments(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 2

    def test_missing_input_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nope1.txt", "a", "b"])
            assert result.exit_code == 2

    def test_multi_byte_encoding_rejected(self, runner, monkeypatch):
        monkeypatch.setenv("SYMSUB_ENCODING", "utf-8")
        with runner.isolated_filesystem():
            Path("in1.txt").write_bytes(b"gcc " * 3000 + b"\xff tail\n")
            result = runner.invoke(main, ["in1.txt", "gcc", "cc"])

            assert result.exit_code == ExitCode.PROCESSING_ERROR
            assert "does not map every byte" in result.output
            assert not Path("in2.txt").exists()

    def test_no_ordinal(self, runner):
        with runner.isolated_filesystem():
            Path("notes.txt").write_text("a")
            result = runner.invoke(main, ["notes.txt", "a", "b"])

            assert result.exit_code == ExitCode.INVALID_ARGS
            assert "could not parse out ordinal" in result.output

    def test_output_and_stdout_exclusive(self, runner):
        with runner.isolated_filesystem():
            Path("n1.txt").write_text("a")
            result = runner.invoke(main, ["n1.txt", "a", "b", "-o", "x.txt", "--stdout"])

            assert result.exit_code == 2
            assert "mutually exclusive" in result.output
