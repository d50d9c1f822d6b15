"""Tests for in-process text handling: line counting, wc and head parsing."""

import pytest

from shellbridge.errors import InvalidArgumentError, MissingArgumentError, MissingFileError, TooManyArgumentsError
from shellbridge.handlers.text import TextCounts, count_lines, count_text, parse_head_arguments, wc


class TestCountLines:
    """Tests for count_lines()."""

    @pytest.mark.parametrize("content, expected", [
        ("", 0),
        ("a\nb\nc\n", 3),
        ("a\nb\nc", 3),
        ("\n\n", 2),
        ("single", 1),
        ("a\r\nb\r\n", 2),
        ("a\rb\rc", 3),
        ("mixed\r\nends\nhere\r", 3),
    ])
    def test_counts(self, content, expected):
        assert count_lines(content) == expected


class TestCountText:
    """Tests for count_text()."""

    def test_words_and_chars(self):
        assert count_text("hello  world\nbye\n") == TextCounts(lines=2, words=3, chars=17)

    def test_format(self):
        assert TextCounts(3, 4, 20).format("f.txt") == "      3       4      20 f.txt"


class TestWc:
    """Tests for the wc handler."""

    def test_single_file(self, posix_ctx, workdir):
        (workdir / "f.txt").write_text("a\nb\nc\n")
        result = wc(posix_ctx, "f.txt")
        assert result.message == "      3       3       6 f.txt\n"

    def test_totals_row(self, posix_ctx, workdir):
        (workdir / "one.txt").write_text("x y\n")
        (workdir / "two.txt").write_text("z\n")
        rows = wc(posix_ctx, "one.txt two.txt").message.splitlines()
        assert rows[-1] == TextCounts(2, 3, 6).format("total")
        assert len(rows) == 3

    def test_never_spawns(self, windows_ctx, workdir, executor):
        (workdir / "f.txt").write_text("a\n")
        wc(windows_ctx, "f.txt")
        assert executor.spawn_count == 0

    def test_missing_file(self, posix_ctx):
        with pytest.raises(MissingFileError):
            wc(posix_ctx, "nope.txt")

    def test_directory_is_not_a_file(self, posix_ctx, workdir):
        (workdir / "d").mkdir()
        with pytest.raises(MissingFileError):
            wc(posix_ctx, "d")

    def test_no_arguments(self, posix_ctx):
        with pytest.raises(MissingArgumentError):
            wc(posix_ctx, "")


class TestParseHeadArguments:
    """Tests for parse_head_arguments()."""

    def test_default_count(self):
        assert parse_head_arguments("f.txt") == (10, "f.txt")

    def test_explicit_count(self):
        assert parse_head_arguments("-n 25 f.txt") == (25, "f.txt")

    def test_zero_allowed(self):
        assert parse_head_arguments("-n 0 f.txt") == (0, "f.txt")

    @pytest.mark.parametrize("raw", ["-n abc f.txt", "-n -3 f.txt", "-n"])
    def test_invalid_count(self, raw):
        with pytest.raises(InvalidArgumentError):
            parse_head_arguments(raw)

    def test_missing_file(self):
        with pytest.raises(MissingArgumentError):
            parse_head_arguments("-n 5")

    def test_too_many_files(self):
        with pytest.raises(TooManyArgumentsError):
            parse_head_arguments("a.txt b.txt")
