"""Tests for output line classification."""

from shellbridge.classifier import ClassifiedLine, LineCategory, classify, classify_line


class TestClassifyLine:
    """Tests for classify_line()."""

    def test_total_line_is_output(self):
        assert classify_line("total 48") is LineCategory.OUTPUT

    def test_leading_digit_is_output(self):
        """Test numeric rows are plain output even when they mention errors."""
        assert classify_line("3 errors found") is LineCategory.OUTPUT

    def test_unix_listing_is_output(self):
        assert classify_line("drwxr-xr-x 2 me me 4096 Jan 1 00:00 src") is LineCategory.OUTPUT

    def test_windows_listing_is_output(self):
        assert classify_line("01/02/2024  10:15 PM    <DIR>   src") is LineCategory.OUTPUT

    def test_error_words(self):
        """Test 'error' and 'fail' anywhere, any case."""
        assert classify_line("cp: Error reading file") is LineCategory.ERROR
        assert classify_line("Operation FAILED") is LineCategory.ERROR

    def test_drive_path_is_directory(self):
        assert classify_line("C:\\Users\\me\\docs") is LineCategory.DIRECTORY
        assert classify_line("d:/data") is LineCategory.DIRECTORY

    def test_error_wins_over_drive_path(self):
        assert classify_line("C:\\logs\\error.txt") is LineCategory.ERROR

    def test_default_is_output(self):
        assert classify_line("hello world") is LineCategory.OUTPUT


class TestClassify:
    """Tests for classify()."""

    def test_blank_lines_skipped(self):
        """Test every non-blank line yields exactly one entry, in order."""
        lines = classify("first\n\n   \nsecond failed\n")
        assert lines == [
            ClassifiedLine("first", LineCategory.OUTPUT),
            ClassifiedLine("second failed", LineCategory.ERROR),
        ]

    def test_crlf_output(self):
        lines = classify("a\r\nb\r\n")
        assert [line.text for line in lines] == ["a", "b"]

    def test_empty(self):
        assert classify("") == []
