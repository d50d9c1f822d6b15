"""Tests for wget, with requests mocked out."""

from unittest.mock import MagicMock, patch

import pytest
import requests as requests_module

from shellbridge.errors import CommandFailedError, InvalidArgumentError, MissingArgumentError, TooManyArgumentsError
from shellbridge.handlers.search import download_name, parse_download_arguments, wget


def _response(chunks=(b"data",), status_error=None):
    response = MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.iter_content.return_value = list(chunks)
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


class TestDownloadName:
    """Tests for download_name()."""

    def test_last_segment(self):
        assert download_name("https://example.com/files/report.pdf") == "report.pdf"

    def test_query_ignored(self):
        assert download_name("https://example.com/a/b.tar.gz?x=1") == "b.tar.gz"

    def test_empty_path(self):
        assert download_name("https://example.com/") == "index.html"
        assert download_name("https://example.com") == "index.html"


class TestParseDownloadArguments:
    """Tests for parse_download_arguments()."""

    def test_url_only(self):
        assert parse_download_arguments("https://example.com/x") == ("https://example.com/x", None)

    def test_output_name(self):
        assert parse_download_arguments("http://example.com/x out.bin") == ("http://example.com/x", "out.bin")

    def test_missing(self):
        with pytest.raises(MissingArgumentError):
            parse_download_arguments("")

    def test_too_many(self):
        with pytest.raises(TooManyArgumentsError):
            parse_download_arguments("http://a.com/x b c")

    @pytest.mark.parametrize("url", ["ftp://example.com/x", "example.com/x", "file:///etc/passwd"])
    def test_only_http(self, url):
        with pytest.raises(InvalidArgumentError):
            parse_download_arguments(url)


class TestWget:
    """Tests for the wget handler."""

    def test_writes_into_working_directory(self, posix_ctx, workdir, executor):
        with patch("shellbridge.handlers.search.requests.get", return_value=_response((b"ab", b"cd"))) as get:
            result = wget(posix_ctx, "https://example.com/pkg/file.zip")

        assert (workdir / "file.zip").read_bytes() == b"abcd"
        assert result.message == "Downloaded: https://example.com/pkg/file.zip → file.zip"
        assert get.call_args.kwargs["stream"] is True
        assert executor.spawn_count == 0

    def test_explicit_output(self, posix_ctx, workdir):
        with patch("shellbridge.handlers.search.requests.get", return_value=_response()):
            wget(posix_ctx, "https://example.com/ saved.html")
        assert (workdir / "saved.html").read_bytes() == b"data"

    def test_http_error(self, posix_ctx):
        error = requests_module.exceptions.HTTPError("404 Client Error: Not Found")
        with patch("shellbridge.handlers.search.requests.get", return_value=_response(status_error=error)):
            with pytest.raises(CommandFailedError, match="Download failed: 404"):
                wget(posix_ctx, "https://example.com/missing")

    def test_connection_error(self, posix_ctx):
        with patch(
            "shellbridge.handlers.search.requests.get",
            side_effect=requests_module.exceptions.ConnectionError("refused"),
        ):
            with pytest.raises(CommandFailedError, match="cannot connect to example.com"):
                wget(posix_ctx, "https://example.com/x")

    def test_timeout(self, posix_ctx):
        with patch(
            "shellbridge.handlers.search.requests.get",
            side_effect=requests_module.exceptions.Timeout(),
        ):
            with pytest.raises(CommandFailedError, match="timeout"):
                wget(posix_ctx, "https://example.com/x")

    def test_interrupted_stream_keeps_existing_file(self, posix_ctx, workdir):
        """Test a broken transfer leaves the old file intact and no temp files behind."""
        (workdir / "report.pdf").write_bytes(b"IMPORTANT ORIGINAL CONTENT")

        def broken_stream(chunk_size):
            yield b"partial"
            raise requests_module.exceptions.ChunkedEncodingError("connection broken")

        response = _response()
        response.iter_content.side_effect = broken_stream
        with patch("shellbridge.handlers.search.requests.get", return_value=response):
            with pytest.raises(CommandFailedError, match="Download failed"):
                wget(posix_ctx, "https://example.com/report.pdf")

        assert (workdir / "report.pdf").read_bytes() == b"IMPORTANT ORIGINAL CONTENT"
        assert sorted(p.name for p in workdir.iterdir()) == ["report.pdf"]

    def test_replaces_existing_file_when_complete(self, posix_ctx, workdir):
        (workdir / "report.pdf").write_bytes(b"old")
        with patch("shellbridge.handlers.search.requests.get", return_value=_response((b"new",))):
            wget(posix_ctx, "https://example.com/report.pdf")
        assert (workdir / "report.pdf").read_bytes() == b"new"
        assert sorted(p.name for p in workdir.iterdir()) == ["report.pdf"]

    def test_unwritable_target(self, posix_ctx):
        with patch("shellbridge.handlers.search.requests.get", return_value=_response()):
            with pytest.raises(CommandFailedError, match="cannot write"):
                wget(posix_ctx, "https://example.com/x missing-dir/out.bin")
