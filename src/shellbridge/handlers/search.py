"""Finding files and fetching them from the network."""

from __future__ import annotations

import os
import tempfile
from typing import Optional
from urllib.parse import urlparse

import requests
from loguru import logger

from ..errors import CommandFailedError, InvalidArgumentError, MissingArgumentError, TooManyArgumentsError
from ..executor import ExecutionResult, cmd_argv
from ..paths import tokenize
from .base import HandlerContext, SpecialResult

_WINDOWS_NOT_FOUND = "File Not Found"
DOWNLOAD_TIMEOUT_S = 60
_CHUNK_SIZE = 64 * 1024


def _pattern(raw: str, command: str) -> str:
    pattern = raw.strip().replace('"', "")
    if not pattern:
        raise MissingArgumentError(f"{command} requires a search pattern")
    return pattern


def _search_result(result: ExecutionResult, nothing_found: str, failure: str) -> SpecialResult:
    if not result.output.strip() or _WINDOWS_NOT_FOUND in result.output:
        logger.info("search.empty exit_code={}", result.exit_code)
        return SpecialResult(nothing_found, classify=False)
    if not result.ok:
        raise CommandFailedError(failure, result.output)
    return SpecialResult(result.output)


# --- find ---

def find_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    pattern = _pattern(raw, "find")
    result = ctx.run(["find", ".", "-name", f"*{pattern}*"])
    return _search_result(result, f"No files matching '{pattern}' found in {ctx.cwd}", "find failed")


def find_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    pattern = _pattern(raw, "find")
    result = ctx.run(cmd_argv("dir", "/s/b", f"*{pattern}*"))
    return _search_result(result, f"No files matching '{pattern}' found in {ctx.cwd}", "find failed")


# --- locate ---

def locate_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    pattern = _pattern(raw, "locate")
    result = ctx.run(["locate", pattern])
    return _search_result(result, f"No files matching '{pattern}' found", "locate failed")


def locate_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    # No index database on Windows: walk the tree and filter case-insensitively
    pattern = _pattern(raw, "locate")
    result = ctx.run(cmd_argv("dir", "/s/b", "*", "|", "findstr", "/i", pattern))
    return _search_result(result, f"No files matching '{pattern}' found", "locate failed")


# --- wget ---

def download_name(url: str) -> str:
    """The file name a download of ``url`` is saved under."""
    name = urlparse(url).path.rsplit("/", 1)[-1]
    return name or "index.html"


def parse_download_arguments(raw: str) -> tuple[str, Optional[str]]:
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError("wget requires a URL argument")
    if len(tokens) > 2:
        raise TooManyArgumentsError("wget takes a URL and an optional output file")

    url = tokens[0]
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidArgumentError(f"Not an http(s) URL: {url}")
    return url, tokens[1] if len(tokens) > 1 else None


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning("wget.cleanup_failed path={} error={}", path, e)


def wget(ctx: HandlerContext, raw: str) -> SpecialResult:
    url, output = parse_download_arguments(raw)
    target = ctx.resolve(output or download_name(url))
    logger.debug("wget.start url={} target={}", url, target)

    # The body lands in a sibling temp file; target is only replaced once complete
    partial = None
    try:
        with requests.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT_S) as response:
            response.raise_for_status()
            with tempfile.NamedTemporaryFile(dir=os.path.dirname(target), prefix=".wget-", delete=False) as fh:
                partial = fh.name
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    fh.write(chunk)
        os.replace(partial, target)
        partial = None
    except requests.exceptions.HTTPError as e:
        raise CommandFailedError(f"Download failed: {e}")
    except requests.exceptions.ConnectionError:
        raise CommandFailedError(f"Download failed: cannot connect to {urlparse(url).netloc}")
    except requests.exceptions.Timeout:
        raise CommandFailedError(f"Download failed: request timeout after {DOWNLOAD_TIMEOUT_S}s")
    except requests.exceptions.RequestException as e:
        raise CommandFailedError(f"Download failed: {e}")
    except OSError as e:
        raise CommandFailedError(f"Download failed: cannot write {target}: {e.strerror or e}")
    finally:
        if partial is not None:
            _discard(partial)

    return SpecialResult(f"Downloaded: {url} → {os.path.basename(target)}", classify=False)
