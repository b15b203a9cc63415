"""Line-delimited JSON reader — one object per line, malformed lines skipped."""

import json
import logging
import os
from typing import IO, Iterable, Iterator

from loganalyze.errors import LogOpenError, LogReadError
from loganalyze.models import LineDiagnostic, ParseResult
from loganalyze.normalizer import normalize

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    # json.loads accepts NaN/Infinity by default; ndjson producers never emit them.
    raise ValueError(f"invalid JSON constant {name!r}")


def _iter_lines(stream: Iterable[str] | Iterable[bytes]) -> Iterator[str]:
    """Yield lines without their terminator. Bytes are decoded as UTF-8."""
    for line in stream:
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        yield line


def decode_line(line: str) -> dict:
    """Decode one line into a dict. Raises ValueError if it is not a JSON object."""
    data = json.loads(line, parse_constant=_reject_constant)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def parse_stream(stream: IO[str] | Iterable[str] | Iterable[bytes]) -> ParseResult:
    """Normalize every JSON-object line of *stream*, in order.

    Zero-length lines are skipped silently. Lines that fail to decode are
    recorded as diagnostics and skipped. An I/O failure while iterating
    *stream* raises LogReadError and discards everything read so far.
    """
    result = ParseResult()
    try:
        for line_number, line in enumerate(_iter_lines(stream), start=1):
            if not line:
                continue
            try:
                raw = decode_line(line)
            except (ValueError, RecursionError) as exc:
                diagnostic = LineDiagnostic(line_number=line_number, line=line, error=str(exc))
                logger.warning("Skipping malformed %s", diagnostic)
                result.diagnostics.append(diagnostic)
                continue
            result.entries.append(normalize(raw))
    except (OSError, UnicodeDecodeError) as exc:
        raise LogReadError(f"read error: {exc}") from exc

    logger.debug(
        "Parsed %d entries, skipped %d lines", len(result.entries), len(result.diagnostics)
    )
    return result


def parse_file(path: str | os.PathLike, encoding: str = "utf-8") -> ParseResult:
    """Open *path* and run parse_stream over it. The file is always closed."""
    try:
        # newline="\n": split on LF only; a trailing CR is stripped per line.
        f = open(path, "r", encoding=encoding, errors="replace", newline="\n")
    except (OSError, LookupError) as exc:
        raise LogOpenError(f"open file: {exc}") from exc

    logger.info("Reading %s", path)
    with f:
        return parse_stream(f)
