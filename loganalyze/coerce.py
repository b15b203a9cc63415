"""Total coercions from decoded JSON values to strings, ints and timestamps.

None of these functions raise: a value of the wrong type degrades to a
default ("" / 0 / None) and the caller decides what to do with it.
"""

import json
import re
from datetime import datetime, timedelta, timezone

from loganalyze.models import JsonValue

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Epoch values strictly above this are milliseconds, everything else seconds.
MILLIS_THRESHOLD = 1e12

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# (strptime format, naive) in the order they are tried. Naive layouts carry no
# offset and are read as UTC.
TIMESTAMP_LAYOUTS = (
    ("%Y-%m-%dT%H:%M:%SZ", True),       # RFC 3339: 2025-02-15T10:01:00Z
    ("%Y-%m-%dT%H:%M:%S.%f%z", False),  # RFC 3339 with fractional seconds
    ("%Y-%m-%d %H:%M:%S", True),        # 2025-02-15 10:01:00
    ("%Y-%m-%dT%H:%M:%S%z", False),     # RFC 3339 with explicit offset: +08:00
)

# Field widths, an uppercase T/Z and a colon in the offset are required up
# front; strptime alone would accept "2025-2-5T1:1:1Z" or "+0800".
_TIMESTAMP_SHAPE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})"
    r"| \d{2}:\d{2}:\d{2})",
    re.ASCII,
)

# datetime stops at microseconds; nanosecond fractions are truncated.
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def to_string(value: JsonValue) -> str:
    """Render any decoded JSON value as text. None becomes ""."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        except RecursionError:
            # nested deeper than the encoder can follow
            return ""
    return str(value)


def to_int64(value: JsonValue) -> int:
    """Truncate a JSON number to a signed 64-bit int; anything else is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        n = int(value)
    except (OverflowError, ValueError):
        # inf / nan
        return 0
    return max(INT64_MIN, min(INT64_MAX, n))


def _parse_text_timestamp(text: str) -> datetime | None:
    if not _TIMESTAMP_SHAPE_RE.fullmatch(text):
        return None
    text = _LONG_FRACTION_RE.sub(r"\1", text)
    for layout, naive in TIMESTAMP_LAYOUTS:
        try:
            parsed = datetime.strptime(text, layout)
        except ValueError:
            continue
        if naive:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def _parse_epoch(value: int | float) -> datetime | None:
    try:
        units = int(value)
        if value > MILLIS_THRESHOLD:
            return _EPOCH + timedelta(milliseconds=units)
        return _EPOCH + timedelta(seconds=units)
    except (OverflowError, ValueError):
        return None


def parse_timestamp(value: JsonValue) -> datetime | None:
    """Parse a timestamp string or Unix epoch number.

    Strings are tried against TIMESTAMP_LAYOUTS in order and the first match
    wins. Numbers above MILLIS_THRESHOLD are epoch milliseconds, otherwise
    epoch seconds. Returns None when nothing matches; the caller is expected
    to substitute its own fallback time.
    """
    if isinstance(value, str):
        return _parse_text_timestamp(value)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _parse_epoch(value)
    return None
