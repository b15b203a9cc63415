"""Map a decoded ndjson record onto LogEntry, tolerating common field-name variants."""

from datetime import datetime, timezone
from typing import Callable

from loganalyze.coerce import parse_timestamp, to_int64, to_string
from loganalyze.models import JsonValue, LogEntry, RawRecord

# Candidate keys per field, probed in order; the first key present wins.
TIMESTAMP_KEYS = ("timestamp", "time", "@timestamp", "ts")
LEVEL_KEYS = ("level", "lvl", "severity")
MESSAGE_KEYS = ("message", "msg", "log")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _copy_record(raw: RawRecord) -> RawRecord:
    """Deep-copy a decoded record without recursion, so nesting depth is unbounded."""
    root: RawRecord = {}
    stack = [(raw, root)]
    while stack:
        src, dst = stack.pop()
        items = src.items() if isinstance(src, dict) else enumerate(src)
        for key, value in items:
            if isinstance(value, dict):
                child = {}
                stack.append((value, child))
            elif isinstance(value, list):
                child = []
                stack.append((value, child))
            else:
                child = value
            if isinstance(dst, dict):
                dst[key] = child
            else:
                dst.append(child)
    return root


def _first_present(raw: RawRecord, keys: tuple[str, ...]) -> tuple[bool, JsonValue]:
    """Return (found, value) for the first key in *keys* that exists in *raw*."""
    for key in keys:
        if key in raw:
            return True, raw[key]
    return False, None


def normalize(raw: RawRecord, now: Callable[[], datetime] = _utc_now) -> LogEntry:
    """Build a LogEntry from one decoded record. Never raises.

    A present key ends the probe even if its value is unusable, so
    ``{"timestamp": "garbage", "ts": 1700000000}`` falls back to *now*.
    The whole record, extracted fields included, is kept as metadata.
    """
    found, value = _first_present(raw, TIMESTAMP_KEYS)
    timestamp = parse_timestamp(value) if found else None
    if timestamp is None:
        timestamp = now()

    _, level = _first_present(raw, LEVEL_KEYS)
    _, message = _first_present(raw, MESSAGE_KEYS)

    return LogEntry(
        timestamp=timestamp,
        level=to_string(level),
        source=to_string(raw.get("source")),
        user_id=to_string(raw.get("user_id")),
        action=to_string(raw.get("action")),
        duration_ms=to_int64(raw.get("duration_ms")),
        message=to_string(message),
        metadata=_copy_record(raw),
    )
