"""Canonical log entry dataclass — every ndjson record normalizes to this shape."""

from dataclasses import dataclass, field
from datetime import datetime

# One decoded JSON value. json.loads only ever produces these types.
JsonValue = str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]

# One decoded ndjson line.
RawRecord = dict[str, JsonValue]


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    level: str = ""
    source: str = ""
    user_id: str = ""
    action: str = ""
    duration_ms: int = 0
    message: str = ""
    metadata: RawRecord = field(default_factory=dict)


@dataclass(frozen=True)
class LineDiagnostic:
    """A line that was skipped because it did not decode to a JSON object."""

    line_number: int
    line: str
    error: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.error}: {self.line!r}"


@dataclass
class ParseResult:
    entries: list[LogEntry] = field(default_factory=list)
    diagnostics: list[LineDiagnostic] = field(default_factory=list)
