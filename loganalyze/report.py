"""Report rendering — fixed-order text summary and a JSON variant."""

import json
import sys
from typing import TextIO

from loganalyze.metrics import Metrics

TITLE = "========== Log Analysis Report =========="

# (section label, Metrics attribute), in render order.
SECTIONS = (
    ("By level", "by_level"),
    ("By action", "by_action"),
    ("By source", "by_source"),
)


def _format_counts(counts: dict[str, int]) -> list[str]:
    # sorted() on str compares code points, matching byte order for UTF-8.
    return [f"  {key}: {counts[key]}" for key in sorted(counts)]


def format_report(metrics: Metrics) -> str:
    """Human-readable report. Empty tables are left out entirely."""
    lines = [
        TITLE,
        f"Total entries: {metrics.total}",
        f"Active users: {metrics.active_users}",
        f"Errors: {metrics.errors}",
    ]
    rate = metrics.error_rate
    if rate is not None:
        lines.append(f"Error rate: {rate:.2f}%")

    for label, attr in SECTIONS:
        counts = getattr(metrics, attr)
        if not counts:
            continue
        lines.append("")
        lines.append(f"--- {label} ---")
        lines.extend(_format_counts(counts))

    return "\n".join(lines)


def format_report_json(metrics: Metrics) -> str:
    """JSON report output."""
    return json.dumps(metrics.to_dict(), indent=2, ensure_ascii=False)


def render_report(metrics: Metrics, sink: TextIO | None = None, output_format: str = "text") -> None:
    """Write the report to *sink* (stdout by default)."""
    if sink is None:
        sink = sys.stdout
    if output_format == "json":
        text = format_report_json(metrics)
    else:
        text = format_report(metrics)
    print(text, file=sink)
