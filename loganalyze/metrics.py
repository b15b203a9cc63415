"""Metrics aggregation — level/action/source counts, active users, error rate."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from loganalyze.models import LogEntry

# Matched exactly; "Error" or "err" are not counted.
ERROR_LEVELS = frozenset({"error", "ERROR"})


@dataclass
class Metrics:
    total: int = 0
    by_level: dict[str, int] = field(default_factory=dict)
    by_action: dict[str, int] = field(default_factory=dict)
    by_source: dict[str, int] = field(default_factory=dict)
    users: set[str] = field(default_factory=set)
    errors: int = 0

    @property
    def active_users(self) -> int:
        return len(self.users)

    @property
    def error_rate(self) -> float | None:
        """Percentage of error entries, or None when nothing was counted."""
        if self.total == 0:
            return None
        return self.errors / self.total * 100

    def to_dict(self) -> dict:
        rate = self.error_rate
        return {
            "total": self.total,
            "active_users": self.active_users,
            "errors": self.errors,
            "error_rate": round(rate, 2) if rate is not None else None,
            "by_level": dict(sorted(self.by_level.items())),
            "by_action": dict(sorted(self.by_action.items())),
            "by_source": dict(sorted(self.by_source.items())),
        }


def analyze(entries: Iterable[LogEntry]) -> Metrics:
    """Fold an entry stream into Metrics in a single pass."""
    levels = Counter()
    actions = Counter()
    sources = Counter()
    users = set()
    total = 0
    errors = 0

    for entry in entries:
        total += 1
        if entry.level:
            levels[entry.level] += 1
        if entry.action:
            actions[entry.action] += 1
        if entry.source:
            sources[entry.source] += 1
        if entry.user_id:
            users.add(entry.user_id)
        if entry.level in ERROR_LEVELS:
            errors += 1

    return Metrics(
        total=total,
        by_level=dict(levels),
        by_action=dict(actions),
        by_source=dict(sources),
        users=users,
        errors=errors,
    )
