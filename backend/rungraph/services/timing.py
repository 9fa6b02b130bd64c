"""Timestamp parsing shared by the step reconciler and the graph builder."""

import math
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp_ms(value: Any) -> float | None:
    """Parse a timestamp into epoch milliseconds.

    Accepts ``datetime`` objects, ISO-8601 strings (a trailing ``Z`` is
    allowed) and numbers, which are taken as epoch milliseconds. Naive values
    are treated as UTC. Returns ``None`` for empty or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return float((parsed - _EPOCH) // timedelta(milliseconds=1))


def sort_timestamp_ms(*values: Any) -> float:
    """First truthy candidate parsed to epoch ms; 0 when absent or unparseable."""
    for value in values:
        if value:
            return parse_timestamp_ms(value) or 0.0
    return 0.0


def duration_between(started_at: Any, completed_at: Any) -> float | None:
    """Milliseconds between two timestamps, clamped at zero."""
    started = parse_timestamp_ms(started_at) if started_at else None
    finished = parse_timestamp_ms(completed_at) if completed_at else None
    if started is None or finished is None:
        return None
    elapsed = finished - started
    return max(0.0, elapsed) if math.isfinite(elapsed) else None
