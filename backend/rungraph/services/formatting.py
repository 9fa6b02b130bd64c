"""Display formatting for durations and step payloads."""

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel

from rungraph.models.graph import SummaryRow

MAX_VALUE_LENGTH = 120


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_duration_ms(ms: Any) -> str:
    """Format a millisecond duration as ``500ms``, ``1.5s`` or ``1m 1s``."""
    if isinstance(ms, bool) or not isinstance(ms, (int, float)):
        return "n/a"
    try:
        finite = math.isfinite(ms)
    except OverflowError:
        finite = False
    if not finite:
        return "n/a"
    if ms < 1000:
        return f"{_format_number(ms)}ms"
    if ms < 60000:
        seconds = (Decimal(ms) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{seconds}s"
    minutes = int(ms // 60000)
    seconds = int((ms % 60000) // 1000)
    return f"{minutes}m {seconds}s"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _describe_value(value: Any) -> str:
    if isinstance(value, BaseModel):
        value = value.model_dump()
    if isinstance(value, (list, tuple)):
        return _plural(len(value), "item")
    if isinstance(value, Mapping):
        return _plural(len(value), "field")
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    return str(value)


def summarize_object_for_ui(obj: Any, max_items: int = 6) -> list[SummaryRow]:
    """Summarize an object's fields as at most ``max_items`` display rows.

    Lists read as ``"3 items"``, nested mappings as ``"2 fields"``, scalars
    as text truncated to 120 characters. Anything that is not a mapping,
    list or model yields no rows.
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump()
    if isinstance(obj, Mapping):
        entries = [(str(key), value) for key, value in obj.items()]
    elif isinstance(obj, (list, tuple)):
        entries = [(str(index), value) for index, value in enumerate(obj)]
    else:
        return []

    rows: list[SummaryRow] = []
    for key, value in entries[: max(0, max_items)]:
        label = _describe_value(value)
        if len(label) > MAX_VALUE_LENGTH:
            label = f"{label[: MAX_VALUE_LENGTH - 3]}..."
        rows.append(SummaryRow(key=key, value=label))
    return rows
