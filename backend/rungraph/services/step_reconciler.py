"""Step reconciliation: one authoritative execution record per node.

A run can report several records for the same node (retries, re-polls of a
step that is still running). The reconciler folds the step list left to
right and keeps, per ``node_id``:

1. the record with the highest ``attempt``;
2. on equal attempts, the record whose timestamp (``started_at``, falling
   back to ``completed_at``) is greater than or equal to the current holder's.

Because ties keep the later record in input order, two records with equal
attempt and equal timestamp resolve to whichever comes last.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rungraph.models.step import Step, is_in_flight_status
from rungraph.services.classifier import normalize_node_type
from rungraph.services.schema_normalizer import as_mapping, string_keyed
from rungraph.services.timing import sort_timestamp_ms


def _optional_id(value: Any) -> str | None:
    text = str(value or "").strip()
    return text or None


def _attempt(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(float(value or 0))
    except (TypeError, ValueError, OverflowError):
        return 0


def _status(step: Mapping[str, Any]) -> str | None:
    """Reported status; older executors used ``step_status`` or ``state``."""
    for key in ("status", "step_status", "state"):
        value = step.get(key)
        if isinstance(value, str):
            return value
    return None


def coerce_step(raw: Any) -> Step:
    """Build a Step from a raw execution record."""
    if isinstance(raw, Step):
        return raw
    step = as_mapping(raw)
    return Step(
        id=_optional_id(step.get("id")),
        node_id=_optional_id(step.get("node_id")),
        node_type=normalize_node_type(step.get("node_type")),
        status=_status(step),
        attempt=_attempt(step.get("attempt")),
        started_at=step.get("started_at"),
        completed_at=step.get("completed_at"),
        created_at=step.get("created_at"),
        input=string_keyed(step.get("input")),
        raw=raw,
    )


def coerce_steps(steps: Any) -> list[Step]:
    """Coerce a raw step list; anything that is not a list yields ``[]``."""
    if not isinstance(steps, (list, tuple)):
        return []
    return [coerce_step(step) for step in steps]


def step_timestamp_ms(step: Step) -> float:
    """Ordering timestamp: ``started_at``, else ``completed_at``, else 0."""
    return sort_timestamp_ms(step.started_at, step.completed_at)


@dataclass
class ResolvedSteps:
    """Authoritative step per node id, plus a first-seen index per node type."""

    by_node_id: dict[str, Step] = field(default_factory=dict)
    by_node_type: dict[str, Step] = field(default_factory=dict)

    def lookup(self, node_id: str, node_type: str = "") -> Step | None:
        """Step for a definition node: by id first, then by declared type.

        A type match stands for its whole ``node_id``, so the authoritative
        record of that id is returned rather than the first one seen.
        """
        step = self.by_node_id.get(node_id)
        if step is None and node_type:
            step = self.by_node_type.get(node_type)
            if step is not None and step.node_id:
                step = self.by_node_id.get(step.node_id, step)
        return step


def _supersedes(candidate: Step, current: Step) -> bool:
    if candidate.attempt != current.attempt:
        return candidate.attempt > current.attempt
    return step_timestamp_ms(candidate) >= step_timestamp_ms(current)


def resolve_latest(steps: list[Any] | None) -> ResolvedSteps:
    """Resolve the authoritative step per node id.

    Steps without a ``node_id`` are skipped for the primary map but still
    considered for the ``node_type`` index (first occurrence wins).
    """
    resolved = ResolvedSteps()
    for step in coerce_steps(steps):
        if step.node_id:
            current = resolved.by_node_id.get(step.node_id)
            if current is None or _supersedes(step, current):
                resolved.by_node_id[step.node_id] = step
        if step.node_type and step.node_type not in resolved.by_node_type:
            resolved.by_node_type[step.node_type] = step
    return resolved


def detect_current_step_id(steps: Any) -> str | None:
    """Id of the step the UI should focus.

    The first running or waiting step, else the most recently started (or
    created) step.
    """
    records = coerce_steps(steps)
    running = next((s for s in records if is_in_flight_status(s.status)), None)
    if running is not None and running.id:
        return running.id
    if not records:
        return None
    latest = sorted(
        records,
        key=lambda s: sort_timestamp_ms(s.started_at, s.created_at),
        reverse=True,
    )[0]
    return latest.id
