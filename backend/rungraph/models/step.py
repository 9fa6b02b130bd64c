"""Pydantic models for execution step records."""

from typing import Any

from pydantic import BaseModel

TERMINAL_STATUSES = frozenset({"succeeded", "failed", "skipped", "cancelled"})
IN_FLIGHT_STATUSES = frozenset({"running", "waiting"})


class Step(BaseModel):
    """One observed attempt of a node during a run.

    Timestamps are kept as received and parsed on demand, so a record with an
    unparseable timestamp still coerces.
    """

    id: str | None = None
    node_id: str | None = None
    node_type: str = ""
    status: str | None = None
    attempt: int = 0
    started_at: Any = None
    completed_at: Any = None
    created_at: Any = None
    input: dict[str, Any] | None = None
    raw: Any = None

    @property
    def input_node(self) -> dict[str, Any]:
        """The node snapshot captured in the step input, if any."""
        node = (self.input or {}).get("node")
        return node if isinstance(node, dict) else {}


def is_terminal_status(status: str | None) -> bool:
    return str(status or "").lower() in TERMINAL_STATUSES


def is_in_flight_status(status: str | None) -> bool:
    return str(status or "").lower() in IN_FLIGHT_STATUSES
