"""Pydantic models for workflow definitions (the template graph)."""

from typing import Any, Literal

from pydantic import BaseModel
from pydantic import Field as PydanticField


class DefinitionNode(BaseModel):
    """One template step after normalization.

    ``id`` is always populated: nodes without an id receive the positional
    fallback ``step_<n>`` (1-based).
    """

    id: str
    node_type: str = ""
    title: str | None = None
    name: str | None = None
    output: str | None = None
    assignee: dict[str, Any] | None = None
    raw: Any = None


class DefinitionEdge(BaseModel):
    """A declared v2 connection between two definition node ids.

    ``ordinal`` is the 1-based position in the raw edge list and feeds the
    fallback edge id, so it counts entries that are later dropped.
    """

    id: str | None = None
    from_node_id: str = PydanticField(default="", alias="from")
    to_node_id: str = PydanticField(default="", alias="to")
    ordinal: int = 1

    model_config = {"populate_by_name": True}

    @property
    def fallback_id(self) -> str:
        return f"{self.from_node_id}_{self.to_node_id}_{self.ordinal}"


class NormalizedDefinition(BaseModel):
    """Uniform view over v1 (bare node list) and v2 (nodes + edges) definitions."""

    schema_version: Literal[1, 2] = 1
    nodes: list[DefinitionNode] = []
    edges: list[DefinitionEdge] = []


class WorkflowDefinition(BaseModel):
    """A v2 workflow definition as posted by clients.

    Node and edge entries stay loosely typed; they are coerced by the schema
    normalizer, which never rejects malformed entries.
    """

    schema_version: int | str | None = None
    nodes: list[Any] = []
    edges: list[Any] = []

    model_config = {"extra": "allow"}
