"""Pydantic models for rendered graphs (nodes, edges, layout)."""

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import Field as PydanticField


class NodeKind(str, Enum):
    """Semantic category a workflow node is classified into."""

    TRIGGER = "trigger"
    MANUAL = "manual"
    HUMAN = "human"
    AI = "ai"
    SYSTEM = "system"
    CONDITION = "condition"
    TRANSFORM = "transform"
    NOTIFICATION = "notification"
    UNKNOWN = "unknown"


class Position(BaseModel):
    """Advisory canvas coordinates for a node."""

    x: int
    y: int


class NodeClassification(BaseModel):
    """Kind, display label and execution description for a node type."""

    kind: NodeKind
    label: str
    description: str


class GraphNode(BaseModel):
    """A node in a rendered workflow graph.

    Rebuilt from scratch on every graph build; ``raw`` holds references to the
    definition node and/or step the node was derived from.
    """

    id: str
    index: int
    node_id: str = PydanticField(alias="nodeId")
    node_type: str = PydanticField(alias="nodeType")
    label: str
    kind: NodeKind
    output_key: str | None = PydanticField(default=None, alias="outputKey")
    assignee: dict[str, Any] | None = None
    status: str | None = None
    duration_ms: float | None = PydanticField(default=None, alias="durationMs")
    position: Position
    raw: Any = None

    model_config = {"populate_by_name": True}


class GraphEdge(BaseModel):
    """A directed edge between two graph node ids.

    ``active`` is ``None`` for template-only graphs, which carry no runtime
    state.
    """

    id: str
    from_id: str = PydanticField(alias="from")
    to_id: str = PydanticField(alias="to")
    active: bool | None = None

    model_config = {"populate_by_name": True}


class WorkflowGraph(BaseModel):
    """Nodes and edges ready for rendering."""

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []


class LiveRunGraph(WorkflowGraph):
    """A live run graph plus the step the UI should focus."""

    current_step_id: str | None = PydanticField(default=None, alias="currentStepId")

    model_config = {"populate_by_name": True}


class SummaryRow(BaseModel):
    """One key/value row describing a payload field for display."""

    key: str
    value: str
