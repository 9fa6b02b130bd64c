"""Pydantic models for the workflow run graph service."""

from rungraph.models.api import (
    DefinitionGraphRequest,
    LayoutRequest,
    LayoutResponse,
    LiveRunGraphRequest,
    RunGraphRequest,
    SummaryRequest,
)
from rungraph.models.definition import (
    DefinitionEdge,
    DefinitionNode,
    NormalizedDefinition,
    WorkflowDefinition,
)
from rungraph.models.graph import (
    GraphEdge,
    GraphNode,
    LiveRunGraph,
    NodeClassification,
    NodeKind,
    Position,
    SummaryRow,
    WorkflowGraph,
)
from rungraph.models.step import Step, is_in_flight_status, is_terminal_status

__all__ = [
    # Definitions
    "WorkflowDefinition",
    "DefinitionNode",
    "DefinitionEdge",
    "NormalizedDefinition",
    # Steps
    "Step",
    "is_terminal_status",
    "is_in_flight_status",
    # Graphs
    "NodeKind",
    "NodeClassification",
    "Position",
    "GraphNode",
    "GraphEdge",
    "WorkflowGraph",
    "LiveRunGraph",
    "SummaryRow",
    # API bodies
    "DefinitionGraphRequest",
    "RunGraphRequest",
    "LiveRunGraphRequest",
    "LayoutRequest",
    "LayoutResponse",
    "SummaryRequest",
]
