"""Request/response bodies for the graph API."""

from typing import Any

from pydantic import BaseModel
from pydantic import Field as PydanticField

from rungraph.models.graph import GraphNode, Position


class DefinitionGraphRequest(BaseModel):
    """Request to render a workflow template without run state."""

    definition: list[Any] | dict[str, Any] | None = None


class RunGraphRequest(BaseModel):
    """Request to render every step record of a run."""

    steps: list[Any] = []


class LiveRunGraphRequest(BaseModel):
    """Request to merge a workflow template with a run's current steps."""

    definition: list[Any] | dict[str, Any] | None = None
    steps: list[Any] = []


class LayoutRequest(BaseModel):
    """Request to lay out graph nodes for a given canvas width."""

    nodes: list[GraphNode] = []
    canvas_width: int = PydanticField(default=1280, alias="canvasWidth")

    model_config = {"populate_by_name": True}


class LayoutResponse(BaseModel):
    """Graph node id to position."""

    positions: dict[str, Position]


class SummaryRequest(BaseModel):
    """Request to summarize a step payload for display."""

    payload: Any = None
    max_items: int = PydanticField(default=6, alias="maxItems", ge=0)

    model_config = {"populate_by_name": True}
