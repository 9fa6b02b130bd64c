"""Graph API routes.

Stateless wrappers over the graph builder: the polling UI posts the
definition it fetched once and the step list it re-fetches each tick.
"""

import logging

from fastapi import APIRouter

from rungraph.models import (
    DefinitionGraphRequest,
    LayoutRequest,
    LayoutResponse,
    LiveRunGraph,
    LiveRunGraphRequest,
    RunGraphRequest,
    SummaryRequest,
    SummaryRow,
    WorkflowGraph,
)
from rungraph.services import (
    build_definition_graph,
    build_live_run_graph,
    build_run_graph,
    detect_current_step_id,
    responsive_positions,
    summarize_object_for_ui,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== Graphs ====================


@router.post("/graphs/definition")
async def definition_graph(request: DefinitionGraphRequest) -> WorkflowGraph:
    """Render a workflow template without run state."""
    return build_definition_graph(request.definition)


@router.post("/graphs/run")
async def run_graph(request: RunGraphRequest) -> WorkflowGraph:
    """Render every step record of a run."""
    return build_run_graph(request.steps)


@router.post("/graphs/live")
async def live_run_graph(request: LiveRunGraphRequest) -> LiveRunGraph:
    """Merge a workflow template with a run's current steps."""
    graph = build_live_run_graph(request.definition, request.steps)
    logger.debug(
        f"Built live graph with {len(graph.nodes)} node(s) from {len(request.steps)} step(s)"
    )
    return LiveRunGraph(
        nodes=graph.nodes,
        edges=graph.edges,
        current_step_id=detect_current_step_id(request.steps),
    )


@router.post("/graphs/layout")
async def graph_layout(request: LayoutRequest) -> LayoutResponse:
    """Lay out graph nodes for a canvas width."""
    return LayoutResponse(positions=responsive_positions(request.nodes, request.canvas_width))


# ==================== Steps ====================


@router.post("/steps/summary")
async def step_summary(request: SummaryRequest) -> list[SummaryRow]:
    """Summarize a step input/output payload for display."""
    return summarize_object_for_ui(request.payload, request.max_items)
