"""GraphBuilder - Builds renderable graphs from workflow definitions and runs.

Three entry points serve different views:

- ``build_definition_graph``: the template alone, no run state.
- ``build_run_graph``: every step record of a run, in start order.
- ``build_live_run_graph``: the template merged with the run's authoritative
  steps, plus runtime-only steps the template does not declare.

Every call rebuilds the graph from its arguments alone and never mutates
them, so polling callers get identical node and edge ids for identical
input.

Graph node ids:

- definition graph: ``<nodeId>__<index>``
- run graph: the step id, else ``<nodeId>__<index>``
- live graph: the authoritative step id, else ``def:<nodeId>:<index>`` for
  template nodes and ``runtime:<index>`` for runtime-only nodes
"""

import logging
from typing import Any

from rungraph.models.definition import DefinitionEdge, DefinitionNode
from rungraph.models.graph import GraphEdge, GraphNode, WorkflowGraph
from rungraph.models.step import Step, is_in_flight_status, is_terminal_status
from rungraph.services.classifier import classify, friendly_node_label, node_kind_from_type
from rungraph.services.layout import zigzag_position
from rungraph.services.schema_normalizer import normalize_definition
from rungraph.services.step_reconciler import (
    coerce_steps,
    resolve_latest,
    step_timestamp_ms,
)
from rungraph.services.timing import duration_between, sort_timestamp_ms

logger = logging.getLogger(__name__)

# UI-only run markers, never drawn as runtime-only nodes
RUN_MARKER_TYPES = frozenset({"manual.trigger", "chat.trigger"})


def edge_is_active(from_node: GraphNode | None, to_node: GraphNode | None) -> bool:
    """True when the upstream node is finished and the downstream one is in flight."""
    if from_node is None or to_node is None:
        return False
    return is_terminal_status(from_node.status) and is_in_flight_status(to_node.status)


def _chain_edges(nodes: list[GraphNode], with_activity: bool) -> list[GraphEdge]:
    """Linear chain connecting each node to the next in list order."""
    edges: list[GraphEdge] = []
    for from_node, to_node in zip(nodes, nodes[1:]):
        edges.append(
            GraphEdge(
                id=f"{from_node.id}->{to_node.id}",
                from_id=from_node.id,
                to_id=to_node.id,
                active=edge_is_active(from_node, to_node) if with_activity else None,
            )
        )
    return edges


def _definition_edges(
    definition_edges: list[DefinitionEdge],
    node_id_to_graph_id: dict[str, str],
    graph_nodes_by_id: dict[str, GraphNode] | None = None,
) -> list[GraphEdge]:
    """Map declared edges onto graph node ids.

    Edges with a missing or unknown endpoint are dropped. Edge ids that
    collide get a numeric suffix (``_2``, ``_3``, ...). ``active`` is only
    computed when ``graph_nodes_by_id`` carries run state.
    """
    edges: list[GraphEdge] = []
    used_ids: set[str] = set()
    for edge in definition_edges:
        if not edge.from_node_id or not edge.to_node_id:
            logger.debug(f"Dropping edge #{edge.ordinal} with a missing endpoint")
            continue
        from_id = node_id_to_graph_id.get(edge.from_node_id)
        to_id = node_id_to_graph_id.get(edge.to_node_id)
        if not from_id or not to_id:
            logger.debug(
                f"Dropping edge {edge.from_node_id}->{edge.to_node_id}: unknown node"
            )
            continue

        base_id = edge.id or edge.fallback_id
        edge_id = base_id
        suffix = 2
        while edge_id in used_ids:
            edge_id = f"{base_id}_{suffix}"
            suffix += 1
        used_ids.add(edge_id)

        active = None
        if graph_nodes_by_id is not None:
            active = edge_is_active(graph_nodes_by_id.get(from_id), graph_nodes_by_id.get(to_id))
        edges.append(GraphEdge(id=edge_id, from_id=from_id, to_id=to_id, active=active))
    return edges


def build_definition_graph(definition_or_nodes: Any = None) -> WorkflowGraph:
    """Render a workflow template with no run state."""
    definition = normalize_definition(definition_or_nodes)

    nodes: list[GraphNode] = []
    for index, definition_node in enumerate(definition.nodes):
        classification = classify(definition_node.node_type, definition_node)
        nodes.append(
            GraphNode(
                id=f"{definition_node.id}__{index}",
                index=index,
                node_id=definition_node.id,
                node_type=definition_node.node_type,
                label=classification.label,
                kind=classification.kind,
                output_key=definition_node.output,
                assignee=definition_node.assignee,
                position=zigzag_position(index),
                raw=definition_node.raw,
            )
        )

    if definition.schema_version == 2:
        node_id_to_graph_id = {node.node_id: node.id for node in nodes}
        edges = _definition_edges(definition.edges, node_id_to_graph_id)
    else:
        edges = _chain_edges(nodes, with_activity=False)

    return WorkflowGraph(nodes=nodes, edges=edges)


def build_run_graph(steps: Any = None) -> WorkflowGraph:
    """Render every step record of a run, ordered by start time.

    Retries are not collapsed: each attempt becomes its own node.
    """
    ordered = sorted(
        coerce_steps(steps),
        key=lambda step: sort_timestamp_ms(step.started_at, step.created_at),
    )

    nodes: list[GraphNode] = []
    for index, step in enumerate(ordered):
        node_type = step.node_type or (step.node_id or "").lower()
        node_id = step.node_id or step.id or f"step_{index + 1}"
        nodes.append(
            GraphNode(
                id=step.id or f"{node_id}__{index}",
                index=index,
                node_id=node_id,
                node_type=node_type,
                label=friendly_node_label(node_type),
                kind=node_kind_from_type(node_type),
                status=step.status,
                duration_ms=duration_between(step.started_at, step.completed_at),
                position=zigzag_position(index),
                raw=step.raw,
            )
        )

    return WorkflowGraph(nodes=nodes, edges=_chain_edges(nodes, with_activity=True))


def _template_node(
    index: int,
    definition_node: DefinitionNode,
    step: Step | None,
    use_step_id: bool = True,
) -> GraphNode:
    # the executed step may report a more specific type than the template declares
    node_type = (step.node_type if step else "") or definition_node.node_type
    classification = classify(node_type, definition_node, step)
    return GraphNode(
        id=(step.id if step and use_step_id else None) or f"def:{definition_node.id}:{index}",
        index=index,
        node_id=definition_node.id,
        node_type=node_type,
        label=classification.label,
        kind=classification.kind,
        output_key=definition_node.output,
        assignee=definition_node.assignee,
        status=(step.status if step else None) or "pending",
        duration_ms=duration_between(step.started_at, step.completed_at) if step else None,
        position=zigzag_position(index),
        raw={
            "definition": definition_node.raw,
            "step": step.raw if step else None,
        },
    )


def _runtime_node(index: int, step: Step) -> GraphNode:
    node_type = step.node_type or (step.node_id or "").lower()
    classification = classify(node_type, None, step)
    return GraphNode(
        id=step.id or f"runtime:{index}",
        index=index,
        node_id=step.node_id or f"runtime_{index + 1}",
        node_type=node_type,
        label=classification.label,
        kind=classification.kind,
        status=step.status or "pending",
        duration_ms=duration_between(step.started_at, step.completed_at),
        position=zigzag_position(index),
        raw={"definition": None, "step": step.raw},
    )


def _runtime_only_steps(
    steps: list[Step],
    matched_node_ids: set[str],
    authoritative: dict[str, Step],
    claimed: list[Step],
) -> list[Step]:
    """Steps with no counterpart in the template, in start order.

    Every record of a ``node_id`` already drawn for a template node, whether
    matched by id or through the type fallback, is skipped. Only the
    authoritative record of each remaining ``node_id`` is kept. Steps without
    a ``node_id`` each stand alone unless a template node claimed them.
    """
    runtime_steps: list[Step] = []
    for step in steps:
        if step.node_id and step.node_id in matched_node_ids:
            continue
        if step.node_type in RUN_MARKER_TYPES:
            continue
        if any(step is other for other in claimed):
            continue
        if step.node_id and authoritative.get(step.node_id) is not step:
            continue
        runtime_steps.append(step)
    return sorted(runtime_steps, key=step_timestamp_ms)


def build_live_run_graph(definition_or_nodes: Any = None, steps: Any = None) -> WorkflowGraph:
    """Merge a workflow template with the current state of a run.

    Template nodes come first, in definition order, each showing its
    authoritative step (``pending`` when none has executed). Runtime-only
    steps follow. v2 definitions keep their declared edges and leave
    runtime-only nodes unconnected; v1 definitions chain every node,
    runtime-only ones included.
    """
    definition = normalize_definition(definition_or_nodes)
    step_list = coerce_steps(steps)
    resolved = resolve_latest(step_list)

    nodes: list[GraphNode] = []
    claimed: list[Step] = []
    for index, definition_node in enumerate(definition.nodes):
        step = resolved.lookup(definition_node.id, definition_node.node_type)
        if step is not None:
            if step.node_id != definition_node.id:
                logger.debug(
                    f"Node {definition_node.id} matched step {step.id} by type "
                    f"{definition_node.node_type}"
                )
            claimed.append(step)
        # a step shared through the type fallback keeps its id on the first node only
        use_step_id = not any(node.id == step.id for node in nodes) if step else True
        nodes.append(_template_node(index, definition_node, step, use_step_id))

    node_id_to_graph_id = {node.node_id: node.id for node in nodes}
    matched_node_ids = set(node_id_to_graph_id) | {s.node_id for s in claimed if s.node_id}
    runtime_steps = _runtime_only_steps(
        step_list, matched_node_ids, resolved.by_node_id, claimed
    )
    for step in runtime_steps:
        nodes.append(_runtime_node(len(nodes), step))
    if runtime_steps:
        logger.debug(f"Appended {len(runtime_steps)} runtime-only node(s)")

    if definition.schema_version == 2:
        graph_nodes_by_id = {node.id: node for node in nodes}
        edges = _definition_edges(definition.edges, node_id_to_graph_id, graph_nodes_by_id)
    else:
        edges = _chain_edges(nodes, with_activity=True)

    return WorkflowGraph(nodes=nodes, edges=edges)
