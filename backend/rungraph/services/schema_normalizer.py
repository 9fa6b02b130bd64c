"""Schema normalization for workflow definitions.

Definitions arrive in two generations:

- v1: a bare list of nodes; edges are implied by list order.
- v2: ``{"schema_version": 2, "nodes": [...], "edges": [...]}``.

Both are coerced into a NormalizedDefinition. Malformed input degrades to
empty collections; nothing here raises.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from rungraph.models.definition import (
    DefinitionEdge,
    DefinitionNode,
    NormalizedDefinition,
)
from rungraph.services.classifier import normalize_node_type


def as_mapping(value: Any, by_alias: bool = False) -> Mapping[str, Any]:
    """Read a raw record as a mapping; models are dumped, anything else is empty.

    Definition records are read by their wire names (``from``, ``to``), so
    callers reading them pass ``by_alias=True``. Step records are read by
    field name.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=by_alias)
    return {}


def string_keyed(value: Any) -> dict[str, Any] | None:
    """Copy of a mapping with its keys as strings; ``None`` for non-mappings."""
    if not isinstance(value, Mapping):
        return None
    return {str(key): item for key, item in value.items()}


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _schema_version(value: Any) -> int:
    """2 when the value numerically equals 2, otherwise 1."""
    if isinstance(value, bool):
        return 1
    if isinstance(value, (int, float)):
        return 2 if value == 2 else 1
    if isinstance(value, str):
        try:
            return 2 if float(value.strip()) == 2 else 1
        except ValueError:
            return 1
    return 1


def resolve_definition_node_type(node: Mapping[str, Any]) -> str:
    """Declared type of a definition node, including legacy ``node_ref`` keys."""
    ref_key = None
    for ref_field in ("node_ref", "nodeRef"):
        ref = node.get(ref_field)
        if isinstance(ref, Mapping) and ref.get("key"):
            ref_key = ref["key"]
            break
    return normalize_node_type(node.get("node_type") or node.get("type") or ref_key)


def coerce_definition_node(raw: Any, index: int) -> DefinitionNode:
    """Build a DefinitionNode from a raw entry at position ``index``."""
    if isinstance(raw, DefinitionNode):
        return raw
    node = as_mapping(raw, by_alias=True)
    output = node.get("output")
    assignee = string_keyed(node.get("assignee"))
    return DefinitionNode(
        id=str(node.get("id") or f"step_{index + 1}"),
        node_type=resolve_definition_node_type(node),
        title=_optional_text(node.get("title")),
        name=_optional_text(node.get("name")),
        output=output if isinstance(output, str) else None,
        assignee=assignee or None,
        raw=raw,
    )


def coerce_definition_edge(raw: Any, index: int) -> DefinitionEdge:
    """Build a DefinitionEdge from a raw entry at position ``index``."""
    if isinstance(raw, DefinitionEdge):
        return raw
    edge = as_mapping(raw, by_alias=True)
    edge_id = str(edge.get("id") or "").strip()
    return DefinitionEdge(
        id=edge_id or None,
        from_node_id=str(edge.get("from") or "").strip(),
        to_node_id=str(edge.get("to") or "").strip(),
        ordinal=index + 1,
    )


def normalize_definition(definition_or_nodes: Any) -> NormalizedDefinition:
    """Normalize a v1 node list or a v2 definition object."""
    if isinstance(definition_or_nodes, (list, tuple)):
        return NormalizedDefinition(
            schema_version=1,
            nodes=[
                coerce_definition_node(node, index)
                for index, node in enumerate(definition_or_nodes)
            ],
            edges=[],
        )

    definition = as_mapping(definition_or_nodes, by_alias=True)
    raw_nodes = definition.get("nodes")
    raw_edges = definition.get("edges")
    nodes = raw_nodes if isinstance(raw_nodes, (list, tuple)) else []
    schema_version = _schema_version(definition.get("schema_version"))
    # v1 objects imply their edges from node order
    edges = raw_edges if schema_version == 2 and isinstance(raw_edges, (list, tuple)) else []
    return NormalizedDefinition(
        schema_version=schema_version,
        nodes=[coerce_definition_node(node, index) for index, node in enumerate(nodes)],
        edges=[coerce_definition_edge(edge, index) for index, edge in enumerate(edges)],
    )
