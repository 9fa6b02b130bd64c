"""Services for the workflow run graph."""

from rungraph.services.classifier import (
    classify,
    friendly_node_label,
    node_execution_description,
    node_kind_from_type,
    normalize_node_type,
    resolve_node_label,
)
from rungraph.services.formatting import format_duration_ms, summarize_object_for_ui
from rungraph.services.graph_builder import (
    build_definition_graph,
    build_live_run_graph,
    build_run_graph,
    edge_is_active,
)
from rungraph.services.layout import responsive_positions, zigzag_position
from rungraph.services.schema_normalizer import normalize_definition
from rungraph.services.step_reconciler import (
    ResolvedSteps,
    detect_current_step_id,
    resolve_latest,
)

__all__ = [
    "ResolvedSteps",
    "build_definition_graph",
    "build_live_run_graph",
    "build_run_graph",
    "classify",
    "detect_current_step_id",
    "edge_is_active",
    "format_duration_ms",
    "friendly_node_label",
    "node_execution_description",
    "node_kind_from_type",
    "normalize_definition",
    "normalize_node_type",
    "resolve_latest",
    "resolve_node_label",
    "responsive_positions",
    "summarize_object_for_ui",
    "zigzag_position",
]
