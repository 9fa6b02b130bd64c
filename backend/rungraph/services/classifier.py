"""Node type classification: semantic kind, display label and description.

Node types follow a dotted namespace convention (``ai.prompt``,
``human.approval``, ``dms.read_document``). Kind rules are evaluated in
order and the first match wins, so ``human.approval`` is ``human`` before any
later rule sees it.
"""

from typing import Any

from rungraph.models.definition import DefinitionNode
from rungraph.models.graph import NodeClassification, NodeKind
from rungraph.models.step import Step

# (kind, prefixes, substrings) in precedence order
KIND_RULES: tuple[tuple[NodeKind, tuple[str, ...], tuple[str, ...]], ...] = (
    (NodeKind.TRIGGER, (), ("trigger",)),
    (NodeKind.MANUAL, (), ("manual",)),
    (NodeKind.HUMAN, ("human.",), ("approval", "review")),
    (NodeKind.AI, ("ai.",), ("llm", "gemini", "openai")),
    (
        NodeKind.SYSTEM,
        ("dms.", "artifact.", "system."),
        ("evaluate", "validate", "reconcile"),
    ),
    (NodeKind.CONDITION, (), ("condition", "branch", "route")),
    (
        NodeKind.TRANSFORM,
        (),
        ("transform", "map", "convert", "aggregate", "for_each"),
    ),
    (NodeKind.NOTIFICATION, (), ("notify", "email", "slack")),
)

NODE_LABELS: dict[str, str] = {
    "ai.parse_ruleset": "Read Ruleset",
    "ai.extract_facts": "Extract Facts",
    "ai.generate_report": "Generate Report",
    "ai.prompt": "AI Prompt",
    "ai.extract": "AI Extract",
    "ai.classify": "AI Classify",
    "system.evaluate": "Evaluate Findings",
    "system.reconcile": "Reconcile Data",
    "system.enumerate_docs": "Enumerate Documents",
    "system.validate": "Validate",
    "system.packet_check": "Packet Check",
    "human.approval": "Human Approval",
    "human.checklist": "Checklist Task",
    "human.legal_review": "Legal Review",
    "human.task": "Human Task",
    "human.review": "Human Review",
    "manual.trigger": "Manual Trigger",
    "chat.trigger": "Chat Trigger",
    "dms.read_document": "Read Document",
    "dms.list_folder": "List Folder",
    "dms.set_metadata": "Set Metadata",
    "dms.create_document": "Create Document",
    "dms.move_document": "Move Document",
    "flow.branch": "Branch",
    "flow.route": "Rule Router",
    "flow.for_each": "For Each",
    "flow.aggregate": "Merge Results",
    "artifact.export_csv": "Export CSV",
}

TRIGGER_DESCRIPTION = (
    "Trigger marker step. It records run start and does not perform processing."
)
HUMAN_DESCRIPTION = (
    "Human-gated step. The run pauses in waiting state until task sign-off."
)
SPECIALIZED_DESCRIPTION = (
    "Specialized automated step with workflow-specific output behavior."
)
GENERIC_AUTOMATED_DESCRIPTION = (
    "Generic automated step. It runs through the shared automation path."
)
CUSTOM_DESCRIPTION = (
    "Custom/legacy step behavior depends on node contract and executor implementation."
)
UNKNOWN_DESCRIPTION = "Execution profile unknown."

NODE_DESCRIPTIONS: dict[str, str] = {
    "manual.trigger": TRIGGER_DESCRIPTION,
    "chat.trigger": TRIGGER_DESCRIPTION,
    "ai.prompt": (
        "AI generation step. Uses prompt + optional document context to produce "
        "text or JSON."
    ),
    "ai.extract": "AI extraction step. Produces structured fields from document context.",
    "ai.classify": "AI classification step. Assigns labels with confidence scores.",
    "dms.list_folder": "DMS read step. Lists documents from a target folder.",
    "dms.create_document": (
        "DMS action step. Creates a new document file in the target folder."
    ),
    "dms.set_metadata": (
        "DMS action step. Applies tags/keywords/category metadata to one or more "
        "documents."
    ),
    "dms.read_document": (
        "DMS read step. Loads document metadata and optional extracted text for "
        "downstream nodes."
    ),
    "dms.move_document": (
        "DMS action step. Moves one or more documents to the destination folder."
    ),
    "system.validate": (
        "System validation step. Evaluates payload fields against configured rules."
    ),
    "system.reconcile": (
        "System reconciliation step. Compares records and reports mismatches."
    ),
    "system.packet_check": (
        "System packet check step. Verifies required document patterns/types are "
        "present."
    ),
    "flow.branch": (
        "Flow control step. Routes execution based on expression or truthy checks."
    ),
    "flow.route": (
        "Flow routing step. Selects one named route from rule expressions or value map."
    ),
    "flow.for_each": (
        "Flow transform step. Normalizes item collections for downstream processing."
    ),
    "flow.aggregate": (
        "Flow transform step. Merges outputs from multiple previous steps into one "
        "payload."
    ),
    "artifact.export_csv": (
        "Artifact generation step. Exports rows as CSV and stores the file in DMS."
    ),
    "ai.parse_ruleset": SPECIALIZED_DESCRIPTION,
    "ai.extract_facts": SPECIALIZED_DESCRIPTION,
    "system.evaluate": SPECIALIZED_DESCRIPTION,
    "ai.generate_report": SPECIALIZED_DESCRIPTION,
}


def normalize_node_type(value: Any) -> str:
    """Strip and lower-case a raw node type; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value).strip().lower()


def node_kind_from_type(node_type: Any) -> NodeKind:
    """Classify a node type into a NodeKind using the first matching rule."""
    key = normalize_node_type(node_type)
    if not key:
        return NodeKind.UNKNOWN
    for kind, prefixes, substrings in KIND_RULES:
        if key.startswith(prefixes) or any(part in key for part in substrings):
            return kind
    return NodeKind.UNKNOWN


def friendly_node_label(node_type: Any) -> str:
    """Human label for a node type.

    Known types come from NODE_LABELS, other ``human.*`` types are "Human
    Step", anything else is the dotted type in Title Case.
    """
    key = normalize_node_type(node_type)
    if not key:
        return "Workflow Step"
    if key in NODE_LABELS:
        return NODE_LABELS[key]
    if key.startswith("human."):
        return "Human Step"
    return " ".join(part[:1].upper() + part[1:] for part in key.split("."))


def node_execution_description(node_type: Any) -> str:
    """One-sentence description of how a node type executes."""
    key = normalize_node_type(node_type)
    if not key:
        return UNKNOWN_DESCRIPTION
    if key.startswith("human."):
        return HUMAN_DESCRIPTION
    if key in NODE_DESCRIPTIONS:
        return NODE_DESCRIPTIONS[key]
    if key.startswith(("ai.", "system.")):
        return GENERIC_AUTOMATED_DESCRIPTION
    return CUSTOM_DESCRIPTION


def resolve_node_label(
    node_type: Any,
    definition_node: DefinitionNode | None = None,
    step: Step | None = None,
) -> str:
    """Explicit title/name from the definition or step input, else the type label."""
    candidates: list[Any] = []
    if definition_node is not None:
        candidates.extend([definition_node.title, definition_node.name])
    if step is not None:
        captured = step.input_node
        candidates.extend([captured.get("title"), captured.get("name")])
    for candidate in candidates:
        text = str(candidate or "").strip()
        if text:
            return text
    return friendly_node_label(node_type)


def classify(
    node_type: Any,
    definition_node: DefinitionNode | None = None,
    step: Step | None = None,
) -> NodeClassification:
    """Kind, label and description for a node type."""
    return NodeClassification(
        kind=node_kind_from_type(node_type),
        label=resolve_node_label(node_type, definition_node, step),
        description=node_execution_description(node_type),
    )
