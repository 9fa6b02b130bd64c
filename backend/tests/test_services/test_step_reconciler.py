"""Tests for step reconciliation."""

from pydantic import BaseModel

from rungraph.models import Step
from rungraph.services.step_reconciler import (
    coerce_step,
    coerce_steps,
    detect_current_step_id,
    resolve_latest,
)


def _step(step_id, node_id=None, **fields):
    return {"id": step_id, "node_id": node_id, **fields}


class TestCoerceStep:
    """Tests for step coercion."""

    def test_basic_fields(self):
        step = coerce_step(
            _step("s1", "a", node_type=" AI.Prompt ", status="running", attempt="2")
        )
        assert step.id == "s1"
        assert step.node_id == "a"
        assert step.node_type == "ai.prompt"
        assert step.status == "running"
        assert step.attempt == 2

    def test_legacy_status_fields(self):
        assert coerce_step({"id": "s", "step_status": "waiting"}).status == "waiting"
        assert coerce_step({"id": "s", "state": "failed"}).status == "failed"
        assert coerce_step({"id": "s", "status": 3}).status is None

    def test_bad_attempt_is_zero(self):
        assert coerce_step({"attempt": "many"}).attempt == 0
        assert coerce_step({"attempt": None}).attempt == 0

    def test_non_mapping(self):
        step = coerce_step("garbage")
        assert step.id is None
        assert step.node_id is None
        assert step.raw == "garbage"

    def test_input_keys_become_strings(self):
        step = coerce_step(_step("s1", "a", input={1: "x", "node": {"title": "Draft"}}))
        assert step.input == {"1": "x", "node": {"title": "Draft"}}
        assert step.input_node == {"title": "Draft"}

    def test_model_record_read_by_field_name(self):
        class Record(BaseModel):
            id: str
            node_id: str
            status: str

        step = coerce_step(Record(id="s1", node_id="a", status="running"))
        assert step.node_id == "a"
        assert step.status == "running"

    def test_passthrough(self):
        step = Step(id="s1")
        assert coerce_step(step) is step

    def test_coerce_steps_non_list(self):
        assert coerce_steps(None) == []
        assert coerce_steps({"id": "s1"}) == []


class TestResolveLatest:
    """Tests for authoritative step resolution."""

    def test_empty(self):
        resolved = resolve_latest([])
        assert resolved.by_node_id == {}
        assert resolved.by_node_type == {}

    def test_non_list_input(self):
        assert resolve_latest(None).by_node_id == {}

    def test_higher_attempt_wins_regardless_of_order(self):
        first = _step("s1", "a", attempt=1, started_at="2024-01-01T10:05:00Z")
        second = _step("s2", "a", attempt=2, started_at="2024-01-01T10:00:00Z")
        assert resolve_latest([first, second]).by_node_id["a"].id == "s2"
        assert resolve_latest([second, first]).by_node_id["a"].id == "s2"

    def test_equal_attempt_later_start_wins(self):
        early = _step("s1", "a", attempt=1, started_at="2024-01-01T10:00:00Z")
        late = _step("s2", "a", attempt=1, started_at="2024-01-01T10:01:00Z")
        assert resolve_latest([early, late]).by_node_id["a"].id == "s2"
        assert resolve_latest([late, early]).by_node_id["a"].id == "s2"

    def test_completed_at_used_when_not_started(self):
        early = _step("s1", "a", completed_at="2024-01-01T10:00:00Z")
        late = _step("s2", "a", completed_at="2024-01-01T11:00:00Z")
        assert resolve_latest([late, early]).by_node_id["a"].id == "s2"

    def test_exact_tie_keeps_last_processed(self):
        one = _step("s1", "a", attempt=1, started_at="2024-01-01T10:00:00Z")
        two = _step("s2", "a", attempt=1, started_at="2024-01-01T10:00:00Z")
        assert resolve_latest([one, two]).by_node_id["a"].id == "s2"
        assert resolve_latest([two, one]).by_node_id["a"].id == "s1"

    def test_missing_attempt_defaults_to_zero(self):
        retry = _step("s2", "a", attempt=1)
        first_try = _step("s1", "a")
        assert resolve_latest([retry, first_try]).by_node_id["a"].id == "s2"

    def test_steps_without_node_id_only_feed_type_index(self):
        resolved = resolve_latest([_step("s1", None, node_type="human.approval")])
        assert resolved.by_node_id == {}
        assert resolved.by_node_type["human.approval"].id == "s1"

    def test_type_index_first_seen_wins(self):
        resolved = resolve_latest(
            [
                _step("s1", "a", node_type="ai.prompt", attempt=1),
                _step("s2", "a", node_type="ai.prompt", attempt=2),
            ]
        )
        assert resolved.by_node_type["ai.prompt"].id == "s1"
        assert resolved.by_node_id["a"].id == "s2"

    def test_lookup_falls_back_to_type(self):
        resolved = resolve_latest([_step("s1", "other", node_type="ai.prompt")])
        assert resolved.lookup("a", "ai.prompt").id == "s1"
        assert resolved.lookup("a", "") is None
        assert resolved.lookup("other").id == "s1"

    def test_type_lookup_returns_latest_attempt_of_matched_node(self):
        resolved = resolve_latest(
            [
                _step("s1", "approval_x", node_type="human.approval", attempt=1),
                _step("s2", "approval_x", node_type="human.approval", attempt=2),
            ]
        )
        assert resolved.by_node_type["human.approval"].id == "s1"
        assert resolved.lookup("approve", "human.approval").id == "s2"

    def test_does_not_mutate_input(self):
        steps = [_step("s1", "a", attempt=1), _step("s2", "a", attempt=2)]
        snapshot = repr(steps)
        resolve_latest(steps)
        assert repr(steps) == snapshot


class TestDetectCurrentStepId:
    """Tests for current step detection."""

    def test_first_in_flight_step(self):
        steps = [
            _step("s1", "a", status="succeeded", started_at="2024-01-01T10:00:00Z"),
            _step("s2", "b", status="waiting", started_at="2024-01-01T10:01:00Z"),
            _step("s3", "c", status="running", started_at="2024-01-01T10:02:00Z"),
        ]
        assert detect_current_step_id(steps) == "s2"

    def test_latest_started_when_nothing_in_flight(self):
        steps = [
            _step("s1", "a", status="succeeded", started_at="2024-01-01T10:05:00Z"),
            _step("s2", "b", status="failed", started_at="2024-01-01T10:01:00Z"),
        ]
        assert detect_current_step_id(steps) == "s1"

    def test_created_at_fallback(self):
        steps = [
            _step("s1", "a", status="succeeded", created_at="2024-01-01T10:00:00Z"),
            _step("s2", "b", status="succeeded", created_at="2024-01-01T12:00:00Z"),
        ]
        assert detect_current_step_id(steps) == "s2"

    def test_empty(self):
        assert detect_current_step_id([]) is None
        assert detect_current_step_id(None) is None
