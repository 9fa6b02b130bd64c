"""Tests for display formatting."""

from pydantic import BaseModel

from rungraph.services.formatting import format_duration_ms, summarize_object_for_ui


class TestFormatDurationMs:
    """Tests for duration formatting."""

    def test_milliseconds(self):
        assert format_duration_ms(500) == "500ms"
        assert format_duration_ms(0) == "0ms"
        assert format_duration_ms(999.0) == "999ms"

    def test_seconds(self):
        assert format_duration_ms(1000) == "1.0s"
        assert format_duration_ms(1250) == "1.3s"
        assert format_duration_ms(59949) == "59.9s"

    def test_minutes(self):
        assert format_duration_ms(61000) == "1m 1s"
        assert format_duration_ms(60000) == "1m 0s"
        assert format_duration_ms(3_723_999) == "62m 3s"

    def test_not_available(self):
        for value in (None, float("nan"), float("inf"), "500", True):
            assert format_duration_ms(value) == "n/a"

    def test_integer_too_large_for_float(self):
        assert format_duration_ms(10**400) == "n/a"


class TestSummarizeObjectForUi:
    """Tests for payload summaries."""

    def test_mixed_values(self):
        rows = summarize_object_for_ui(
            {
                "documents": [1, 2, 3],
                "single": ["x"],
                "meta": {"a": 1, "b": 2},
                "one_field": {"a": 1},
                "name": "Contract",
                "count": 4,
            }
        )
        assert [(row.key, row.value) for row in rows] == [
            ("documents", "3 items"),
            ("single", "1 item"),
            ("meta", "2 fields"),
            ("one_field", "1 field"),
            ("name", "Contract"),
            ("count", "4"),
        ]

    def test_scalars_render_like_json(self):
        rows = summarize_object_for_ui({"ok": True, "missing": None, "ratio": 2.0})
        assert [row.value for row in rows] == ["true", "null", "2"]

    def test_max_items(self):
        payload = {f"k{i}": i for i in range(10)}
        assert len(summarize_object_for_ui(payload)) == 6
        assert [row.key for row in summarize_object_for_ui(payload, max_items=2)] == ["k0", "k1"]

    def test_truncation(self):
        rows = summarize_object_for_ui({"text": "x" * 200, "exact": "y" * 120})
        assert rows[0].value == "x" * 117 + "..."
        assert len(rows[0].value) == 120
        assert rows[1].value == "y" * 120

    def test_list_input_uses_index_keys(self):
        rows = summarize_object_for_ui(["a", {"b": 1}])
        assert [(row.key, row.value) for row in rows] == [("0", "a"), ("1", "1 field")]

    def test_model_input(self):
        class Payload(BaseModel):
            title: str
            tags: list[str]

        rows = summarize_object_for_ui(Payload(title="Memo", tags=["a", "b"]))
        assert [(row.key, row.value) for row in rows] == [("title", "Memo"), ("tags", "2 items")]

    def test_non_container(self):
        assert summarize_object_for_ui(None) == []
        assert summarize_object_for_ui("text") == []
        assert summarize_object_for_ui(5) == []
