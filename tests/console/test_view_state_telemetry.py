from __future__ import annotations

import io
import json

import pytest

from bizops_console.stores import CollectionState, RecordState
from bizops_console.telemetry import EventCategory, TelemetryLogger, build_event, pii_keys
from bizops_console.view_state import ViewStateStatus, resolve_state, state_of


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"can_view": False, "is_loading": True, "error": None, "has_data": True}, ViewStateStatus.NO_PERMISSION),
        (
            {"can_view": True, "is_loading": False, "error": None, "has_data": False, "store_selected": False},
            ViewStateStatus.NO_STORE,
        ),
        ({"can_view": True, "is_loading": True, "error": None, "has_data": False}, ViewStateStatus.LOADING),
        ({"can_view": True, "is_loading": False, "error": "boom", "has_data": True}, ViewStateStatus.PARTIAL_ERROR),
        ({"can_view": True, "is_loading": False, "error": "boom", "has_data": False}, ViewStateStatus.FATAL_ERROR),
        ({"can_view": True, "is_loading": False, "error": None, "has_data": False}, ViewStateStatus.EMPTY),
        ({"can_view": True, "is_loading": False, "error": None, "has_data": True}, ViewStateStatus.SUCCESS),
    ],
)
def test_resolve_state_precedence(kwargs, expected) -> None:
    assert resolve_state(**kwargs).status is expected


def test_empty_state_uses_screen_message() -> None:
    state = resolve_state(can_view=True, is_loading=False, error=None, has_data=False, empty_message="No employees found")
    assert state.render()["message"] == "No employees found"


def test_build_event_rejects_unknown_category_and_pii() -> None:
    with pytest.raises(ValueError):
        build_event(category="navigation", name="n", module="employees", action="open")
    with pytest.raises(ValueError):
        build_event(category="api_call_result", name="n", module="order_tracking", action="verify", context={"customer_name": "x"})


def test_logger_appends_json_lines(tmp_path) -> None:
    stream = io.StringIO()
    logger = TelemetryLogger(enabled=True, log_file=tmp_path / "telemetry.jsonl", stdout_sink=True, stdout_stream=stream)

    logger.emit(build_event(category="store", name="store_selected", module="console", action="select"))

    payload = json.loads((tmp_path / "telemetry.jsonl").read_text().strip())
    assert payload["app_name"] == "bizops"
    assert payload["name"] == "store_selected"
    assert "trace_id" not in payload
    assert "store_selected" in stream.getvalue()


def test_logger_disabled_by_default(tmp_path) -> None:
    logger = TelemetryLogger(log_file=tmp_path / "telemetry.jsonl")
    assert logger.emit(build_event(category="auth", name="login", module="auth", action="login")) is False
    assert not (tmp_path / "telemetry.jsonl").exists()


def test_state_of_reads_containers() -> None:
    employees: CollectionState[dict] = CollectionState(items=[{"id": "e1"}], error="Failed to fetch employees")
    profile: RecordState[str] = RecordState()

    assert state_of(employees).status is ViewStateStatus.PARTIAL_ERROR
    assert state_of(employees, store_selected=False).status is ViewStateStatus.NO_STORE
    assert state_of(profile, empty_message="Business details not set up yet").message == "Business details not set up yet"
    assert state_of(profile).blocking is True


def test_pii_guard_looks_into_nested_context() -> None:
    assert pii_keys({"order": {"driver_name": "Lee", "id": "o1"}, "Email": "x"}) == ["Email", "order.driver_name"]
    assert pii_keys({"order_id": "o1", "page": 2}) == []


def test_event_carries_store_and_drops_empty_fields() -> None:
    event = build_event(category=EventCategory.STORE, name="store_selected", module="console", action="select", store_id="s1")
    payload = event.to_dict()
    assert payload["category"] == "store"
    assert payload["store_id"] == "s1"
    assert "context" not in payload
