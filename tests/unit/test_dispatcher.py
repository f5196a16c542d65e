"""Unit tests for the intent dispatcher."""

from __future__ import annotations

import io
import json

import pytest
from pydantic import ValidationError

from itinerary_engine.application import dispatcher as dispatcher_module
from itinerary_engine.application.contracts import IntentEnvelope
from itinerary_engine.application.dispatcher import OPERATORS, PASS_THROUGH, dispatch
from itinerary_engine.domain.enums import ChangeKind, ErrorType, IntentType, ItemType
from itinerary_engine.domain.models import Change, ModificationResult
from itinerary_engine.infrastructure.logging import StructuredLogger
from trip_builders import day, dump, item


def _days():
    return [
        day(
            1,
            item("07:00", "09:00", "Flight", ItemType.FLIGHT, id="flight"),
            item("10:00", "11:00", "Louvre", id="louvre"),
            item("12:30", "13:30", "Lunch", ItemType.RESTAURANT, id="lunch"),
        ),
        day(2, item("10:00", "11:00", "Orsay", id="orsay")),
    ]


def _logger():
    stream = io.StringIO()
    return StructuredLogger(trace_id="t-1", output=stream), stream


def _events(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_every_intent_type_is_routed():
    assert set(OPERATORS) | PASS_THROUGH == set(IntentType)
    assert not set(OPERATORS) & PASS_THROUGH


def test_envelope_accepts_camel_case_parameters():
    envelope = IntentEnvelope.model_validate(
        {
            "type": "shift_times",
            "confidence": 0.9,
            "parameters": {"dayNumbers": [1], "timeShift": 30, "direction": "later", "scope": "morning_only"},
            "explanation": "Start later",
        }
    )
    assert envelope.parameters.day_numbers == [1]
    assert envelope.parameters.time_shift == 30
    with pytest.raises(ValidationError):
        IntentEnvelope(type="shift_times", confidence=1.5)


def test_dispatch_runs_operator_and_logs():
    log, stream = _logger()
    envelope = IntentEnvelope(type="remove_activity", parameters={"targetActivity": "louvre"})
    result = dispatch(envelope, _days(), logger=log)
    assert result.success is True
    assert result.changes[0].kind == ChangeKind.REMOVE
    events = _events(stream)
    assert [e["event"] for e in events] == ["node_start", "node_end"]
    assert events[1]["node"] == "remove_activity"
    assert events[1]["changes_count"] == 1
    assert all(e["trace_id"] == "t-1" for e in events)


def test_scenario_flight_removal_is_refused():
    days = _days()
    result = dispatch(IntentEnvelope(type="remove_activity", parameters={"targetItemId": "flight"}), days)
    assert result.success is False
    assert result.error_info.type == ErrorType.IMMUTABLE_ITEM
    assert dump(result.rollback_data) == dump(days)
    assert dump(result.new_days) == dump(days)


@pytest.mark.parametrize("intent_type", ["clarification", "general_question"])
def test_pass_through_intents(intent_type):
    days = _days()
    result = dispatch(IntentEnvelope(type=intent_type, explanation="Which day do you mean?"), days)
    assert result.success is True
    assert result.changes == []
    assert result.explanation == "Which day do you mean?"
    assert dump(result.new_days) == dump(days)


def test_unknown_intent_is_a_generic_failure():
    days = _days()
    result = dispatch(IntentEnvelope(type="book_hotel"), days)
    assert result.success is False
    assert result.error_info is None
    assert "book_hotel" in result.explanation
    assert dump(result.rollback_data) == dump(days)


def test_operator_exception_becomes_generic_failure(monkeypatch):
    def _explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setitem(dispatcher_module.OPERATORS, IntentType.REORDER_DAY, _explode)
    log, stream = _logger()
    days = _days()
    result = dispatch(IntentEnvelope(type="reorder_day", parameters={"dayNumbers": [1]}), days, logger=log)
    assert result.success is False
    assert result.error_info is None
    assert dump(result.new_days) == dump(days)
    assert dump(result.rollback_data) == dump(days)
    errors = [e for e in _events(stream) if e["event"] == "error"]
    assert errors and "boom" in errors[0]["error"]


def test_safety_net_blocks_changes_to_locked_items(monkeypatch):
    def _rogue(params, days, constraints, rollback_data, ctx):
        return ModificationResult(
            success=True,
            changes=[Change(kind=ChangeKind.REMOVE, day_number=1, item_id="flight")],
            new_days=[],
            rollback_data=rollback_data,
        )

    monkeypatch.setitem(dispatcher_module.OPERATORS, IntentType.EXTEND_FREE_TIME, _rogue)
    days = _days()
    result = dispatch(IntentEnvelope(type="extend_free_time"), days)
    assert result.success is False
    assert result.error_info.type == ErrorType.IMMUTABLE_ITEM
    assert dump(result.new_days) == dump(days)


def test_safety_net_merges_booking_warnings_once():
    days = [
        day(
            1,
            item("10:00", "12:00", "Boat tour", id="boat", booking_url="https://b", estimated_cost=20,
                 reservation_reference="R"),
            item("14:00", "15:00", "Walk"),
        )
    ]
    result = dispatch(IntentEnvelope(type="remove_activity", parameters={"targetItemId": "boat"}), days)
    assert result.success is True
    assert len(result.warnings) == 1


def test_id_factory_is_forwarded():
    result = dispatch(
        IntentEnvelope(type="add_activity", parameters={"newValue": "Picnic", "dayNumbers": [2]}),
        _days(),
        id_factory=lambda: "fixed-id",
    )
    assert result.changes[0].new_item.id == "fixed-id"
