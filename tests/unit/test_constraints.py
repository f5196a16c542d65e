"""Unit tests for constraint derivation, conflicts and change validation."""

from __future__ import annotations

from itinerary_engine.domain.constraints import (
    ConstraintDeriver,
    check_time_boundaries,
    derive_constraints,
    detect_time_conflicts,
    get_max_time_shift,
    validate_modifications,
)
from itinerary_engine.domain.constraints.rules import FlightRule
from itinerary_engine.domain.enums import ChangeKind, ConstraintKind, Direction, ItemType
from itinerary_engine.domain.models import Change
from trip_builders import day, item


def _kinds(days):
    return {c.item_id: c.kind for c in derive_constraints(days)}


def test_derive_constraints_by_category():
    days = [
        day(
            1,
            item("07:00", "09:00", "Flight", ItemType.FLIGHT, id="flight", booking_url="https://air", estimated_cost=90),
            item("15:00", "15:30", "Check-in", ItemType.CHECKIN, id="in"),
            item("10:00", "12:00", "Tour", id="tour", booking_url="https://t", estimated_cost=40,
                 reservation_reference="GYG-1"),
            item("12:30", "13:00", "Taxi", ItemType.TRANSPORT, id="taxi", booking_url="https://cab"),
            item("13:00", "14:00", "Museum", id="museum", booking_url="https://m", estimated_cost=12),
            item("16:00", "17:00", "Garage", ItemType.PARKING, id="park"),
        ),
        day(2, item("11:00", "11:30", "Check-out", ItemType.CHECKOUT, id="out")),
    ]
    assert _kinds(days) == {
        "flight": ConstraintKind.IMMUTABLE,
        "in": ConstraintKind.TIME_LOCKED,
        "out": ConstraintKind.TIME_LOCKED,
        "tour": ConstraintKind.BOOKING_REQUIRED,
        "taxi": ConstraintKind.BOOKING_REQUIRED,
    }


def test_paid_reservation_needs_cost_and_reference():
    free = item("10:00", "11:00", "Free tour", booking_url="https://t", estimated_cost=0, reservation_reference="R")
    assert derive_constraints([day(1, free)]) == []


def test_custom_rule_set():
    deriver = ConstraintDeriver((FlightRule(),))
    days = [day(1, item("15:00", "15:30", "Check-in", ItemType.CHECKIN))]
    assert deriver.derive(days) == []


def test_detect_time_conflicts_reports_adjacent_pairs_only():
    a = item("09:00", "11:00", "A")
    b = item("10:00", "10:30", "B")
    c = item("10:15", "12:00", "C")
    conflicts = detect_time_conflicts([c, a, b])
    assert [(x.item1.title, x.item2.title, x.overlap_minutes) for x in conflicts] == [
        ("A", "B", 60),
        ("B", "C", 15),
    ]


def test_detect_time_conflicts_across_midnight():
    bar = item("22:30", "00:30", "Bar")
    club = item("00:15", "02:00", "Club")
    conflicts = detect_time_conflicts([club, bar])
    assert len(conflicts) == 1
    assert conflicts[0].item1.title == "Bar"
    assert conflicts[0].overlap_minutes == 15


def test_check_time_boundaries():
    rows = [item("05:30", "07:00", "Sunrise"), item("21:00", "23:30", "Show"), item("10:00", "11:00", "Ok")]
    issues = check_time_boundaries(rows)
    assert [issue.item.title for issue in issues] == ["Sunrise", "Show"]
    assert check_time_boundaries(rows, min_hour=5, max_hour=24) == []


def test_get_max_time_shift_ignores_locked_items():
    flight = item("05:00", "07:00", "Flight", ItemType.FLIGHT)
    walk = item("09:00", "10:00", "Walk")
    dinner = item("20:00", "21:30", "Dinner", ItemType.RESTAURANT)
    constraints = derive_constraints([day(1, flight, walk, dinner)])
    assert get_max_time_shift([flight, walk, dinner], constraints, Direction.EARLIER) == 180
    assert get_max_time_shift([flight, walk, dinner], constraints, "later") == 90
    assert get_max_time_shift([flight], constraints, Direction.LATER) == 0


def test_validate_modifications_blocks_and_warns():
    flight = item("07:00", "09:00", "Flight", ItemType.FLIGHT, id="f")
    checkin = item("15:00", "15:30", "Check-in", ItemType.CHECKIN, id="c")
    tour = item("10:00", "12:00", "Tour", id="t", booking_url="https://t", estimated_cost=30,
                reservation_reference="R")
    constraints = derive_constraints([day(1, flight, checkin, tour)])
    changes = [
        Change(kind=ChangeKind.UPDATE, day_number=1, item_id="f", after={"title": "x"}),
        Change(kind=ChangeKind.UPDATE, day_number=1, item_id="c", after={"title": "Late check-in"}),
        Change(kind=ChangeKind.MOVE, day_number=1, item_id="c", after={"start_time": "16:00"}),
        Change(kind=ChangeKind.REMOVE, day_number=1, item_id="t"),
    ]
    report = validate_modifications(changes, constraints)
    assert not report.valid
    assert [(row.change.item_id, row.change.kind) for row in report.blocked] == [
        ("f", ChangeKind.UPDATE),
        ("c", ChangeKind.MOVE),
    ]
    assert [row.change.item_id for row in report.warnings] == ["t"]


def test_validate_modifications_without_constraints_is_valid():
    change = Change(kind=ChangeKind.REMOVE, day_number=1, item_id="anything")
    assert validate_modifications([change], []).valid
