"""Unit tests for the day-level operators: free time, reorder, add, meals, insert-day."""

from __future__ import annotations

import datetime as dt

from itinerary_engine.domain.enums import ChangeKind, DataReliability, ErrorType, ItemType
from itinerary_engine.domain.intent import TripModificationContext
from itinerary_engine.domain.models import Accommodation, Attraction
from itinerary_engine.domain.operators import (
    OperatorContext,
    add_activity,
    change_meal,
    extend_free_time,
    insert_day,
    reorder_day,
)
from itinerary_engine.domain.operators.add_activity import find_free_slot
from trip_builders import day, dump, item, run, sequential_ids, times


# extend-free-time

def test_extend_free_time_needs_an_afternoon_item():
    days = [day(1, item("08:00", "09:00", "A"), item("09:30", "10:30", "B"))]
    result = run(extend_free_time, days)
    assert result.success is False
    assert result.error_info.type == ErrorType.CONSTRAINT_VIOLATION


def test_extend_free_time_removes_last_afternoon_activity():
    days = [day(1, item("08:00", "09:00", "A"), item("09:30", "10:30", "B"), item("15:00", "16:00", "C", id="c"))]
    result = run(extend_free_time, days)
    assert result.success is True
    assert len(result.changes) == 1
    assert result.changes[0].kind == ChangeKind.REMOVE
    assert result.changes[0].item_id == "c"
    assert [row.title for row in result.new_days[0].items] == ["A", "B"]


def test_extend_free_time_skips_days_with_a_single_activity():
    days = [
        day(1, item("15:00", "16:00", "Only one"), item("12:30", "13:30", "Lunch", ItemType.RESTAURANT)),
        day(2, item("10:00", "11:00", "Morning"), item("14:00", "15:00", "Early pm"), item("16:00", "17:00", "Late pm")),
    ]
    result = run(extend_free_time, days)
    assert [(change.day_number, change.description) for change in result.changes] == [
        (2, 'Removed "Late pm" to free up time'),
    ]
    assert len(result.new_days[0].items) == 2


# reorder-day

def test_reorder_reverses_mobile_items_and_keeps_fixed_ones():
    days = [
        day(
            1,
            item("09:00", "10:00", "A"),
            item("10:30", "12:00", "B"),
            item("13:00", "13:30", "C", ItemType.RESTAURANT),
            item("18:00", "20:00", "Flight home", ItemType.FLIGHT),
        )
    ]
    result = run(reorder_day, days, day_numbers=[1])
    assert result.success is True
    assert times(result.new_days[0]) == [
        ("C", "09:00", "09:30"),
        ("B", "10:00", "11:30"),
        ("A", "12:00", "13:00"),
        ("Flight home", "18:00", "20:00"),
    ]
    assert {change.kind for change in result.changes} == {ChangeKind.MOVE}
    assert len(result.changes) == 3


def test_reorder_failures():
    days = [day(1, item("09:00", "10:00", "Solo"), item("15:00", "15:30", "Check-in", ItemType.CHECKIN))]
    assert run(reorder_day, days, day_numbers=[1]).error_info.type == ErrorType.CONSTRAINT_VIOLATION
    assert run(reorder_day, days).error_info.type == ErrorType.CONSTRAINT_VIOLATION
    assert run(reorder_day, days, day_numbers=[4]).error_info.type == ErrorType.ITEM_NOT_FOUND


def test_reorder_can_end_exactly_at_midnight_and_warns():
    days = [day(1, item("20:00", "23:00", "Long show"), item("23:00", "23:30", "Night walk"))]
    result = run(reorder_day, days, day_numbers=[1])
    assert result.success is True
    assert times(result.new_days[0]) == [("Night walk", "20:00", "20:30"), ("Long show", "21:00", "24:00")]
    assert any("ends too late (24:00)" in warning for warning in result.warnings)


def test_reorder_refuses_to_run_past_midnight():
    days = [day(1, item("20:00", "23:00", "Long show"), item("23:00", "23:50", "Night walk"))]
    result = run(reorder_day, days, day_numbers=[1])
    assert result.success is False
    assert result.error_info.type == ErrorType.CONSTRAINT_VIOLATION
    assert dump(result.new_days) == dump(days)


def test_reorder_reports_resulting_overlap_with_fixed_item():
    days = [
        day(
            1,
            item("09:00", "11:00", "Long"),
            item("11:30", "12:00", "Short"),
            item("13:00", "13:30", "Check-out", ItemType.CHECKOUT),
            item("14:00", "16:00", "After"),
        )
    ]
    result = run(reorder_day, days, day_numbers=[1])
    assert result.success is True
    assert any("overlaps" in warning for warning in result.warnings)


# add-activity

def test_add_activity_takes_the_only_buffered_gap():
    days = [day(1, item("09:00", "13:40", "Morning tour"), item("15:50", "19:30", "Cooking class"))]
    ctx = OperatorContext(id_factory=sequential_ids())
    result = run(add_activity, days, ctx, new_value="Local market", day_numbers=[1])
    assert result.success is True
    added = result.changes[0].new_item
    assert result.changes[0].kind == ChangeKind.ADD
    assert (added.start_time, added.end_time) == ("14:00", "15:30")
    assert added.id == "new-1"
    assert added.data_reliability == DataReliability.GENERATED
    assert [row.title for row in result.new_days[0].items] == ["Morning tour", "Local market", "Cooking class"]


def test_free_slot_avoids_meal_windows():
    # 10:30 sits in the breakfast buffer and 11:00 would run into lunch.
    busy = day(1, item("08:00", "10:20", "Breakfast", ItemType.RESTAURANT), item("14:00", "20:00", "Excursion"))
    assert find_free_slot(busy) is None
    open_day = day(1, item("08:00", "09:00", "Breakfast", ItemType.RESTAURANT))
    assert find_free_slot(open_day) == 10 * 60


def test_add_activity_picks_least_busy_day_and_enriches_from_pool():
    pool = [
        Attraction(id="mkt", name="Time Out Market", description="Food hall", estimated_cost=0,
                   latitude=38.7, longitude=-9.14, booking_url=None),
    ]
    days = [
        day(1, item("10:00", "11:00", "A"), item("14:00", "15:00", "B")),
        day(2, item("10:00", "11:00", "C")),
    ]
    ctx = OperatorContext(trip=TripModificationContext(destination="Lisbon", attraction_pool=pool))
    result = run(add_activity, days, ctx, new_value="Time Out Market")
    assert result.success is True
    added = result.changes[0].new_item
    assert added.day_number == 2
    assert (added.start_time, added.end_time) == ("13:30", "15:00")
    assert (added.latitude, added.longitude, added.description) == (38.7, -9.14, "Food hall")


def test_add_activity_without_room_suggests_another_day():
    full = day(1, item("09:00", "21:00", "Marathon"))
    days = [full, day(2, item("09:00", "10:00", "Walk"))]
    result = run(add_activity, days, new_value="Museum", day_numbers=[1])
    assert result.success is False
    assert result.error_info.type == ErrorType.NO_SLOT_AVAILABLE
    assert result.error_info.alternative_suggestion == "Add Museum on day 2"
    assert dump(result.new_days) == dump(days)


def test_add_activity_requires_a_title():
    result = run(add_activity, [day(1)])
    assert result.success is False


# change-meal

def _meals():
    return [
        day(
            1,
            item("08:00", "08:45", "Hotel breakfast", ItemType.RESTAURANT, id="bf"),
            item("12:30", "13:30", "Bistro du coin", ItemType.RESTAURANT, id="lunch",
                 booking_url="https://r", estimated_cost=30, reservation_reference="TF-1"),
            item("19:30", "21:00", "Le Grand Café", ItemType.RESTAURANT, id="dinner"),
        )
    ]


def test_change_meal_by_meal_type_and_cuisine():
    result = run(change_meal, _meals(), meal_type="lunch", cuisine_type="Japanese")
    assert result.success is True
    changed = result.new_days[0].items[1]
    assert changed.title == "Japanese restaurant"
    assert changed.description == "Replaces Bistro du coin"
    assert changed.data_reliability == DataReliability.GENERATED
    assert result.warnings


def test_change_meal_window_includes_its_closing_minute():
    days = [day(1, item("10:00", "10:45", "Cafe Flore", ItemType.RESTAURANT, id="late-bf"))]
    result = run(change_meal, days, meal_type="breakfast", new_value="Pasteis de Belem")
    assert result.success is True
    assert result.changes[0].item_id == "late-bf"
    assert result.new_days[0].items[0].title == "Pasteis de Belem"


def test_change_meal_by_title_with_new_name():
    result = run(change_meal, _meals(), target_activity="grand cafe", new_value="Chez Janou")
    assert result.success is True
    assert result.changes[0].item_id == "dinner"
    assert result.new_days[0].items[2].title == "Chez Janou"


def test_change_meal_defaults_to_first_restaurant():
    result = run(change_meal, _meals())
    assert result.changes[0].item_id == "bf"
    assert result.new_days[0].items[0].title == "New restaurant"


def test_change_meal_not_found_suggests_existing_restaurant():
    result = run(change_meal, _meals(), target_activity="sushi bar")
    assert result.success is False
    assert result.error_info.type == ErrorType.ITEM_NOT_FOUND
    assert result.error_info.alternative_suggestion == "Change Hotel breakfast on day 1"


# insert-day

def _three_days():
    return [
        day(1, item("10:00", "11:00", "Arrival walk", id="d1"), date=dt.date(2026, 5, 1)),
        day(2, item("10:00", "11:00", "Museum", id="d2"), date=dt.date(2026, 5, 2)),
        day(3, item("10:00", "11:00", "Departure", id="d3"), date=dt.date(2026, 5, 3)),
    ]


def test_insert_day_renumbers_following_days():
    pool = [
        Attraction(id="a1", name="Belém Tower", duration=60, rating=4.6, must_see=True),
        Attraction(id="a2", name="Alfama District", duration=120, rating=4.7),
        Attraction(id="a3", name="Estrela Garden", duration=60, rating=4.6),
    ]
    ctx = OperatorContext(
        trip=TripModificationContext(
            destination="Lisbon",
            start_date=dt.date(2026, 5, 1),
            accommodation=Accommodation(name="Casa Alfama", price_per_night=110),
            attraction_pool=pool,
        ),
        id_factory=sequential_ids(),
    )
    result = run(insert_day, _three_days(), ctx, insert_after_day=1)
    assert result.success is True
    assert [d.day_number for d in result.new_days] == [1, 2, 3, 4]
    assert [d.date for d in result.new_days] == [dt.date(2026, 5, n) for n in range(1, 5)]
    assert result.new_days[2].items[0].id == "d2"
    assert result.new_days[2].items[0].day_number == 3
    assert result.new_days[3].items[0].day_number == 4

    inserted = result.new_days[1]
    assert times(inserted) == [
        ("Breakfast at Casa Alfama", "09:00", "09:45"),
        ("Belém Tower", "10:00", "11:00"),
        ("Lunch", "12:30", "13:45"),
        ("Alfama District", "14:30", "16:30"),
        ("Estrela Garden", "17:00", "18:00"),
        ("Dinner", "19:30", "21:00"),
    ]
    assert all(row.day_number == 2 for row in inserted.items)
    assert len(result.changes) == 6
    assert all(change.kind == ChangeKind.ADD for change in result.changes)
    assert any("110" in warning for warning in result.warnings)


def test_insert_day_without_pool_uses_free_time():
    result = run(insert_day, _three_days(), insert_after_day=2)
    inserted = result.new_days[2]
    assert inserted.day_number == 3
    assert [row.type for row in inserted.items] == [
        ItemType.RESTAURANT,
        ItemType.FREE_TIME,
        ItemType.RESTAURANT,
        ItemType.FREE_TIME,
        ItemType.RESTAURANT,
    ]
    assert inserted.date == dt.date(2026, 5, 3)
    assert result.new_days[3].date == dt.date(2026, 5, 4)


def test_insert_day_position_rules():
    days = _three_days()
    assert run(insert_day, days, insert_after_day=0).error_info.type == ErrorType.CONSTRAINT_VIOLATION
    appended = run(insert_day, days, insert_after_day=10)
    assert appended.success is True
    assert appended.new_days[-1].day_number == 4
    assert appended.new_days[-1].items[0].type == ItemType.RESTAURANT
    midpoint = run(insert_day, days)
    assert [row.id for row in midpoint.new_days[2].items] == ["d2"]


def test_insert_day_needs_two_days():
    result = run(insert_day, _three_days()[:1], insert_after_day=1)
    assert result.success is False
    assert result.error_info.type == ErrorType.CONSTRAINT_VIOLATION
