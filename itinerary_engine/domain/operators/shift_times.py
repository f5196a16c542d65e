"""Shift the mobile items of one or more days earlier or later."""

from __future__ import annotations

from itinerary_engine.domain.constants import (
    ANCHOR_GAP_MINUTES,
    DAY_END_MINUTES,
    DAY_START_MINUTES,
    DEFAULT_LUNCH_ANCHOR_MINUTES,
    DEFAULT_SHIFT_MINUTES,
    LUNCH_ANCHOR_WINDOW,
    MIN_ITEM_MINUTES,
    SHIFT_FIXED_TYPES,
)
from itinerary_engine.domain.constraints.conflicts import get_max_time_shift
from itinerary_engine.domain.constraints.deriver import locked_item_ids
from itinerary_engine.domain.enums import ChangeKind, Direction, ErrorType, ItemType, ShiftScope
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, Item, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    add_warning,
    booking_warning,
    conflict_warnings,
    failure,
    plural,
    resort,
    success,
    sync_duration,
    target_day_numbers,
)
from itinerary_engine.domain.schedule import clone_days, find_day, minutes_to_time, sort_items, span_minutes


def _midday_anchor(day: Day) -> Item | None:
    low, high = LUNCH_ANCHOR_WINDOW
    for item in sort_items(day.items):
        if item.type == ItemType.RESTAURANT and low <= item.start_minutes < high:
            return item
    return None


def _in_scope(item: Item, scope: ShiftScope, anchor: Item | None) -> bool:
    if scope == ShiftScope.FULL_DAY:
        return True
    if anchor is not None and item.id == anchor.id:
        return False
    if scope == ShiftScope.MORNING_ONLY:
        limit = anchor.start_minutes if anchor is not None else DEFAULT_LUNCH_ANCHOR_MINUTES
        return item.start_minutes < limit
    limit = anchor.end_minutes if anchor is not None else DEFAULT_LUNCH_ANCHOR_MINUTES
    return item.start_minutes >= limit


def _fit_around_anchor(
    start: int,
    end: int,
    scope: ShiftScope,
    anchor: Item | None,
) -> tuple[int, int, bool]:
    """Clip a shifted range so it stays clear of the midday meal.

    Returns the new range and whether it was clipped.
    """
    if anchor is None:
        return start, end, False
    if scope == ShiftScope.MORNING_ONLY and end > anchor.start_minutes:
        return start, anchor.start_minutes - ANCHOR_GAP_MINUTES, True
    if scope == ShiftScope.AFTERNOON_ONLY and start < anchor.end_minutes:
        return anchor.end_minutes + ANCHOR_GAP_MINUTES, end, True
    return start, end, False


def _days_label(targets: list[int], days: list[Day]) -> str:
    if len(targets) == len(days) and set(targets) == {day.day_number for day in days}:
        return "all days"
    label = "day" if len(targets) == 1 else "days"
    return f"{label} {', '.join(str(number) for number in targets)}"


def shift_times(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    amount = DEFAULT_SHIFT_MINUTES if params.time_shift is None else params.time_shift
    direction = params.direction or Direction.LATER
    scope = params.scope or ShiftScope.FULL_DAY
    delta = amount if direction == Direction.LATER else -amount
    targets = target_day_numbers(params, days)

    if delta == 0:
        return failure(
            days,
            rollback_data,
            "A zero-minute shift leaves the schedule unchanged.",
            ErrorType.CONSTRAINT_VIOLATION,
        )

    locked = locked_item_ids(constraints)
    new_days = clone_days(days)
    changes: list[Change] = []
    warnings: list[str] = []

    for day in new_days:
        if day.day_number not in targets:
            continue
        anchor = _midday_anchor(day)
        touched: set[str] = set()
        removed: set[str] = set()
        for item in day.items:
            if item.id in locked or item.type in SHIFT_FIXED_TYPES:
                continue
            if not _in_scope(item, scope, anchor):
                continue

            new_start = item.start_minutes + delta
            new_end = new_start + span_minutes(item.start_time, item.end_time)
            if new_start < DAY_START_MINUTES:
                warnings.append(f"{item.title} cannot start before {minutes_to_time(DAY_START_MINUTES)}.")
                continue
            if new_end > DAY_END_MINUTES:
                warnings.append(f"{item.title} cannot end after {minutes_to_time(DAY_END_MINUTES)}.")
                continue

            new_start, new_end, clipped = _fit_around_anchor(new_start, new_end, scope, anchor)
            before = {"start_time": item.start_time, "end_time": item.end_time}
            if clipped and new_end - new_start < MIN_ITEM_MINUTES:
                removed.add(item.id)
                changes.append(
                    Change(
                        kind=ChangeKind.REMOVE,
                        day_number=day.day_number,
                        item_id=item.id,
                        before={"title": item.title, **before},
                        description=f"Removed \"{item.title}\": too little time left around {anchor.title}",
                    )
                )
                warnings.append(f"{item.title} was removed because less than {MIN_ITEM_MINUTES} minutes remained.")
                continue
            if clipped:
                warnings.append(f"{item.title} was shortened to avoid overlapping {anchor.title}.")

            add_warning(warnings, booking_warning(item, constraints))
            item.start_time = minutes_to_time(new_start)
            item.end_time = minutes_to_time(new_end)
            sync_duration(item)
            touched.add(item.id)
            changes.append(
                Change(
                    kind=ChangeKind.UPDATE,
                    day_number=day.day_number,
                    item_id=item.id,
                    before=before,
                    after={"start_time": item.start_time, "end_time": item.end_time},
                    description=f"{item.title}: {before['start_time']} → {item.start_time}",
                )
            )

        if removed:
            day.items = [item for item in day.items if item.id not in removed]
        resort(day)
        warnings.extend(conflict_warnings(day, touched))

    if not changes:
        suggestion = None
        first = find_day(days, targets[0]) if targets else None
        if first is not None:
            room = get_max_time_shift(
                [item for item in first.items if item.type not in SHIFT_FIXED_TYPES],
                constraints,
                direction,
            )
            if 0 < room < amount:
                suggestion = f"Shift day {first.day_number} activities {room} minutes {direction.value}"
        return failure(
            days,
            rollback_data,
            "No activity could be shifted. Fixed times (flights, hotel) cannot be changed.",
            ErrorType.CONSTRAINT_VIOLATION,
            suggestion=suggestion,
            warnings=warnings,
        )

    moved = sum(1 for change in changes if change.kind == ChangeKind.UPDATE)
    return success(
        new_days,
        rollback_data,
        changes,
        f"Shifted {plural(moved, 'activity', 'activities')} {amount} minutes {direction.value} ({_days_label(targets, days)}).",
        warnings,
    )


__all__ = ["shift_times"]
