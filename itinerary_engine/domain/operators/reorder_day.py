"""Reverse the order of a day's mobile items and recompute their times."""

from __future__ import annotations

from itinerary_engine.domain.constants import MINUTES_PER_DAY, REORDER_FIXED_TYPES, TRANSITION_MINUTES
from itinerary_engine.domain.constraints.conflicts import check_time_boundaries
from itinerary_engine.domain.constraints.deriver import locked_item_ids
from itinerary_engine.domain.enums import ChangeKind, ErrorType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    conflict_warnings,
    failure,
    resort,
    success,
    sync_duration,
)
from itinerary_engine.domain.schedule import clone_days, find_day, has_late_night, item_span, minutes_to_time, sort_items


def reorder_day(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    if not params.day_numbers:
        return failure(
            days,
            rollback_data,
            "Which day should be reorganised?",
            ErrorType.CONSTRAINT_VIOLATION,
            suggestion=f"Reorder day {days[0].day_number}" if days else None,
        )

    day_number = params.day_numbers[0]
    new_days = clone_days(days)
    day = find_day(new_days, day_number)
    if day is None:
        return failure(
            days,
            rollback_data,
            f"Day {day_number} does not exist in your itinerary.",
            ErrorType.ITEM_NOT_FOUND,
        )

    locked = locked_item_ids(constraints)
    ordered = sort_items(day.items)
    fixed = [item for item in ordered if item.id in locked or item.type in REORDER_FIXED_TYPES]
    mobile = [item for item in ordered if item.id not in locked and item.type not in REORDER_FIXED_TYPES]
    if len(mobile) < 2:
        return failure(
            days,
            rollback_data,
            f"Day {day_number} does not have enough movable activities to reorder.",
            ErrorType.CONSTRAINT_VIOLATION,
        )

    late_night = has_late_night(ordered)
    cursor, _ = item_span(mobile[0], late_night=late_night)
    # Rebased after-midnight starts are written back on the same clock.
    offset = MINUTES_PER_DAY if cursor >= MINUTES_PER_DAY else 0
    changes: list[Change] = []
    for item in reversed(mobile):
        start, end = item_span(item, late_night=late_night)
        duration = item.duration or (end - start)
        new_start = cursor - offset
        if new_start + duration > MINUTES_PER_DAY:
            return failure(
                days,
                rollback_data,
                f"Reordering day {day_number} would push \"{item.title}\" past midnight.",
                ErrorType.CONSTRAINT_VIOLATION,
            )
        before = {"start_time": item.start_time, "end_time": item.end_time}
        item.start_time = minutes_to_time(new_start)
        item.end_time = minutes_to_time(new_start + duration)
        sync_duration(item)
        cursor += duration + TRANSITION_MINUTES
        changes.append(
            Change(
                kind=ChangeKind.MOVE,
                day_number=day_number,
                item_id=item.id,
                before=before,
                after={"start_time": item.start_time, "end_time": item.end_time},
                description=f"{item.title}: {before['start_time']} → {item.start_time}",
            )
        )

    day.items = fixed + mobile
    resort(day)

    warnings = conflict_warnings(day, {item.id for item in mobile})
    warnings.extend(issue.issue for issue in check_time_boundaries(mobile))
    return success(
        new_days,
        rollback_data,
        changes,
        f"Reorganised day {day_number}: the order of its activities is now reversed.",
        warnings,
    )


__all__ = ["reorder_day"]
