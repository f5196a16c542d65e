"""Lengthen or shorten one item by moving its end time."""

from __future__ import annotations

from itinerary_engine.domain.constants import DAY_END_MINUTES, DEFAULT_DURATION_DELTA_MINUTES, MIN_ITEM_MINUTES
from itinerary_engine.domain.enums import ChangeKind, Direction, ErrorType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    blocking_constraint,
    booking_warning,
    conflict_warnings,
    failure,
    find_target,
    success,
    sync_duration,
)
from itinerary_engine.domain.schedule import clone_days, minutes_to_time


def adjust_duration(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    if not params.target_activity and not params.target_item_id:
        return failure(
            days,
            rollback_data,
            "Which activity should be made longer or shorter?",
            ErrorType.ITEM_NOT_FOUND,
        )

    delta = params.duration or DEFAULT_DURATION_DELTA_MINUTES
    extend = params.direction != Direction.EARLIER
    new_days = clone_days(days)
    match = find_target(new_days, params)
    if match is None:
        return failure(
            days,
            rollback_data,
            f"\"{params.target_activity or params.target_item_id}\" was not found in your itinerary.",
            ErrorType.ITEM_NOT_FOUND,
        )

    day, item = match
    blocker = blocking_constraint(item, constraints)
    if blocker is not None:
        return failure(days, rollback_data, blocker.reason, ErrorType.IMMUTABLE_ITEM)

    start = item.start_minutes
    end = item.end_minutes if item.end_minutes >= start else start + (item.duration or 0)
    if extend:
        new_end = end + delta
    else:
        new_end = min(end, max(start + MIN_ITEM_MINUTES, end - delta))

    if new_end > DAY_END_MINUTES:
        room = DAY_END_MINUTES - end
        suggestion = f"Extend {item.title} by {room} minutes" if room > 0 else None
        return failure(
            days,
            rollback_data,
            f"\"{item.title}\" would end after {minutes_to_time(DAY_END_MINUTES)}.",
            ErrorType.CONSTRAINT_VIOLATION,
            suggestion=suggestion,
        )
    if new_end == end:
        return failure(
            days,
            rollback_data,
            f"\"{item.title}\" cannot be shorter than {MIN_ITEM_MINUTES} minutes.",
            ErrorType.CONSTRAINT_VIOLATION,
        )

    warnings: list[str] = []
    reason = booking_warning(item, constraints)
    if reason:
        warnings.append(reason)

    old_end = item.end_time
    item.end_time = minutes_to_time(new_end)
    sync_duration(item)
    warnings.extend(conflict_warnings(day, {item.id}))

    sign = "+" if extend else "-"
    change = Change(
        kind=ChangeKind.UPDATE,
        day_number=day.day_number,
        item_id=item.id,
        before={"end_time": old_end},
        after={"end_time": item.end_time},
        description=f"{item.title}: duration {sign}{abs(new_end - end)} min",
    )
    verb = "Added" if extend else "Removed"
    preposition = "to" if extend else "from"
    return success(
        new_days,
        rollback_data,
        [change],
        f"{verb} {abs(new_end - end)} minutes {preposition} \"{item.title}\".",
        warnings,
    )


__all__ = ["adjust_duration"]
