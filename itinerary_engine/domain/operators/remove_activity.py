"""Remove one item matched by id or fuzzy title."""

from __future__ import annotations

from itinerary_engine.domain.enums import ChangeKind, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    blocking_constraint,
    booking_warning,
    busiest_day,
    failure,
    find_target,
    success,
)
from itinerary_engine.domain.schedule import clone_days, sort_items


def _removal_suggestion(days: list[Day], constraints: list[Constraint]) -> str | None:
    day = busiest_day(days)
    if day is None:
        return None
    for item in sort_items(day.items):
        if item.type == ItemType.ACTIVITY and blocking_constraint(item, constraints) is None:
            return f"Remove {item.title} from day {day.day_number}"
    return None


def remove_activity(
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
            "Which activity should be removed? Please name it.",
            ErrorType.ITEM_NOT_FOUND,
            suggestion=_removal_suggestion(days, constraints),
        )

    new_days = clone_days(days)
    match = find_target(new_days, params)
    if match is None:
        label = params.target_activity or params.target_item_id
        return failure(
            days,
            rollback_data,
            f"No activity matches \"{label}\". Check the exact name in your itinerary.",
            ErrorType.ITEM_NOT_FOUND,
            suggestion=_removal_suggestion(days, constraints),
        )

    day, item = match
    blocker = blocking_constraint(item, constraints)
    if blocker is not None:
        return failure(days, rollback_data, blocker.reason, ErrorType.IMMUTABLE_ITEM)

    warnings: list[str] = []
    reason = booking_warning(item, constraints)
    if reason:
        warnings.append(reason)

    day.items = [row for row in day.items if row.id != item.id]
    change = Change(
        kind=ChangeKind.REMOVE,
        day_number=day.day_number,
        item_id=item.id,
        before={"title": item.title, "start_time": item.start_time, "end_time": item.end_time},
        description=f"Removed \"{item.title}\" (day {day.day_number})",
    )
    return success(new_days, rollback_data, [change], f"Removed \"{item.title}\" from your itinerary.", warnings)


__all__ = ["remove_activity"]
