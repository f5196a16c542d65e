"""Free up afternoon time by dropping the last afternoon activity of each day."""

from __future__ import annotations

from itinerary_engine.domain.constants import AFTERNOON_START_MINUTES
from itinerary_engine.domain.constraints.deriver import locked_item_ids
from itinerary_engine.domain.enums import ChangeKind, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    add_warning,
    booking_warning,
    failure,
    plural,
    success,
    target_day_numbers,
)
from itinerary_engine.domain.schedule import clone_days, sort_items


def extend_free_time(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    targets = target_day_numbers(params, days)
    locked = locked_item_ids(constraints)
    new_days = clone_days(days)
    changes: list[Change] = []
    warnings: list[str] = []

    for day in new_days:
        if day.day_number not in targets:
            continue
        mobile = [item for item in sort_items(day.items) if item.type == ItemType.ACTIVITY and item.id not in locked]
        if len(mobile) <= 1:
            continue
        afternoon = [item for item in mobile if item.start_minutes >= AFTERNOON_START_MINUTES]
        if not afternoon:
            continue
        target = afternoon[-1]
        add_warning(warnings, booking_warning(target, constraints))
        day.items = [item for item in day.items if item.id != target.id]
        changes.append(
            Change(
                kind=ChangeKind.REMOVE,
                day_number=day.day_number,
                item_id=target.id,
                before={"title": target.title, "start_time": target.start_time, "end_time": target.end_time},
                description=f"Removed \"{target.title}\" to free up time",
            )
        )

    if not changes:
        return failure(
            days,
            rollback_data,
            "No free time could be created: these days have no removable afternoon activity.",
            ErrorType.CONSTRAINT_VIOLATION,
            warnings=warnings,
        )

    return success(
        new_days,
        rollback_data,
        changes,
        f"Freed up time by removing {plural(len(changes), 'afternoon activity', 'afternoon activities')}.",
        warnings,
    )


__all__ = ["extend_free_time"]
