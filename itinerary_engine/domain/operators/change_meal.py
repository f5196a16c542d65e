"""Replace the restaurant booked for a meal."""

from __future__ import annotations

from typing import Optional

from itinerary_engine.domain.constants import MEAL_WINDOWS
from itinerary_engine.domain.enums import ChangeKind, DataReliability, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, Item, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    blocking_constraint,
    booking_warning,
    failure,
    find_target,
    in_scope,
    success,
)
from itinerary_engine.domain.schedule import clone_days, sort_items

_RESTAURANT_TYPES = frozenset({ItemType.RESTAURANT})


def _restaurants(days: list[Day], params: IntentParameters) -> list[tuple[Day, Item]]:
    rows: list[tuple[Day, Item]] = []
    for day in days:
        if not in_scope(day, params):
            continue
        rows.extend((day, item) for item in sort_items(day.items) if item.type == ItemType.RESTAURANT)
    return rows


def _resolve(days: list[Day], params: IntentParameters) -> Optional[tuple[Day, Item]]:
    if params.target_activity or params.target_item_id:
        return find_target(days, params, item_types=_RESTAURANT_TYPES)
    candidates = _restaurants(days, params)
    if params.meal_type is not None:
        low, high = MEAL_WINDOWS[params.meal_type]
        for day, item in candidates:
            if low <= item.start_minutes <= high:
                return day, item
        return None
    return candidates[0] if candidates else None


def _new_title(params: IntentParameters) -> str:
    if params.new_value and params.new_value.strip():
        return params.new_value.strip()
    if params.cuisine_type and params.cuisine_type.strip():
        return f"{params.cuisine_type.strip()} restaurant"
    return "New restaurant"


def change_meal(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    new_days = clone_days(days)
    match = _resolve(new_days, params)
    if match is None:
        existing = _restaurants(days, IntentParameters())
        suggestion = None
        if existing:
            day, item = existing[0]
            suggestion = f"Change {item.title} on day {day.day_number}"
        wanted = params.target_activity or (params.meal_type.value if params.meal_type else "meal")
        return failure(
            days,
            rollback_data,
            f"No restaurant matching \"{wanted}\" was found.",
            ErrorType.ITEM_NOT_FOUND,
            suggestion=suggestion,
        )

    day, item = match
    blocker = blocking_constraint(item, constraints)
    if blocker is not None:
        return failure(days, rollback_data, blocker.reason, ErrorType.IMMUTABLE_ITEM)

    warnings: list[str] = []
    reason = booking_warning(item, constraints)
    if reason:
        warnings.append(reason)

    old_title = item.title
    item.title = _new_title(params)
    item.description = f"Replaces {old_title}"
    item.location_name = item.title
    item.booking_url = None
    item.reservation_reference = None
    item.data_reliability = DataReliability.GENERATED

    change = Change(
        kind=ChangeKind.UPDATE,
        day_number=day.day_number,
        item_id=item.id,
        before={"title": old_title},
        after={"title": item.title},
        description=f"{old_title} → {item.title}",
    )
    return success(
        new_days,
        rollback_data,
        [change],
        f"Day {day.day_number}: \"{old_title}\" was replaced by \"{item.title}\".",
        warnings,
    )


__all__ = ["change_meal"]
