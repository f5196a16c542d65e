"""Insert a new activity into the first free window of a day."""

from __future__ import annotations

from typing import Optional

from itinerary_engine.domain.attractions import match_attraction
from itinerary_engine.domain.constants import (
    NEW_ACTIVITY_MINUTES,
    PROTECTED_MEAL_WINDOWS,
    SLOT_SEARCH_END_MINUTES,
    SLOT_SEARCH_START_MINUTES,
    SLOT_STEP_MINUTES,
    TRANSIT_BUFFER_MINUTES,
)
from itinerary_engine.domain.enums import ChangeKind, DataReliability, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, Item, ModificationResult
from itinerary_engine.domain.operators.common import OperatorContext, activity_count, failure, resort, success
from itinerary_engine.domain.schedule import clone_days, find_day, has_late_night, item_span, minutes_to_time


def _overlaps(start: int, end: int, low: int, high: int) -> bool:
    return start < high and end > low


def find_free_slot(day: Day, length: int = NEW_ACTIVITY_MINUTES) -> Optional[int]:
    """Earliest aligned start for a window of ``length`` minutes, or None."""
    late_night = has_late_night(day.items)
    busy = [item_span(item, late_night=late_night) for item in day.items]
    start = SLOT_SEARCH_START_MINUTES
    while start + length <= SLOT_SEARCH_END_MINUTES:
        end = start + length
        clear = not any(
            _overlaps(start, end, low - TRANSIT_BUFFER_MINUTES, high + TRANSIT_BUFFER_MINUTES)
            for low, high in busy
        )
        if clear and not any(_overlaps(start, end, low, high) for low, high in PROTECTED_MEAL_WINDOWS):
            return start
        start += SLOT_STEP_MINUTES
    return None


def _candidate_days(days: list[Day]) -> list[Day]:
    return sorted(days, key=lambda day: (activity_count(day), day.day_number))


def add_activity(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    title = (params.new_value or "").strip()
    if not title:
        return failure(
            days,
            rollback_data,
            "Which activity should be added?",
            ErrorType.CONSTRAINT_VIOLATION,
        )
    if not days:
        return failure(days, rollback_data, "The itinerary has no days.", ErrorType.NO_SLOT_AVAILABLE)

    new_days = clone_days(days)
    if params.day_numbers:
        requested = find_day(new_days, params.day_numbers[0])
        if requested is None:
            return failure(
                days,
                rollback_data,
                f"Day {params.day_numbers[0]} does not exist in your itinerary.",
                ErrorType.ITEM_NOT_FOUND,
            )
        candidates = [requested]
    else:
        candidates = _candidate_days(new_days)

    target: Optional[Day] = None
    slot: Optional[int] = None
    for day in candidates:
        slot = find_free_slot(day)
        if slot is not None:
            target = day
            break

    if target is None or slot is None:
        tried = {day.day_number for day in candidates}
        others = [day for day in _candidate_days(new_days) if day.day_number not in tried]
        alternative = next((day for day in others if find_free_slot(day) is not None), None)
        suggestion = f"Add {title} on day {alternative.day_number}" if alternative is not None else None
        where = f"day {candidates[0].day_number}" if params.day_numbers else "any day"
        return failure(
            days,
            rollback_data,
            f"No free {NEW_ACTIVITY_MINUTES}-minute window was found on {where}.",
            ErrorType.NO_SLOT_AVAILABLE,
            suggestion=suggestion,
        )

    attraction = match_attraction(ctx.trip.attraction_pool, title)
    item = Item(
        id=ctx.id_factory(),
        type=ItemType.ACTIVITY,
        title=title,
        description=attraction.description if attraction is not None else "",
        day_number=target.day_number,
        start_time=minutes_to_time(slot),
        end_time=minutes_to_time(slot + NEW_ACTIVITY_MINUTES),
        estimated_cost=attraction.estimated_cost if attraction is not None else None,
        booking_url=attraction.booking_url if attraction is not None else None,
        location_name=attraction.name if attraction is not None else title,
        latitude=attraction.latitude if attraction is not None else None,
        longitude=attraction.longitude if attraction is not None else None,
        data_reliability=DataReliability.GENERATED,
    )
    target.items.append(item)
    resort(target)

    change = Change(
        kind=ChangeKind.ADD,
        day_number=target.day_number,
        item_id=item.id,
        new_item=item.model_copy(deep=True),
        after={"start_time": item.start_time, "end_time": item.end_time},
        description=f"Added \"{title}\" at {item.start_time}",
    )
    warnings: list[str] = []
    if not params.day_numbers and len(days) > 1:
        warnings.append(f"\"{title}\" was placed on day {target.day_number}, the least busy day with room.")
    return success(
        new_days,
        rollback_data,
        [change],
        f"Added \"{title}\" on day {target.day_number} from {item.start_time} to {item.end_time}.",
        warnings,
    )


__all__ = ["add_activity", "find_free_slot"]
