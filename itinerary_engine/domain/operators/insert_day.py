"""Insert a new day into the trip and renumber the days after it.

The new day follows a fixed skeleton: breakfast, a morning slot, lunch, an
afternoon slot, an optional late-afternoon slot and dinner. Slots are filled
from the attraction pool when it still has unscheduled entries and fall back
to ``free_time`` placeholders otherwise.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from itinerary_engine.domain.attractions import get_unused_attractions
from itinerary_engine.domain.enums import ChangeKind, DataReliability, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Attraction, Change, Constraint, Day, Item, ModificationResult
from itinerary_engine.domain.operators.common import OperatorContext, failure, success
from itinerary_engine.domain.schedule import clone_days, minutes_to_time, time_to_minutes

# (start, end, cost)
BREAKFAST = ("09:00", "09:45", 10.0)
LUNCH = ("12:30", "13:45", 15.0)
DINNER = ("19:30", "21:00", 25.0)

# (start, fallback end, max minutes)
MORNING_SLOT = ("10:00", "12:00", 120)
AFTERNOON_SLOT = ("14:30", "16:30", 150)
LATE_SLOT = ("17:00", None, 90)


def _meal(ctx: OperatorContext, day_number: int, title: str, slot: tuple[str, str, float]) -> Item:
    start, end, cost = slot
    return Item(
        id=ctx.id_factory(),
        type=ItemType.RESTAURANT,
        title=title,
        day_number=day_number,
        start_time=start,
        end_time=end,
        estimated_cost=cost,
        data_reliability=DataReliability.GENERATED,
    )


def _visit(ctx: OperatorContext, day_number: int, attraction: Attraction, start: str, limit: int) -> Item:
    begin = time_to_minutes(start)
    length = max(30, min(attraction.duration, limit))
    return Item(
        id=ctx.id_factory(),
        type=ItemType.ACTIVITY,
        title=attraction.name,
        description=attraction.description,
        day_number=day_number,
        start_time=start,
        end_time=minutes_to_time(begin + length),
        estimated_cost=attraction.estimated_cost,
        booking_url=attraction.booking_url,
        location_name=attraction.name,
        latitude=attraction.latitude,
        longitude=attraction.longitude,
        data_reliability=DataReliability.GENERATED,
    )


def _free_time(ctx: OperatorContext, day_number: int, start: str, end: str, destination: str) -> Item:
    where = f" in {destination}" if destination else ""
    return Item(
        id=ctx.id_factory(),
        type=ItemType.FREE_TIME,
        title=f"Free time{where}",
        day_number=day_number,
        start_time=start,
        end_time=end,
        data_reliability=DataReliability.GENERATED,
    )


def build_skeleton_day(day_number: int, days: list[Day], ctx: OperatorContext) -> Day:
    trip = ctx.trip
    picks = get_unused_attractions(trip.attraction_pool, days)[:3]
    hotel = trip.accommodation.name if trip.accommodation is not None and trip.accommodation.name else None

    items = [_meal(ctx, day_number, f"Breakfast at {hotel}" if hotel else "Breakfast", BREAKFAST)]
    for index, (start, fallback_end, limit) in enumerate((MORNING_SLOT, AFTERNOON_SLOT)):
        if index < len(picks):
            items.append(_visit(ctx, day_number, picks[index], start, limit))
        else:
            items.append(_free_time(ctx, day_number, start, fallback_end, trip.destination))
        if index == 0:
            items.append(_meal(ctx, day_number, "Lunch", LUNCH))
    if len(picks) > 2:
        start, _, limit = LATE_SLOT
        items.append(_visit(ctx, day_number, picks[2], start, limit))
    items.append(_meal(ctx, day_number, "Dinner", DINNER))

    if picks:
        theme = f"{picks[0].name} and more"
        narrative = "A relaxed extra day built around " + ", ".join(pick.name for pick in picks) + "."
    else:
        theme = f"Free day in {trip.destination}" if trip.destination else "Free day"
        narrative = "An extra day left open to explore at your own pace."
    return Day(day_number=day_number, theme=theme, narrative=narrative, items=items)


def _redate(days: list[Day], start_date: Optional[dt.date]) -> None:
    if start_date is None:
        return
    for day in days:
        day.date = start_date + dt.timedelta(days=day.day_number - 1)


def insert_day(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    if len(days) < 2:
        return failure(
            days,
            rollback_data,
            "A day can only be inserted into a trip of at least two days.",
            ErrorType.CONSTRAINT_VIOLATION,
        )

    if params.insert_after_day is not None:
        after = params.insert_after_day
    elif params.day_numbers:
        after = params.day_numbers[0]
    else:
        after = len(days) // 2
    if after < 1:
        return failure(
            days,
            rollback_data,
            "A new day cannot be placed before the arrival day.",
            ErrorType.CONSTRAINT_VIOLATION,
            suggestion="Add a day after day 1",
        )
    after = min(after, len(days))

    new_days = sorted(clone_days(days), key=lambda day: day.day_number)
    warnings: list[str] = []
    shifted = 0
    for day in new_days:
        if day.day_number > after:
            day.day_number += 1
            shifted += 1
            for item in day.items:
                item.day_number = day.day_number

    inserted = build_skeleton_day(after + 1, new_days, ctx)
    new_days.insert(after, inserted)

    start_date = ctx.trip.start_date or days[0].date
    if start_date is not None:
        _redate(new_days, start_date)
    else:
        previous = new_days[after - 1].date
        if previous is not None:
            inserted.date = previous + dt.timedelta(days=1)

    if shifted:
        warnings.append(f"Later days were renumbered from day {after + 2} onward.")
    accommodation = ctx.trip.accommodation
    if accommodation is not None and accommodation.price_per_night:
        warnings.append(
            f"One more night at {accommodation.name or 'your accommodation'} "
            f"adds about {accommodation.price_per_night:.0f} to the budget."
        )

    changes = [
        Change(
            kind=ChangeKind.ADD,
            day_number=inserted.day_number,
            item_id=item.id,
            new_item=item.model_copy(deep=True),
            description=f"Day {inserted.day_number}: {item.start_time} {item.title}",
        )
        for item in inserted.items
    ]
    return success(
        new_days,
        rollback_data,
        changes,
        f"Added a new day {inserted.day_number} after day {after}: {inserted.theme}.",
        warnings,
    )


__all__ = ["build_skeleton_day", "insert_day"]
