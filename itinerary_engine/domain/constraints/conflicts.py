"""Time conflict and daily boundary checks."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel

from itinerary_engine.domain.constants import DAY_END_MINUTES, DAY_START_MINUTES
from itinerary_engine.domain.constraints.deriver import locked_item_ids
from itinerary_engine.domain.enums import Direction
from itinerary_engine.domain.models import Constraint, Item
from itinerary_engine.domain.schedule import has_late_night, item_span, sort_items


class TimeConflict(BaseModel):
    item1: Item
    item2: Item
    overlap_minutes: int


class BoundaryIssue(BaseModel):
    item: Item
    issue: str


def detect_time_conflicts(items: Iterable[Item]) -> list[TimeConflict]:
    """Report overlaps between neighbours in time order.

    Only adjacent pairs are compared, so a triple overlap shows up as two
    separate reports rather than one merged interval.
    """
    ordered = sort_items(items)
    late_night = has_late_night(ordered)
    conflicts: list[TimeConflict] = []
    for current, following in zip(ordered, ordered[1:]):
        _, current_end = item_span(current, late_night=late_night)
        next_start, _ = item_span(following, late_night=late_night)
        if current_end > next_start:
            conflicts.append(
                TimeConflict(item1=current, item2=following, overlap_minutes=current_end - next_start)
            )
    return conflicts


def check_time_boundaries(
    items: Iterable[Item],
    min_hour: int = DAY_START_MINUTES // 60,
    max_hour: int = DAY_END_MINUTES // 60,
) -> list[BoundaryIssue]:
    issues: list[BoundaryIssue] = []
    for item in items:
        if item.start_minutes < min_hour * 60:
            issues.append(
                BoundaryIssue(
                    item=item,
                    issue=f"{item.title} starts too early ({item.start_time}). Earliest start: {min_hour:02d}:00",
                )
            )
        if item.end_minutes > max_hour * 60:
            issues.append(
                BoundaryIssue(
                    item=item,
                    issue=f"{item.title} ends too late ({item.end_time}). Latest end: {max_hour:02d}:00",
                )
            )
    return issues


def get_max_time_shift(items: Iterable[Item], constraints: Iterable[Constraint], direction: Direction | str) -> int:
    locked = locked_item_ids(constraints)
    mobile = [item for item in items if item.id not in locked]
    if not mobile:
        return 0
    if Direction(direction) == Direction.LATER:
        latest_end = max(item.end_minutes for item in mobile)
        return max(0, DAY_END_MINUTES - latest_end)
    earliest_start = min(item.start_minutes for item in mobile)
    return max(0, earliest_start - DAY_START_MINUTES)


__all__ = [
    "BoundaryIssue",
    "TimeConflict",
    "check_time_boundaries",
    "detect_time_conflicts",
    "get_max_time_shift",
]
