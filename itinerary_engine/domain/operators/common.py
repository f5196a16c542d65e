"""Shared plumbing for the mutation operators."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Protocol

from itinerary_engine.domain.constraints.conflicts import detect_time_conflicts
from itinerary_engine.domain.constraints.deriver import LOCKING_KINDS, constraint_index
from itinerary_engine.domain.enums import ConstraintKind, ErrorType, ItemType
from itinerary_engine.domain.intent import IntentParameters, TripModificationContext
from itinerary_engine.domain.models import Change, Constraint, Day, ErrorInfo, Item, ModificationResult
from itinerary_engine.domain.schedule import sort_items, span_minutes, titles_match

if TYPE_CHECKING:
    from itinerary_engine.tools.interfaces import GeocodingTool


def _new_item_id() -> str:
    return str(uuid.uuid4())


@dataclass
class OperatorContext:
    trip: TripModificationContext = field(default_factory=TripModificationContext)
    geocoder: Optional["GeocodingTool"] = None
    id_factory: Callable[[], str] = _new_item_id


class Operator(Protocol):
    def __call__(
        self,
        params: IntentParameters,
        days: list[Day],
        constraints: list[Constraint],
        rollback_data: list[Day],
        ctx: OperatorContext,
    ) -> ModificationResult: ...


def failure(
    days: list[Day],
    rollback_data: list[Day],
    explanation: str,
    error_type: ErrorType,
    *,
    suggestion: Optional[str] = None,
    warnings: Optional[list[str]] = None,
) -> ModificationResult:
    return ModificationResult(
        success=False,
        changes=[],
        explanation=explanation,
        warnings=list(warnings or []),
        new_days=list(days),
        rollback_data=rollback_data,
        error_info=ErrorInfo(type=error_type, message=explanation, alternative_suggestion=suggestion),
    )


def success(
    new_days: list[Day],
    rollback_data: list[Day],
    changes: list[Change],
    explanation: str,
    warnings: Optional[list[str]] = None,
) -> ModificationResult:
    return ModificationResult(
        success=True,
        changes=changes,
        explanation=explanation,
        warnings=list(warnings or []),
        new_days=new_days,
        rollback_data=rollback_data,
    )


def target_day_numbers(params: IntentParameters, days: Iterable[Day]) -> list[int]:
    if params.day_numbers:
        return list(params.day_numbers)
    return [day.day_number for day in days]


def in_scope(day: Day, params: IntentParameters) -> bool:
    return not params.day_numbers or day.day_number in params.day_numbers


def find_target(
    days: Iterable[Day],
    params: IntentParameters,
    *,
    item_types: Optional[frozenset[ItemType]] = None,
) -> tuple[Day, Item] | None:
    """First item matching the target id or title, in day order."""
    for day in days:
        if not in_scope(day, params):
            continue
        for item in day.items:
            if item_types is not None and item.type not in item_types:
                continue
            if params.target_item_id and item.id == params.target_item_id:
                return day, item
            if params.target_activity and titles_match(params.target_activity, item.title):
                return day, item
    return None


def blocking_constraint(item: Item, constraints: Iterable[Constraint]) -> Constraint | None:
    constraint = constraint_index(constraints).get(item.id)
    if constraint is not None and constraint.kind in LOCKING_KINDS:
        return constraint
    return None


def booking_warning(item: Item, constraints: Iterable[Constraint]) -> str | None:
    constraint = constraint_index(constraints).get(item.id)
    if constraint is not None and constraint.kind == ConstraintKind.BOOKING_REQUIRED:
        return constraint.reason
    return None


def activity_count(day: Day) -> int:
    return sum(1 for item in day.items if item.type == ItemType.ACTIVITY)


def busiest_day(days: Iterable[Day]) -> Day | None:
    best: Day | None = None
    for day in days:
        if best is None or activity_count(day) > activity_count(best):
            best = day
    return best


def resort(day: Day) -> None:
    day.items = sort_items(day.items)


def sync_duration(item: Item) -> None:
    item.duration = span_minutes(item.start_time, item.end_time)


def plural(count: int, word: str, word_plural: Optional[str] = None) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word_plural or word + 's'}"


def conflict_warnings(day: Day, touched_ids: set[str]) -> list[str]:
    """Overlaps in the day that involve at least one touched item."""
    rows: list[str] = []
    for conflict in detect_time_conflicts(day.items):
        if conflict.item1.id not in touched_ids and conflict.item2.id not in touched_ids:
            continue
        rows.append(
            f"Day {day.day_number}: {conflict.item1.title} overlaps {conflict.item2.title} "
            f"by {conflict.overlap_minutes} min."
        )
    return rows


def add_warning(warnings: list[str], text: Optional[str]) -> None:
    if text and text not in warnings:
        warnings.append(text)


__all__ = [
    "Operator",
    "OperatorContext",
    "activity_count",
    "add_warning",
    "blocking_constraint",
    "conflict_warnings",
    "booking_warning",
    "busiest_day",
    "failure",
    "find_target",
    "in_scope",
    "plural",
    "resort",
    "success",
    "sync_duration",
    "target_day_numbers",
]
