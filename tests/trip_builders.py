"""Small builders shared by the test modules (importable because tests/ holds the root conftest)."""

from __future__ import annotations

import itertools
from typing import Any

from itinerary_engine.domain.enums import ItemType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Day, Item
from itinerary_engine.domain.operators import OperatorContext

_ids = itertools.count(1)


def item(start: str, end: str, title: str = "", type: ItemType = ItemType.ACTIVITY, **extra: Any) -> Item:
    item_id = extra.pop("id", None) or f"item-{next(_ids)}"
    return Item(
        id=item_id,
        type=type,
        title=title or item_id,
        start_time=start,
        end_time=end,
        day_number=extra.pop("day_number", 1),
        **extra,
    )


def day(number: int, *items: Item, **extra: Any) -> Day:
    for row in items:
        row.day_number = number
    return Day(day_number=number, items=list(items), **extra)


def params(**values: Any) -> IntentParameters:
    return IntentParameters(**values)


def sequential_ids(prefix: str = "new"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def context(**values: Any) -> OperatorContext:
    return OperatorContext(**values)


def times(target: Day) -> list[tuple[str, str, str]]:
    return [(row.title, row.start_time, row.end_time) for row in target.items]


def dump(days: list[Day]) -> list[dict]:
    return [row.model_dump() for row in days]


def run(operator, days: list[Day], ctx: OperatorContext | None = None, **values: Any):
    from itinerary_engine.domain.constraints import derive_constraints
    from itinerary_engine.domain.schedule import clone_days

    return operator(
        IntentParameters(**values),
        days,
        derive_constraints(days),
        clone_days(days),
        ctx or OperatorContext(),
    )
