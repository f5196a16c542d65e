"""Constraint deriver: first matching rule wins for each item."""

from __future__ import annotations

from typing import Iterable

from itinerary_engine.domain.constraints.base import ConstraintRule
from itinerary_engine.domain.constraints.rules import (
    FlightRule,
    HotelScheduleRule,
    PaidReservationRule,
    ReservedTransportRule,
)
from itinerary_engine.domain.enums import ConstraintKind
from itinerary_engine.domain.models import Constraint, Day, Item

LOCKING_KINDS = frozenset({ConstraintKind.IMMUTABLE, ConstraintKind.TIME_LOCKED})


class ConstraintDeriver:
    def __init__(self, rules: tuple[ConstraintRule, ...]) -> None:
        self._rules = rules

    @classmethod
    def default(cls) -> "ConstraintDeriver":
        # Priority order: immutable > time_locked > booking_required.
        return cls(
            (
                FlightRule(),
                HotelScheduleRule(),
                PaidReservationRule(),
                ReservedTransportRule(),
            )
        )

    def derive_item(self, item: Item) -> Constraint | None:
        for rule in self._rules:
            constraint = rule.derive(item)
            if constraint is not None:
                return constraint
        return None

    def derive(self, days: Iterable[Day]) -> list[Constraint]:
        constraints: list[Constraint] = []
        for day in days:
            for item in day.items:
                constraint = self.derive_item(item)
                if constraint is not None:
                    constraints.append(constraint)
        return constraints


_DEFAULT_DERIVER = ConstraintDeriver.default()


def derive_constraints(days: Iterable[Day]) -> list[Constraint]:
    return _DEFAULT_DERIVER.derive(days)


def constraint_index(constraints: Iterable[Constraint]) -> dict[str, Constraint]:
    return {constraint.item_id: constraint for constraint in constraints}


def locked_item_ids(constraints: Iterable[Constraint]) -> set[str]:
    return {constraint.item_id for constraint in constraints if constraint.kind in LOCKING_KINDS}


__all__ = [
    "ConstraintDeriver",
    "LOCKING_KINDS",
    "constraint_index",
    "derive_constraints",
    "locked_item_ids",
]
