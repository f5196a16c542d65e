"""Base types for item constraint rules."""

from __future__ import annotations

from typing import Optional, Protocol

from itinerary_engine.domain.models import Constraint, Item


class ConstraintRule(Protocol):
    """Single-responsibility rule: return a constraint for the item or None."""

    def derive(self, item: Item) -> Optional[Constraint]:
        ...


__all__ = ["ConstraintRule"]
