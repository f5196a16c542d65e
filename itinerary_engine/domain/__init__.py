"""Domain package exports."""

from itinerary_engine.domain.enums import (
    ChangeKind,
    ConstraintKind,
    DataReliability,
    Direction,
    ErrorType,
    IntentType,
    ItemType,
    MealType,
    ShiftScope,
)
from itinerary_engine.domain.exceptions import DomainError, InvalidSchedule
from itinerary_engine.domain.models import (
    Accommodation,
    Attraction,
    Change,
    Constraint,
    Day,
    ErrorInfo,
    Item,
    ModificationResult,
    Trip,
)

__all__ = [
    "Accommodation",
    "Attraction",
    "Change",
    "ChangeKind",
    "Constraint",
    "ConstraintKind",
    "DataReliability",
    "Day",
    "Direction",
    "DomainError",
    "ErrorInfo",
    "ErrorType",
    "IntentType",
    "InvalidSchedule",
    "Item",
    "ItemType",
    "MealType",
    "ModificationResult",
    "ShiftScope",
    "Trip",
]
