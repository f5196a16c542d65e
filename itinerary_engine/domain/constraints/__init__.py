"""Constraint derivation, conflict detection and change validation."""

from itinerary_engine.domain.constraints.conflicts import (
    BoundaryIssue,
    TimeConflict,
    check_time_boundaries,
    detect_time_conflicts,
    get_max_time_shift,
)
from itinerary_engine.domain.constraints.deriver import (
    ConstraintDeriver,
    constraint_index,
    derive_constraints,
    locked_item_ids,
)
from itinerary_engine.domain.constraints.validation import ValidationReport, validate_modifications

__all__ = [
    "BoundaryIssue",
    "ConstraintDeriver",
    "TimeConflict",
    "ValidationReport",
    "check_time_boundaries",
    "constraint_index",
    "derive_constraints",
    "detect_time_conflicts",
    "get_max_time_shift",
    "locked_item_ids",
    "validate_modifications",
]
