"""Validate proposed changes against derived constraints."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from itinerary_engine.domain.constraints.deriver import constraint_index
from itinerary_engine.domain.enums import ChangeKind, ConstraintKind
from itinerary_engine.domain.models import Change, Constraint


class ConstrainedChange(BaseModel):
    change: Change
    constraint: Constraint


class ValidationReport(BaseModel):
    valid: bool = True
    blocked: list[ConstrainedChange] = Field(default_factory=list)
    warnings: list[ConstrainedChange] = Field(default_factory=list)


_IMMUTABLE_BLOCKED = frozenset({ChangeKind.REMOVE, ChangeKind.UPDATE, ChangeKind.MOVE})


def _is_blocked(change: Change, constraint: Constraint) -> bool:
    if constraint.kind == ConstraintKind.IMMUTABLE:
        return change.kind in _IMMUTABLE_BLOCKED
    if constraint.kind == ConstraintKind.TIME_LOCKED:
        if change.kind == ChangeKind.REMOVE:
            return True
        return change.kind in (ChangeKind.UPDATE, ChangeKind.MOVE) and "start_time" in (change.after or {})
    return False


def validate_modifications(changes: Iterable[Change], constraints: Iterable[Constraint]) -> ValidationReport:
    by_item = constraint_index(constraints)
    report = ValidationReport()
    for change in changes:
        constraint = by_item.get(change.item_id or "")
        if constraint is None:
            continue
        if _is_blocked(change, constraint):
            report.blocked.append(ConstrainedChange(change=change, constraint=constraint))
        elif constraint.kind == ConstraintKind.BOOKING_REQUIRED:
            report.warnings.append(ConstrainedChange(change=change, constraint=constraint))
    report.valid = not report.blocked
    return report


__all__ = ["ConstrainedChange", "ValidationReport", "validate_modifications"]
