"""Route a classified intent to its mutation operator."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from itinerary_engine.application.contracts import IntentEnvelope
from itinerary_engine.domain.constraints import derive_constraints, validate_modifications
from itinerary_engine.domain.enums import ErrorType, IntentType
from itinerary_engine.domain.intent import TripModificationContext
from itinerary_engine.domain.models import Constraint, Day, ErrorInfo, ModificationResult
from itinerary_engine.domain.operators import (
    Operator,
    OperatorContext,
    add_activity,
    adjust_duration,
    change_meal,
    extend_free_time,
    insert_day,
    remove_activity,
    reorder_day,
    shift_times,
    swap_activity,
)
from itinerary_engine.domain.schedule import clone_days
from itinerary_engine.infrastructure.logging import StructuredLogger, get_logger
from itinerary_engine.tools.interfaces import GeocodingTool

_logger = logging.getLogger("itinerary-engine.dispatch")

OPERATORS: dict[IntentType, Operator] = {
    IntentType.SHIFT_TIMES: shift_times,
    IntentType.SWAP_ACTIVITY: swap_activity,
    IntentType.ADD_ACTIVITY: add_activity,
    IntentType.REMOVE_ACTIVITY: remove_activity,
    IntentType.EXTEND_FREE_TIME: extend_free_time,
    IntentType.REORDER_DAY: reorder_day,
    IntentType.CHANGE_RESTAURANT: change_meal,
    IntentType.ADJUST_DURATION: adjust_duration,
    IntentType.ADD_DAY: insert_day,
}

# Answered by the classifier itself; no schedule change.
PASS_THROUGH = frozenset({IntentType.CLARIFICATION, IntentType.GENERAL_QUESTION})

_unrouted = set(IntentType) - set(OPERATORS) - PASS_THROUGH
if _unrouted:
    raise RuntimeError(f"intent types without an operator: {sorted(t.value for t in _unrouted)}")


def _generic_failure(days: list[Day], rollback: list[Day], explanation: str) -> ModificationResult:
    return ModificationResult(
        success=False,
        explanation=explanation,
        new_days=list(days),
        rollback_data=rollback,
    )


def _apply_safety_net(
    result: ModificationResult,
    days: list[Day],
    rollback: list[Day],
    constraints: list[Constraint],
) -> ModificationResult:
    report = validate_modifications(result.changes, constraints)
    if not report.valid:
        reason = report.blocked[0].constraint.reason
        return ModificationResult(
            success=False,
            explanation=reason,
            new_days=list(days),
            rollback_data=rollback,
            error_info=ErrorInfo(type=ErrorType.IMMUTABLE_ITEM, message=reason),
        )
    warnings = list(result.warnings)
    for row in report.warnings:
        if row.constraint.reason and row.constraint.reason not in warnings:
            warnings.append(row.constraint.reason)
    return result.model_copy(update={"warnings": warnings})


def dispatch(
    intent: IntentEnvelope,
    days: list[Day],
    trip_context: Optional[TripModificationContext] = None,
    *,
    geocoder: Optional[GeocodingTool] = None,
    id_factory: Optional[Callable[[], str]] = None,
    logger: Optional[StructuredLogger] = None,
) -> ModificationResult:
    """Run the operator for ``intent`` against ``days``.

    Never raises: unsupported intents and operator exceptions come back as a
    failed result carrying the untouched days and the rollback snapshot.
    """
    log = logger or get_logger()
    rollback = clone_days(days)

    try:
        intent_type = IntentType(intent.type)
    except ValueError:
        log.warning("dispatch", f"unsupported intent type: {intent.type}")
        return _generic_failure(days, rollback, f"Unsupported modification type: {intent.type}.")

    if intent_type in PASS_THROUGH:
        return ModificationResult(
            success=True,
            explanation=intent.explanation,
            new_days=list(days),
            rollback_data=rollback,
        )

    ctx = OperatorContext(trip=trip_context or TripModificationContext(), geocoder=geocoder)
    if id_factory is not None:
        ctx.id_factory = id_factory

    operator = OPERATORS[intent_type]
    node = intent_type.value
    log.node_start(node, confidence=intent.confidence)
    try:
        constraints = derive_constraints(days)
        result = operator(intent.parameters, days, constraints, rollback, ctx)
        if result.success:
            result = _apply_safety_net(result, days, rollback, constraints)
    except Exception as exc:  # converted to a failed result at this boundary
        _logger.exception("Operator %s raised", node)
        log.error(node, f"{type(exc).__name__}: {exc}")
        return _generic_failure(days, rollback, "The modification could not be applied. Please try again.")

    log.node_end(
        node,
        changes_count=len(result.changes),
        warnings_count=len(result.warnings),
        success=result.success,
        error_type=result.error_info.type.value if result.error_info else None,
    )
    return result


__all__ = ["OPERATORS", "PASS_THROUGH", "dispatch"]
