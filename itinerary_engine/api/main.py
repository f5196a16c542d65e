"""FastAPI application exposing the itinerary engine."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from itinerary_engine.adapters.tool_factory import describe_active_tools
from itinerary_engine.api.schemas import (
    ContextRequest,
    ContextResponse,
    DayIssues,
    HealthResponse,
    LayoutRequest,
    LayoutResponse,
    ModificationRequest,
    ValidateRequest,
    ValidateResponse,
)
from itinerary_engine.application.trip_edit_service import TripEditService, build_trip_context
from itinerary_engine.config.settings import load_settings
from itinerary_engine.domain.constraints import (
    check_time_boundaries,
    derive_constraints,
    detect_time_conflicts,
    validate_modifications,
)
from itinerary_engine.domain.layout import layout_day, total_rows
from itinerary_engine.domain.models import ModificationResult

_api_logger = logging.getLogger("itinerary-engine.api")

load_dotenv()

app = FastAPI(
    title="itinerary-engine",
    version="1.0.0",
    docs_url="/docs" if os.getenv("ENABLE_DOCS", "false").lower() == "true" else None,
    redoc_url=None,
)

_service: Optional[TripEditService] = None


def get_service() -> TripEditService:
    global _service
    if _service is None:
        _service = TripEditService()
    return _service


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", tools=describe_active_tools())


@app.post("/trips/{trip_id}/modifications", response_model=ModificationResult)
def modify_trip(trip_id: str, req: ModificationRequest):
    """Apply one classified intent; failures come back as a result, never as an HTTP error."""
    result = get_service().apply(trip_id, req.intent, req.trip)
    if not result.success:
        _api_logger.info(
            "Modification %s on trip %s failed: %s",
            req.intent.type,
            trip_id,
            result.error_info.type.value if result.error_info else "generic",
        )
    return result


@app.post("/trips/context", response_model=ContextResponse)
def trip_context(req: ContextRequest):
    return ContextResponse(context=build_trip_context(req.trip))


@app.post("/layout", response_model=LayoutResponse)
def layout(req: LayoutRequest):
    slot_minutes = req.slot_minutes or load_settings().slot_minutes
    try:
        blocks = layout_day(req.items, slot_minutes)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return LayoutResponse(slot_minutes=slot_minutes, total_rows=total_rows(slot_minutes), blocks=blocks)


@app.post("/trips/validate", response_model=ValidateResponse)
def validate(req: ValidateRequest):
    constraints = derive_constraints(req.days)
    days = [
        DayIssues(
            day_number=day.day_number,
            conflicts=[
                f"{c.item1.title} overlaps {c.item2.title} by {c.overlap_minutes} min"
                for c in detect_time_conflicts(day.items)
            ],
            boundary_issues=[issue.issue for issue in check_time_boundaries(day.items)],
        )
        for day in req.days
    ]
    return ValidateResponse(
        constraints=constraints,
        days=days,
        changes=validate_modifications(req.changes, constraints),
    )
