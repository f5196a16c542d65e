"""API request/response models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from itinerary_engine.application.contracts import IntentEnvelope
from itinerary_engine.domain.constraints import ValidationReport
from itinerary_engine.domain.layout import LayoutBlock
from itinerary_engine.domain.models import Change, Constraint, Day, Item, Trip


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
    tools: dict[str, str] = Field(default_factory=dict)


class ModificationRequest(BaseModel):
    trip: Trip = Field(description="Full in-memory trip to edit")
    intent: IntentEnvelope = Field(description="Intent produced by the external classifier")


class ContextRequest(BaseModel):
    trip: Trip


class ContextResponse(BaseModel):
    context: dict[str, Any] = Field(default_factory=dict)


class LayoutRequest(BaseModel):
    items: list[Item] = Field(default_factory=list)
    slot_minutes: Optional[int] = Field(default=None, ge=1, le=60, description="Grid slot size; server default when omitted")


class LayoutResponse(BaseModel):
    slot_minutes: int
    total_rows: int
    blocks: list[LayoutBlock] = Field(default_factory=list)


class ValidateRequest(BaseModel):
    days: list[Day] = Field(default_factory=list)
    changes: list[Change] = Field(default_factory=list, description="Proposed changes to check against the constraints")


class DayIssues(BaseModel):
    day_number: int
    conflicts: list[str] = Field(default_factory=list)
    boundary_issues: list[str] = Field(default_factory=list)


class ValidateResponse(BaseModel):
    constraints: list[Constraint] = Field(default_factory=list)
    days: list[DayIssues] = Field(default_factory=list)
    changes: ValidationReport = Field(default_factory=ValidationReport)
