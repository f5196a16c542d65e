"""Application request/response contracts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from itinerary_engine.domain.intent import IntentParameters


class IntentEnvelope(BaseModel):
    """A classified edit request; ``type`` stays a free string so unknown kinds can be reported."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(min_length=1)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    parameters: IntentParameters = Field(default_factory=IntentParameters)
    explanation: str = ""


__all__ = ["IntentEnvelope"]
