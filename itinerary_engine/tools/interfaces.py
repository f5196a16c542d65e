"""Collaborator protocols and I/O schemas."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from itinerary_engine.domain.models import Attraction
from itinerary_engine.shared.exceptions import ToolError


class GeocodeInput(BaseModel):
    query: str = Field(min_length=1)
    near: Optional[str] = Field(default=None, description="Destination used to disambiguate the query")


class GeocodeResult(BaseModel):
    lat: float
    lng: float
    display_name: str = ""


@runtime_checkable
class GeocodingTool(Protocol):
    def geocode(self, params: GeocodeInput) -> Optional[GeocodeResult]: ...


@runtime_checkable
class AttractionPoolTool(Protocol):
    def list_attractions(self, destination: str) -> list[Attraction]: ...


__all__ = [
    "AttractionPoolTool",
    "GeocodeInput",
    "GeocodeResult",
    "GeocodingTool",
    "ToolError",
]
