"""Application orchestration layer."""

from itinerary_engine.application.contracts import IntentEnvelope
from itinerary_engine.application.dispatcher import dispatch
from itinerary_engine.application.trip_edit_service import TripEditService, build_trip_context

__all__ = ["IntentEnvelope", "TripEditService", "build_trip_context", "dispatch"]
