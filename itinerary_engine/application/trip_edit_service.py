"""Serialized trip edits plus the compact context handed to the classifier."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from itinerary_engine.application.contracts import IntentEnvelope
from itinerary_engine.application.dispatcher import dispatch
from itinerary_engine.domain.intent import TripModificationContext
from itinerary_engine.domain.models import ModificationResult, Trip
from itinerary_engine.domain.schedule import sort_items
from itinerary_engine.infrastructure.logging import StructuredLogger
from itinerary_engine.shared.exceptions import ToolError
from itinerary_engine.tools.interfaces import AttractionPoolTool, GeocodingTool


class TripEditService:
    """Applies one modification at a time per trip id.

    Edits to different trips run concurrently; edits to the same trip wait on
    that trip's lock for the whole dispatch call.
    """

    def __init__(
        self,
        *,
        geocoder: Optional[GeocodingTool] = None,
        attractions: Optional[AttractionPoolTool] = None,
        id_factory: Optional[Callable[[], str]] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        if geocoder is None or attractions is None:
            from itinerary_engine.adapters.tool_factory import get_attraction_tool, get_geocoding_tool

            geocoder = geocoder or get_geocoding_tool()
            attractions = attractions or get_attraction_tool()
        self._geocoder = geocoder
        self._attractions = attractions
        self._id_factory = id_factory
        self._logger = logger
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def lock_for(self, trip_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(trip_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[trip_id] = lock
            return lock

    def _attraction_pool(self, trip: Trip) -> list:
        if not trip.destination:
            return []
        try:
            return self._attractions.list_attractions(trip.destination)
        except ToolError as exc:
            if self._logger is not None:
                self._logger.warning("attractions", str(exc), destination=trip.destination)
            return []

    def modification_context(self, trip: Trip) -> TripModificationContext:
        return TripModificationContext(
            destination=trip.destination,
            start_date=trip.start_date,
            accommodation=trip.accommodation,
            attraction_pool=self._attraction_pool(trip),
        )

    def apply(self, trip_id: str, intent: IntentEnvelope, trip: Trip) -> ModificationResult:
        with self.lock_for(trip_id):
            return dispatch(
                intent,
                trip.days,
                self.modification_context(trip),
                geocoder=self._geocoder,
                id_factory=self._id_factory,
                logger=self._logger,
            )


def build_trip_context(trip: Trip) -> dict[str, Any]:
    """Per-day summary the intent classifier uses to resolve targets."""
    return {
        "destination": trip.destination,
        "start_date": trip.start_date.isoformat() if trip.start_date else None,
        "duration_days": trip.duration_days,
        "days": [
            {
                "day_number": day.day_number,
                "date": day.date.isoformat() if day.date else None,
                "theme": day.theme,
                "items": [
                    {
                        "id": item.id,
                        "type": item.type.value,
                        "title": item.title,
                        "start_time": item.start_time,
                        "end_time": item.end_time,
                    }
                    for item in sort_items(day.items)
                ],
            }
            for day in trip.days
        ],
    }


__all__ = ["TripEditService", "build_trip_context"]
