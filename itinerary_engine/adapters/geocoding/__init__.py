"""Geocoding adapters."""

from itinerary_engine.adapters.geocoding.mock import MockGeocoder
from itinerary_engine.adapters.geocoding.real import NominatimGeocoder

__all__ = ["MockGeocoder", "NominatimGeocoder"]
