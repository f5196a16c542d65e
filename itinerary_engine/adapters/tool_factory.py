"""Concrete tool selection and wiring."""

from __future__ import annotations

import logging
from typing import Optional

from itinerary_engine.adapters.attractions.mock import JsonAttractionPool
from itinerary_engine.adapters.geocoding.mock import MockGeocoder
from itinerary_engine.adapters.geocoding.real import NominatimGeocoder
from itinerary_engine.config.settings import EngineSettings, load_settings
from itinerary_engine.infrastructure.cache import MemoryCache
from itinerary_engine.tools.interfaces import AttractionPoolTool, GeocodingTool

_logger = logging.getLogger("itinerary-engine.tools")


def get_geocoding_tool(
    settings: Optional[EngineSettings] = None,
    *,
    cache: Optional[MemoryCache] = None,
) -> GeocodingTool:
    settings = settings or load_settings()
    if settings.geocoder_provider == "nominatim":
        cache = cache if cache is not None else MemoryCache(
            default_ttl=settings.geocode_cache_ttl_seconds,
            max_size=500,
        )
        return NominatimGeocoder(settings, cache=cache)
    return MockGeocoder(settings.attraction_data_file)


def get_attraction_tool(settings: Optional[EngineSettings] = None) -> AttractionPoolTool:
    settings = settings or load_settings()
    if not settings.attraction_data_file.exists():
        _logger.warning(
            "Attraction data file %s not found, falling back to the bundled data",
            settings.attraction_data_file,
        )
        return JsonAttractionPool()
    return JsonAttractionPool(settings.attraction_data_file)


def describe_active_tools(settings: Optional[EngineSettings] = None) -> dict[str, str]:
    settings = settings or load_settings()
    return {
        "geocoding": settings.geocoder_provider,
        "attractions": "json",
    }


__all__ = [
    "describe_active_tools",
    "get_attraction_tool",
    "get_geocoding_tool",
]
