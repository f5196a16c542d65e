"""Nominatim (OpenStreetMap) geocoding adapter.

Docs: https://nominatim.org/release-docs/latest/api/Search/
Results, including misses, are cached in the injected ``MemoryCache``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from itinerary_engine.config.settings import EngineSettings
from itinerary_engine.infrastructure.cache import MemoryCache, make_cache_key
from itinerary_engine.infrastructure.http_client import HttpClient
from itinerary_engine.shared.exceptions import ToolError
from itinerary_engine.tools.interfaces import GeocodeInput, GeocodeResult

_logger = logging.getLogger("itinerary-engine.geocoding")


def _parse_first(payload: Any) -> Optional[GeocodeResult]:
    if not isinstance(payload, list):
        raise ToolError("nominatim", f"unexpected response type: {type(payload).__name__}")
    if not payload:
        return None
    first = payload[0]
    try:
        return GeocodeResult(
            lat=float(first["lat"]),
            lng=float(first["lon"]),
            display_name=str(first.get("display_name") or first.get("name") or ""),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ToolError("nominatim", f"malformed result: {exc}") from None


class NominatimGeocoder:
    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        cache: Optional[MemoryCache] = None,
        http: Optional[HttpClient] = None,
    ):
        self._settings = settings or EngineSettings(geocoder_provider="nominatim")
        self._cache = cache
        self._http = http or HttpClient(
            timeout=self._settings.geocoder_timeout_seconds,
            tool_name="nominatim",
            headers={"User-Agent": self._settings.geocoder_user_agent},
        )

    def geocode(self, params: GeocodeInput) -> Optional[GeocodeResult]:
        query = f"{params.query}, {params.near}" if params.near else params.query
        key = make_cache_key("geocode", query.lower())
        if self._cache is not None and self._cache.contains(key):
            return self._cache.get(key)

        payload = self._http.get(
            self._settings.geocoder_base_url,
            params={"q": query, "format": "jsonv2", "limit": 1},
        )
        result = _parse_first(payload)
        if result is None:
            _logger.info("Nominatim returned no match for %r", query)
        if self._cache is not None:
            self._cache.set(key, result, ttl=self._settings.geocode_cache_ttl_seconds)
        return result


__all__ = ["NominatimGeocoder"]
