"""Offline geocoder resolving names against the local attraction data."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from itinerary_engine.adapters.attractions.mock import DATA_FILE
from itinerary_engine.domain.schedule import normalize_string, titles_match
from itinerary_engine.shared.exceptions import ToolError
from itinerary_engine.tools.interfaces import GeocodeInput, GeocodeResult


class MockGeocoder:
    def __init__(self, data_file: Optional[Path] = None):
        self._data_file = Path(data_file) if data_file is not None else DATA_FILE
        self._rows: Optional[list[dict]] = None

    def _load_data(self) -> list[dict]:
        if self._rows is None:
            if not self._data_file.exists():
                raise ToolError("mock_geocoder", f"Data file not found: {self._data_file}")
            with open(self._data_file, encoding="utf-8") as f:
                self._rows = json.load(f)
        return self._rows

    def geocode(self, params: GeocodeInput) -> Optional[GeocodeResult]:
        city = normalize_string(params.near or "")
        for raw in self._load_data():
            if city and normalize_string(raw.get("city", "")) != city:
                continue
            if raw.get("latitude") is None or raw.get("longitude") is None:
                continue
            if titles_match(params.query, raw["name"]):
                return GeocodeResult(lat=raw["latitude"], lng=raw["longitude"], display_name=raw["name"])
        return None


__all__ = ["MockGeocoder"]
