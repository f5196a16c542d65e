"""Attraction pool backed by a local JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from itinerary_engine.domain.attractions import score_attraction
from itinerary_engine.domain.models import Attraction
from itinerary_engine.domain.schedule import normalize_string
from itinerary_engine.shared.exceptions import ToolError

DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "attractions_v1.json"


class JsonAttractionPool:
    def __init__(self, data_file: Optional[Path] = None):
        self._data_file = Path(data_file) if data_file is not None else DATA_FILE
        self._rows: Optional[list[dict]] = None

    def _load_data(self) -> list[dict]:
        if self._rows is not None:
            return self._rows
        if not self._data_file.exists():
            raise ToolError("mock_attractions", f"Data file not found: {self._data_file}")
        with open(self._data_file, encoding="utf-8") as f:
            self._rows = json.load(f)
        return self._rows

    def list_attractions(self, destination: str) -> list[Attraction]:
        wanted = normalize_string(destination)
        if not wanted:
            return []
        pool = [
            Attraction(**{key: value for key, value in raw.items() if key != "city"})
            for raw in self._load_data()
            if normalize_string(raw.get("city", "")) == wanted
        ]
        return sorted(pool, key=score_attraction, reverse=True)


__all__ = ["DATA_FILE", "JsonAttractionPool"]
