"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from itinerary_engine.domain.constants import MINUTES_PER_DAY
from itinerary_engine.domain.enums import ChangeKind, ConstraintKind, DataReliability, ErrorType, ItemType
from itinerary_engine.domain.exceptions import InvalidSchedule
from itinerary_engine.domain.schedule import span_minutes, time_to_minutes


class Item(BaseModel):
    id: str = Field(min_length=1)
    type: ItemType = ItemType.ACTIVITY
    title: str = ""
    description: str = ""
    day_number: int = Field(default=1, ge=1)
    start_time: str
    end_time: str
    duration: Optional[int] = Field(default=None, ge=0)
    estimated_cost: Optional[float] = None
    booking_url: Optional[str] = None
    reservation_reference: Optional[str] = None
    location_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    data_reliability: DataReliability = DataReliability.VERIFIED

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        try:
            time_to_minutes(value)
        except InvalidSchedule as exc:
            raise ValueError(str(exc)) from None
        hh, mm = value.strip().split(":")
        return f"{int(hh):02d}:{mm}"

    @field_validator("start_time")
    @classmethod
    def _check_start_before_midnight(cls, value: str) -> str:
        if time_to_minutes(value) >= MINUTES_PER_DAY:
            raise ValueError(f"start time must be before 24:00: {value!r}")
        return value

    @model_validator(mode="after")
    def _fill_duration(self) -> "Item":
        if self.duration is None:
            self.duration = span_minutes(self.start_time, self.end_time)
        return self

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)


class Day(BaseModel):
    day_number: int = Field(default=1, ge=1)
    date: Optional[dt.date] = None
    theme: Optional[str] = None
    narrative: str = ""
    items: list[Item] = Field(default_factory=list)


class Accommodation(BaseModel):
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    price_per_night: Optional[float] = None


class Trip(BaseModel):
    destination: str = ""
    start_date: Optional[dt.date] = None
    accommodation: Optional[Accommodation] = None
    days: list[Day] = Field(default_factory=list)

    @property
    def duration_days(self) -> int:
        return len(self.days)


class Attraction(BaseModel):
    id: str
    name: str
    description: str = ""
    duration: int = 90
    estimated_cost: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rating: float = 0.0
    review_count: int = 0
    must_see: bool = False
    booking_url: Optional[str] = None
    data_reliability: DataReliability = DataReliability.VERIFIED


class Constraint(BaseModel):
    item_id: str
    kind: ConstraintKind
    reason: str = ""


class Change(BaseModel):
    kind: ChangeKind
    day_number: int
    item_id: Optional[str] = None
    new_item: Optional[Item] = None
    before: Optional[dict[str, Any]] = None
    after: Optional[dict[str, Any]] = None
    description: str = ""


class ErrorInfo(BaseModel):
    type: ErrorType
    message: str = ""
    alternative_suggestion: Optional[str] = None


class ModificationResult(BaseModel):
    success: bool
    changes: list[Change] = Field(default_factory=list)
    explanation: str = ""
    warnings: list[str] = Field(default_factory=list)
    new_days: list[Day] = Field(default_factory=list)
    rollback_data: list[Day] = Field(default_factory=list)
    error_info: Optional[ErrorInfo] = None
