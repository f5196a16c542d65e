"""Operator parameters and trip context carried by a classified intent."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from itinerary_engine.domain.enums import Direction, MealType, ShiftScope
from itinerary_engine.domain.models import Accommodation, Attraction


class IntentParameters(BaseModel):
    """Parameters as emitted by the classifier; camelCase wire names are accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    day_numbers: list[int] = Field(default_factory=list)
    target_activity: Optional[str] = None
    target_item_id: Optional[str] = None
    new_value: Optional[str] = None
    time_shift: Optional[int] = Field(default=None, ge=0)
    direction: Optional[Direction] = None
    scope: Optional[ShiftScope] = None
    meal_type: Optional[MealType] = None
    cuisine_type: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    insert_after_day: Optional[int] = None


class TripModificationContext(BaseModel):
    destination: str = ""
    start_date: Optional[dt.date] = None
    accommodation: Optional[Accommodation] = None
    attraction_pool: list[Attraction] = Field(default_factory=list)


__all__ = ["IntentParameters", "TripModificationContext"]
