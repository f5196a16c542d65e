"""Deterministic mutation operators over a trip's days."""

from itinerary_engine.domain.operators.add_activity import add_activity
from itinerary_engine.domain.operators.adjust_duration import adjust_duration
from itinerary_engine.domain.operators.change_meal import change_meal
from itinerary_engine.domain.operators.common import Operator, OperatorContext
from itinerary_engine.domain.operators.extend_free_time import extend_free_time
from itinerary_engine.domain.operators.insert_day import insert_day
from itinerary_engine.domain.operators.remove_activity import remove_activity
from itinerary_engine.domain.operators.reorder_day import reorder_day
from itinerary_engine.domain.operators.shift_times import shift_times
from itinerary_engine.domain.operators.swap_activity import swap_activity

__all__ = [
    "Operator",
    "OperatorContext",
    "add_activity",
    "adjust_duration",
    "change_meal",
    "extend_free_time",
    "insert_day",
    "remove_activity",
    "reorder_day",
    "shift_times",
    "swap_activity",
]
