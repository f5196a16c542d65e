"""Domain enums."""

from enum import Enum


class ItemType(str, Enum):
    ACTIVITY = "activity"
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    TRANSPORT = "transport"
    FLIGHT = "flight"
    PARKING = "parking"
    CHECKIN = "checkin"
    CHECKOUT = "checkout"
    LUGGAGE = "luggage"
    FREE_TIME = "free_time"


class DataReliability(str, Enum):
    VERIFIED = "verified"
    ESTIMATED = "estimated"
    GENERATED = "generated"


class ConstraintKind(str, Enum):
    IMMUTABLE = "immutable"
    TIME_LOCKED = "time_locked"
    BOOKING_REQUIRED = "booking_required"


class ChangeKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"
    MOVE = "move"


class ErrorType(str, Enum):
    CONSTRAINT_VIOLATION = "constraint_violation"
    IMMUTABLE_ITEM = "immutable_item"
    ITEM_NOT_FOUND = "item_not_found"
    SCHEDULE_CONFLICT = "schedule_conflict"
    NO_SLOT_AVAILABLE = "no_slot_available"


class Direction(str, Enum):
    EARLIER = "earlier"
    LATER = "later"


class ShiftScope(str, Enum):
    MORNING_ONLY = "morning_only"
    AFTERNOON_ONLY = "afternoon_only"
    FULL_DAY = "full_day"


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class IntentType(str, Enum):
    SHIFT_TIMES = "shift_times"
    SWAP_ACTIVITY = "swap_activity"
    ADD_ACTIVITY = "add_activity"
    REMOVE_ACTIVITY = "remove_activity"
    EXTEND_FREE_TIME = "extend_free_time"
    REORDER_DAY = "reorder_day"
    CHANGE_RESTAURANT = "change_restaurant"
    ADJUST_DURATION = "adjust_duration"
    ADD_DAY = "add_day"
    CLARIFICATION = "clarification"
    GENERAL_QUESTION = "general_question"
