"""Domain constants shared by deterministic logic."""

from itinerary_engine.domain.enums import ItemType, MealType

MINUTES_PER_DAY = 24 * 60

DAY_START_HOUR = 6
DAY_END_HOUR = 23
DAY_START_MINUTES = DAY_START_HOUR * 60
DAY_END_MINUTES = DAY_END_HOUR * 60

# Items before this hour count as "after midnight" when the day runs late.
AFTER_MIDNIGHT_CUTOFF_MINUTES = 6 * 60
LATE_NIGHT_START_MINUTES = 22 * 60

MIN_ITEM_MINUTES = 30
ANCHOR_GAP_MINUTES = 15
TRANSITION_MINUTES = 30
DEFAULT_SHIFT_MINUTES = 60
DEFAULT_DURATION_DELTA_MINUTES = 30
AFTERNOON_START_MINUTES = 14 * 60

DEFAULT_LUNCH_ANCHOR_MINUTES = 12 * 60
LUNCH_ANCHOR_WINDOW = (11 * 60, 15 * 60)

SLOT_SEARCH_START_MINUTES = 10 * 60
SLOT_SEARCH_END_MINUTES = 20 * 60
SLOT_STEP_MINUTES = 30
NEW_ACTIVITY_MINUTES = 90
TRANSIT_BUFFER_MINUTES = 20
PROTECTED_MEAL_WINDOWS = ((12 * 60, 13 * 60 + 30), (19 * 60, 20 * 60 + 30))

MEAL_WINDOWS = {
    MealType.BREAKFAST: (7 * 60, 10 * 60),
    MealType.LUNCH: (12 * 60, 15 * 60),
    MealType.DINNER: (19 * 60, 22 * 60),
}

# Never moved by time shifts regardless of derived constraints.
SHIFT_FIXED_TYPES = frozenset({ItemType.FLIGHT, ItemType.CHECKIN, ItemType.CHECKOUT, ItemType.PARKING})
REORDER_FIXED_TYPES = frozenset({ItemType.FLIGHT, ItemType.CHECKIN, ItemType.CHECKOUT})

DEFAULT_SLOT_MINUTES = 15
DEFAULT_LAYOUT_DURATION_MINUTES = 60
