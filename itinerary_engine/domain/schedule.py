"""Schedule helpers: clock arithmetic, title matching and time ordering."""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING, Iterable

from itinerary_engine.domain.constants import (
    AFTER_MIDNIGHT_CUTOFF_MINUTES,
    LATE_NIGHT_START_MINUTES,
    MINUTES_PER_DAY,
)
from itinerary_engine.domain.exceptions import InvalidSchedule

if TYPE_CHECKING:
    from itinerary_engine.domain.models import Day, Item

_HHMM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9\s]")


def time_to_minutes(value: str) -> int:
    match = _HHMM_PATTERN.match(str(value or "").strip())
    if not match:
        raise InvalidSchedule(f"invalid HH:MM value: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * 60 + minutes
    if minutes >= 60 or total > MINUTES_PER_DAY:
        raise InvalidSchedule(f"time out of range: {value!r}")
    return total


def minutes_to_time(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    return f"{hours:02d}:{rest:02d}"


def normalize_string(text: str) -> str:
    """Lowercase, strip accents and punctuation."""
    decomposed = unicodedata.normalize("NFD", str(text or "").lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_PATTERN.sub("", stripped).strip()


def titles_match(target: str, title: str) -> bool:
    wanted = normalize_string(target)
    actual = normalize_string(title)
    if not wanted or not actual:
        return False
    return wanted in actual or actual in wanted


def has_late_night(items: Iterable[Item]) -> bool:
    return any(time_to_minutes(item.start_time) >= LATE_NIGHT_START_MINUTES for item in items)


def rebased_minutes(value: str, *, late_night: bool) -> int:
    minutes = time_to_minutes(value)
    if late_night and minutes < AFTER_MIDNIGHT_CUTOFF_MINUTES:
        return minutes + MINUTES_PER_DAY
    return minutes


def item_span(item: Item, *, late_night: bool) -> tuple[int, int]:
    start = rebased_minutes(item.start_time, late_night=late_night)
    end = rebased_minutes(item.end_time, late_night=late_night)
    if end < start:
        end += MINUTES_PER_DAY
    return start, end


def sort_items(items: Iterable[Item]) -> list[Item]:
    rows = list(items)
    late_night = has_late_night(rows)
    return sorted(rows, key=lambda item: rebased_minutes(item.start_time, late_night=late_night))


def span_minutes(start_time: str, end_time: str) -> int:
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    if end < start:
        end += MINUTES_PER_DAY
    return end - start


def clone_days(days: Iterable[Day]) -> list[Day]:
    return [day.model_copy(deep=True) for day in days]


def find_day(days: Iterable[Day], day_number: int) -> Day | None:
    for day in days:
        if day.day_number == day_number:
            return day
    return None


__all__ = [
    "clone_days",
    "find_day",
    "has_late_night",
    "item_span",
    "minutes_to_time",
    "normalize_string",
    "rebased_minutes",
    "sort_items",
    "span_minutes",
    "time_to_minutes",
    "titles_match",
]
