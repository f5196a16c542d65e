"""Replace an item's content in place, keeping its slot."""

from __future__ import annotations

import logging

from itinerary_engine.domain.constants import DAY_END_MINUTES
from itinerary_engine.domain.enums import ChangeKind, DataReliability, ErrorType
from itinerary_engine.domain.intent import IntentParameters
from itinerary_engine.domain.models import Change, Constraint, Day, Item, ModificationResult
from itinerary_engine.domain.operators.common import (
    OperatorContext,
    blocking_constraint,
    booking_warning,
    conflict_warnings,
    failure,
    find_target,
    resort,
    success,
    sync_duration,
)
from itinerary_engine.domain.schedule import clone_days, minutes_to_time, normalize_string
from itinerary_engine.shared.exceptions import ExternalServiceError, ToolError
from itinerary_engine.tools.interfaces import GeocodeInput

_logger = logging.getLogger("itinerary-engine.operators")

DEFAULT_DURATION_MINUTES = 90
DURATION_BANDS = {"museum": 120, "park": 90, "church": 45, "market": 60, "beach": 150, "tower": 60, "district": 120}
_CATEGORY_KEYWORDS = (
    ("museum", ("museum", "musee", "museo", "gallery", "galerie")),
    ("church", ("church", "eglise", "iglesia", "chiesa", "cathedral", "cathedrale", "basilica", "basilique", "chapel")),
    ("market", ("market", "marche", "mercado", "mercato", "bazaar")),
    ("beach", ("beach", "plage", "playa", "spiaggia")),
    ("tower", ("tower", "tour", "torre")),
    ("park", ("park", "parc", "parque", "parco", "garden", "jardin")),
    ("district", ("district", "quartier", "barrio", "quarter", "old town")),
)


def infer_duration_category(title: str) -> str | None:
    words = normalize_string(title)
    tokens = set(words.split())
    for category, keywords in _CATEGORY_KEYWORDS:
        for keyword in keywords:
            if (" " in keyword and keyword in words) or keyword in tokens:
                return category
    return None


def estimate_duration_minutes(title: str) -> int:
    category = infer_duration_category(title)
    return DURATION_BANDS.get(category or "", DEFAULT_DURATION_MINUTES)


def _refresh_coordinates(item: Item, ctx: OperatorContext, warnings: list[str]) -> None:
    if ctx.geocoder is None:
        return
    try:
        found = ctx.geocoder.geocode(GeocodeInput(query=item.title, near=ctx.trip.destination or None))
    except (ToolError, ExternalServiceError) as exc:
        _logger.warning("Geocoding failed for %r, keeping previous coordinates: %s", item.title, exc)
        warnings.append(f"Location of \"{item.title}\" could not be refreshed; previous coordinates kept.")
        return
    if found is None:
        _logger.info("Geocoding found no match for %r", item.title)
        warnings.append(f"No location found for \"{item.title}\"; previous coordinates kept.")
        return
    item.latitude = found.lat
    item.longitude = found.lng
    item.location_name = found.display_name or item.title


def swap_activity(
    params: IntentParameters,
    days: list[Day],
    constraints: list[Constraint],
    rollback_data: list[Day],
    ctx: OperatorContext,
) -> ModificationResult:
    if not (params.target_activity or params.target_item_id) or not params.new_value:
        return failure(
            days,
            rollback_data,
            "To replace an activity, name the activity to replace and the new one.",
            ErrorType.ITEM_NOT_FOUND,
        )

    new_days = clone_days(days)
    match = find_target(new_days, params)
    if match is None:
        return failure(
            days,
            rollback_data,
            f"\"{params.target_activity or params.target_item_id}\" was not found in your itinerary.",
            ErrorType.ITEM_NOT_FOUND,
        )

    day, item = match
    blocker = blocking_constraint(item, constraints)
    if blocker is not None:
        return failure(days, rollback_data, blocker.reason, ErrorType.IMMUTABLE_ITEM)

    warnings: list[str] = []
    reason = booking_warning(item, constraints)
    if reason:
        warnings.append(reason)

    old_title = item.title
    before = {"title": old_title, "start_time": item.start_time, "end_time": item.end_time}
    item.title = params.new_value
    item.description = f"Replaces {old_title}"
    item.data_reliability = DataReliability.GENERATED

    duration = estimate_duration_minutes(item.title)
    if item.start_minutes + duration <= DAY_END_MINUTES:
        item.end_time = minutes_to_time(item.start_minutes + duration)
        sync_duration(item)
    else:
        warnings.append(f"\"{item.title}\" keeps its previous end time to finish before {minutes_to_time(DAY_END_MINUTES)}.")

    _refresh_coordinates(item, ctx, warnings)
    resort(day)
    warnings.extend(conflict_warnings(day, {item.id}))

    change = Change(
        kind=ChangeKind.UPDATE,
        day_number=day.day_number,
        item_id=item.id,
        before=before,
        after={"title": item.title, "start_time": item.start_time, "end_time": item.end_time},
        description=f"\"{old_title}\" → \"{item.title}\"",
    )
    return success(
        new_days,
        rollback_data,
        [change],
        f"Replaced \"{old_title}\" with \"{item.title}\".",
        warnings,
    )


__all__ = ["estimate_duration_minutes", "infer_duration_category", "swap_activity"]
