"""Attraction pool ranking helpers."""

from __future__ import annotations

from typing import Iterable, Optional

from itinerary_engine.domain.enums import ItemType
from itinerary_engine.domain.models import Attraction, Day
from itinerary_engine.domain.schedule import normalize_string, titles_match


def score_attraction(attraction: Attraction) -> float:
    score = attraction.rating * 10.0
    if attraction.must_see:
        score += 30.0
    score += min(15.0, attraction.review_count / 350.0)
    if attraction.estimated_cost == 0:
        score += 5.0
    return score


def get_unused_attractions(pool: Iterable[Attraction], days: Iterable[Day]) -> list[Attraction]:
    """Pool entries not already scheduled as activities, best first."""
    used_names: set[str] = set()
    used_ids: set[str] = set()
    for day in days:
        for item in day.items:
            if item.type != ItemType.ACTIVITY:
                continue
            used_ids.add(item.id)
            name = normalize_string(item.title)
            if name:
                used_names.add(name)

    unused: list[Attraction] = []
    for attraction in pool:
        if attraction.id in used_ids:
            continue
        name = normalize_string(attraction.name)
        if any(name in used or used in name for used in used_names):
            continue
        unused.append(attraction)
    return sorted(unused, key=score_attraction, reverse=True)


def match_attraction(pool: Iterable[Attraction], title: str) -> Optional[Attraction]:
    for attraction in pool:
        if titles_match(title, attraction.name):
            return attraction
    return None


__all__ = ["get_unused_attractions", "match_attraction", "score_attraction"]
