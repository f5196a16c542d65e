"""Constraint rules, one per restricted-mutability category."""

from __future__ import annotations

from typing import Optional

from itinerary_engine.domain.enums import ConstraintKind, ItemType
from itinerary_engine.domain.models import Constraint, Item


class FlightRule:
    def derive(self, item: Item) -> Optional[Constraint]:
        if item.type != ItemType.FLIGHT:
            return None
        return Constraint(
            item_id=item.id,
            kind=ConstraintKind.IMMUTABLE,
            reason="Flights cannot be modified. Contact the airline for any change.",
        )


class HotelScheduleRule:
    def derive(self, item: Item) -> Optional[Constraint]:
        if item.type == ItemType.CHECKIN:
            label = "check-in"
        elif item.type == ItemType.CHECKOUT:
            label = "check-out"
        else:
            return None
        return Constraint(
            item_id=item.id,
            kind=ConstraintKind.TIME_LOCKED,
            reason=f"The {label} time is set by the hotel.",
        )


class PaidReservationRule:
    def derive(self, item: Item) -> Optional[Constraint]:
        if not item.booking_url or not item.reservation_reference:
            return None
        cost = float(item.estimated_cost or 0.0)
        if cost <= 0:
            return None
        return Constraint(
            item_id=item.id,
            kind=ConstraintKind.BOOKING_REQUIRED,
            reason=f"This activity looks like a paid booking ({cost:g}€). Check the cancellation terms before changing it.",
        )


class ReservedTransportRule:
    def derive(self, item: Item) -> Optional[Constraint]:
        if item.type not in (ItemType.TRANSPORT, ItemType.PARKING) or not item.booking_url:
            return None
        label = "transport" if item.type == ItemType.TRANSPORT else "parking"
        return Constraint(
            item_id=item.id,
            kind=ConstraintKind.BOOKING_REQUIRED,
            reason=f"This {label} has a reservation. Check the cancellation terms.",
        )


__all__ = ["FlightRule", "HotelScheduleRule", "PaidReservationRule", "ReservedTransportRule"]
