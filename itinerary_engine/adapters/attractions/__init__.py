"""Attraction pool adapters."""

from itinerary_engine.adapters.attractions.mock import JsonAttractionPool

__all__ = ["JsonAttractionPool"]
