"""Itinerary constraint and mutation engine."""
