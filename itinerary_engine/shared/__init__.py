"""Shared cross-layer types and exceptions."""

from itinerary_engine.shared.exceptions import ExternalServiceError, ToolError

__all__ = ["ToolError", "ExternalServiceError"]
