"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class InvalidSchedule(DomainError):
    """Raised when a schedule value cannot be interpreted (e.g. a malformed HH:MM)."""
