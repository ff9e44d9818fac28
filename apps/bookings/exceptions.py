"""Exceptions raised by the booking domain services."""

from __future__ import annotations


class BookingError(Exception):
    """Base class for booking failures that are reported back to the client."""


class BookingConflictError(BookingError):
    """Raised when the requested dates or time slot are already taken."""


class BookingRuleError(BookingError):
    """Raised when a request breaks a business rule (stay length, capacity, past dates)."""


class InvalidTransitionError(BookingError):
    """Raised when a reservation cannot move to the requested status."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change status from '{current}' to '{requested}'.")
