"""Exception types raised by the OrderEase core."""

from __future__ import annotations


class OrderEaseError(Exception):
    """Base class for OrderEase errors."""


class PersistenceError(OrderEaseError):
    """Saved restaurant state could not be written or read back."""


class PrinterError(OrderEaseError):
    """The guest check could not be printed."""
