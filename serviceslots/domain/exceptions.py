"""
Domain-specific exception hierarchy for the slot engine.
"""


class SlotEngineError(Exception):
    """Base class for all slot engine errors."""


class InvalidArgumentError(SlotEngineError, ValueError):
    """Raised for a bad horizon, bad business hours or an unknown choice."""


class PickerStateError(SlotEngineError):
    """Raised when a picker transition is not allowed from the current state."""


class NoSlotsAvailableError(PickerStateError):
    """Raised when a slot is selected while the slot list is empty."""
