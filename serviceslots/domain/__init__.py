"""
Domain layer - Pure business logic without external dependencies.
"""

from .day_window import DayWindowGenerator
from .exceptions import InvalidArgumentError, NoSlotsAvailableError, PickerStateError, SlotEngineError
from .models import (
    DEFAULT_BUSINESS_HOURS,
    NEAREST_SLOT_BUSINESS_HOURS,
    BusinessHoursConfig,
    CalendarDay,
    SlotSelection,
    TimeSlot,
)
from .nearest_slot import NearestSlotResolver
from .slot_generator import SlotGenerator

__all__ = [
    "BusinessHoursConfig",
    "CalendarDay",
    "DEFAULT_BUSINESS_HOURS",
    "DayWindowGenerator",
    "InvalidArgumentError",
    "NEAREST_SLOT_BUSINESS_HOURS",
    "NearestSlotResolver",
    "NoSlotsAvailableError",
    "PickerStateError",
    "SlotEngineError",
    "SlotGenerator",
    "SlotSelection",
    "TimeSlot",
]
