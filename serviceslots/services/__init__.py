"""
Service layer helpers that drive the domain generators through a booking flow.
"""

from .slot_picker import ClockProtocol, PickerState, SlotPicker, system_clock

__all__ = ["ClockProtocol", "PickerState", "SlotPicker", "system_clock"]
