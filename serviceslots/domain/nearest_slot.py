"""
Single best-guess slot for call sites that skip the interactive picker.
"""

import logging

from pendulum import DateTime

from .formatting import format_nearest_label
from .models import NEAREST_SLOT_BUSINESS_HOURS, BusinessHoursConfig, CalendarDay, SlotSelection, TimeSlot

logger = logging.getLogger(__name__)


class NearestSlotResolver:
    """
    Picks the nearest bookable day and slot for a reference instant.

    1. At or past the cutoff hour: tomorrow at the start hour
    2. Otherwise the next full hour today, unless that reaches the end hour,
       in which case tomorrow at the start hour again

    Note the two checks use different hours (cutoff vs. end of day). Both are
    configurable and kept apart on purpose.
    """

    def __init__(self, config: BusinessHoursConfig = NEAREST_SLOT_BUSINESS_HOURS):
        self.config = config

    def resolve_nearest(self, now: DateTime, config: BusinessHoursConfig | None = None) -> SlotSelection:
        """
        Resolve the nearest slot. Always returns exactly one selection.

        Args:
            now: Reference instant
            config: Optional per-call override of the resolver's config

        Returns:
            SlotSelection labelled "DD/MM/YYYY - h:mm AM/PM"
        """
        config = config or self.config

        if now.hour >= config.cutoff_hour:
            slot_time = self._next_opening(now, config)
        else:
            candidate = now.set(minute=0, second=0, microsecond=0).add(hours=1)
            if candidate.hour >= config.day_end_hour:
                slot_time = self._next_opening(now, config)
            else:
                slot_time = candidate

        selection = SlotSelection(
            day=CalendarDay.from_datetime(slot_time, is_recommended=True),
            slot=TimeSlot.at(slot_time),
            combined_label=format_nearest_label(slot_time),
        )

        logger.debug("Nearest slot for %s is %s", now, selection.combined_label)
        return selection

    @staticmethod
    def _next_opening(now: DateTime, config: BusinessHoursConfig) -> DateTime:
        """Opening slot of the day after ``now``."""
        return now.add(days=1).set(hour=config.day_start_hour, minute=0, second=0, microsecond=0)
