"""
Core business logic for generating bookable time slots of a day.

Pure domain logic: the reference instant is always passed in, the clock is
never read here.
"""

import logging
from typing import List, Optional

from pendulum import DateTime

from .models import DEFAULT_BUSINESS_HOURS, BusinessHoursConfig, CalendarDay, TimeSlot

logger = logging.getLogger(__name__)


class SlotGenerator:
    """
    Generates the slot list of a single day.

    Algorithm:
    1. Compare the target day with the calendar day containing ``now``
    2. Today: start at ``now`` rounded up to the next full hour, end at the
       cutoff hour
    3. Later days: fixed window from the start hour to the end hour
    4. Step through the window by the slot granularity, end included

    An empty list means "no slots on this day" and is not an error.
    """

    def __init__(self, config: BusinessHoursConfig = DEFAULT_BUSINESS_HOURS):
        self.config = config

    def generate_slots(
        self,
        day: CalendarDay,
        now: DateTime,
        config: Optional[BusinessHoursConfig] = None,
    ) -> List[TimeSlot]:
        """
        Generate the bookable slots of ``day`` as seen at ``now``.

        Args:
            day: Target day
            now: Reference instant
            config: Optional per-call override of the generator's config

        Returns:
            Strictly increasing list of TimeSlot objects, possibly empty
        """
        config = config or self.config
        target = day.iso_date.date()
        today = now.date()

        if target == today:
            window = self._today_window(now, config)
        elif target > today:
            window = self._future_window(day, config)
        else:
            logger.debug("Day %s is in the past, no slots", day.full_date)
            return []

        if window is None:
            logger.debug("Booking window of %s already closed at %s", day.full_date, now)
            return []

        start, end = window
        slots = self._step_through(start, end, config.slot_granularity_minutes)
        logger.debug("Generated %d slot(s) for %s", len(slots), day.full_date)
        return slots

    def _today_window(
        self,
        now: DateTime,
        config: BusinessHoursConfig,
    ) -> tuple[DateTime, DateTime] | None:
        """
        Same-day window from the next full hour up to the cutoff.

        Only the minutes decide the rounding: 18:00 stays 18:00, 18:01 becomes
        19:00. Returns None when nothing is left today.
        """
        start = now.set(minute=0, second=0, microsecond=0)
        if now.minute > 0:
            start = start.add(hours=1)

        end = now.set(hour=config.cutoff_hour, minute=0, second=0, microsecond=0)

        if now > end or start > end:
            return None

        return start, end

    def _future_window(
        self,
        day: CalendarDay,
        config: BusinessHoursConfig,
    ) -> tuple[DateTime, DateTime]:
        """Fixed full-day window, independent of ``now``."""
        return (
            day.iso_date.set(hour=config.day_start_hour),
            day.iso_date.set(hour=config.day_end_hour),
        )

    def _step_through(
        self,
        start: DateTime,
        end: DateTime,
        granularity_minutes: int,
    ) -> List[TimeSlot]:
        """Slots from ``start`` to ``end``, both included."""
        slots: List[TimeSlot] = []
        current = start

        while current <= end:
            slots.append(TimeSlot.at(current))
            current = current.add(minutes=granularity_minutes)

        return slots
