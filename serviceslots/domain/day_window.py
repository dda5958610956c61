"""
Generation of the candidate days shown by the day picker.
"""

import logging
from typing import List

from pendulum import DateTime

from .exceptions import InvalidArgumentError
from .models import DEFAULT_BUSINESS_HOURS, BusinessHoursConfig, CalendarDay

logger = logging.getLogger(__name__)


class DayWindowGenerator:
    """
    Produces a run of consecutive calendar days starting at ``now``.

    The window starts on the day containing ``now`` and that day is
    recommended. Once ``now`` is at or past the cutoff hour no same-day
    booking is offered, so the window starts on the following day instead.
    Passing ``cutoff_shift=False`` keeps today first regardless of the hour.
    """

    def __init__(
        self,
        config: BusinessHoursConfig = DEFAULT_BUSINESS_HOURS,
        cutoff_shift: bool = True,
    ):
        self.config = config
        self.cutoff_shift = cutoff_shift

    def generate_days(self, now: DateTime, horizon_days: int) -> List[CalendarDay]:
        """
        Generate ``horizon_days`` consecutive days.

        Args:
            now: Reference instant, in the caller's local timezone
            horizon_days: Number of days to generate

        Returns:
            List of CalendarDay objects, the first one recommended

        Raises:
            InvalidArgumentError: If horizon_days is not positive
        """
        if horizon_days <= 0:
            raise InvalidArgumentError(f"horizon_days must be greater than zero, got {horizon_days}")

        first_day = now.start_of("day")
        if self.is_past_cutoff(now):
            first_day = first_day.add(days=1)
            logger.debug("Cutoff %02d:00 passed at %s, starting window on %s",
                         self.config.cutoff_hour, now, first_day.to_date_string())

        days = [
            CalendarDay.from_datetime(first_day.add(days=offset), is_recommended=offset == 0)
            for offset in range(horizon_days)
        ]

        logger.debug("Generated %d day(s) from %s", len(days), days[0].full_date)
        return days

    def is_past_cutoff(self, now: DateTime) -> bool:
        """Whether the window should skip today."""
        return self.cutoff_shift and now.hour >= self.config.cutoff_hour
