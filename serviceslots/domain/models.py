"""
Domain models for business hours, calendar days and bookable slots.
"""

from dataclasses import dataclass, field

from pendulum import DateTime

from .exceptions import InvalidArgumentError
from .formatting import (
    format_display_time,
    format_iso_date,
    format_iso_time,
    format_month,
    format_weekday,
)


@dataclass(frozen=True)
class BusinessHoursConfig:
    """
    Immutable business-hour constants shared by the generators.

    ``cutoff_hour`` closes the same-day window, ``day_end_hour`` closes the
    window of every later day. Both end boundaries are bookable start times.

    Invariant: day_start_hour < day_end_hour and the slot granularity evenly
    divides the window between them.
    """
    day_start_hour: int = 10
    day_end_hour: int = 20
    cutoff_hour: int = 20
    slot_granularity_minutes: int = 60

    def __post_init__(self):
        for name in ("day_start_hour", "day_end_hour", "cutoff_hour"):
            value = getattr(self, name)
            if not 0 <= value <= 23:
                raise InvalidArgumentError(f"{name} must be between 0 and 23, got {value}")

        if self.day_start_hour >= self.day_end_hour:
            raise InvalidArgumentError(
                f"day_start_hour ({self.day_start_hour}) must be before "
                f"day_end_hour ({self.day_end_hour})"
            )

        if self.slot_granularity_minutes <= 0:
            raise InvalidArgumentError(
                f"slot_granularity_minutes must be greater than zero, "
                f"got {self.slot_granularity_minutes}"
            )

        if self.window_minutes() % self.slot_granularity_minutes:
            raise InvalidArgumentError(
                f"slot_granularity_minutes ({self.slot_granularity_minutes}) must evenly "
                f"divide the {self.window_minutes()} minute business window"
            )

    def window_minutes(self) -> int:
        """Length of the full-day window in minutes."""
        return (self.day_end_hour - self.day_start_hour) * 60

    def slots_per_day(self) -> int:
        """Number of slots a future day offers (both endpoints included)."""
        return self.window_minutes() // self.slot_granularity_minutes + 1


# The picker closes every day at the cutoff hour, the nearest-slot shortcut
# keeps later days open until 21:00.
DEFAULT_BUSINESS_HOURS = BusinessHoursConfig()
NEAREST_SLOT_BUSINESS_HOURS = BusinessHoursConfig(day_end_hour=21)


@dataclass(frozen=True)
class CalendarDay:
    """
    A candidate calendar day offered by the day picker.

    Identity is ``iso_date``: two days compare equal when they are the same
    local midnight, whatever their recommendation flag says.
    """
    iso_date: DateTime
    label: str = field(compare=False)
    day_of_month: int = field(compare=False)
    month: str = field(compare=False)
    is_recommended: bool = field(default=False, compare=False)

    @classmethod
    def from_datetime(cls, dt: DateTime, is_recommended: bool = False) -> "CalendarDay":
        """Build a day from any instant on it, normalised to midnight."""
        midnight = dt.start_of("day")
        return cls(
            iso_date=midnight,
            label=format_weekday(midnight),
            day_of_month=midnight.day,
            month=format_month(midnight),
            is_recommended=is_recommended,
        )

    @property
    def full_date(self) -> str:
        """ISO date string, e.g. 2025-07-12."""
        return format_iso_date(self.iso_date)

    def __str__(self) -> str:
        return f"{self.label} {self.day_of_month} {self.month}"


@dataclass(frozen=True)
class TimeSlot:
    """
    A single bookable start time. Identity is ``instant``.
    """
    instant: DateTime
    display_time: str = field(compare=False)
    iso_time: str = field(compare=False)

    @classmethod
    def at(cls, instant: DateTime) -> "TimeSlot":
        return cls(
            instant=instant,
            display_time=format_display_time(instant),
            iso_time=format_iso_time(instant),
        )

    def __str__(self) -> str:
        return self.display_time


@dataclass(frozen=True)
class SlotSelection:
    """
    The finalised day and slot handed back to the caller.
    """
    day: CalendarDay
    slot: TimeSlot
    combined_label: str

    @property
    def combined_timestamp(self) -> DateTime:
        """The booked start instant."""
        return self.slot.instant

    def __str__(self) -> str:
        return self.combined_label
