"""
Display helpers for days and slots.

Tokens are rendered with pendulum's default English locale, so the labels do
not depend on the process locale.
"""

import pendulum
from pendulum import DateTime

from .exceptions import InvalidArgumentError

DISPLAY_TIME_FORMAT = "h:mm A"


def format_display_time(instant: DateTime) -> str:
    """Format an instant as "h:mm AM/PM", e.g. 7:00 PM."""
    return instant.format(DISPLAY_TIME_FORMAT)


def format_iso_time(instant: DateTime) -> str:
    """Format an instant as 24h "HH:mm"."""
    return instant.format("HH:mm")


def format_iso_date(instant: DateTime) -> str:
    return instant.format("YYYY-MM-DD")


def format_weekday(instant: DateTime) -> str:
    return instant.format("ddd")


def format_month(instant: DateTime) -> str:
    return instant.format("MMM")


def format_nearest_label(instant: DateTime) -> str:
    """Label used by the nearest-slot shortcut, e.g. "12/07/2025 - 7:00 PM"."""
    return f"{instant.format('DD/MM/YYYY')} - {format_display_time(instant)}"


def format_picker_label(instant: DateTime) -> str:
    """Label emitted when a picker selection is confirmed, e.g. "2025-07-12 19:00"."""
    return instant.format("YYYY-MM-DD HH:mm")


def parse_display_time(text: str) -> tuple[int, int]:
    """
    Parse a "h:mm AM/PM" string back into an (hour, minute) pair.

    Args:
        text: Display time such as "7:00 PM"

    Returns:
        Tuple of 24h hour and minute

    Raises:
        InvalidArgumentError: If the text is not a display time
    """
    try:
        parsed = pendulum.from_format(text.strip().upper(), DISPLAY_TIME_FORMAT)
    except ValueError as exc:
        raise InvalidArgumentError(f"Not a display time: '{text}'") from exc

    return parsed.hour, parsed.minute
