"""
Interactive day/slot picker.

The picker walks a booking flow through its states and delegates the actual
day and slot generation to the domain generators. The reference instant is
read once from an injected clock when the days are loaded, so a picker left
open across an hour boundary shows stale slots until ``load_days`` is called
again.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar

import pendulum
from pendulum import DateTime

from ..domain.day_window import DayWindowGenerator
from ..domain.exceptions import InvalidArgumentError, NoSlotsAvailableError, PickerStateError
from ..domain.formatting import format_picker_label
from ..domain.models import DEFAULT_BUSINESS_HOURS, BusinessHoursConfig, CalendarDay, SlotSelection, TimeSlot
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClockProtocol(Protocol):
    """Anything returning the current local instant."""

    def __call__(self) -> DateTime:
        ...


def system_clock(timezone: str = "Europe/Berlin") -> Callable[[], DateTime]:
    """Clock reading the wall time in ``timezone``."""
    zone = pendulum.timezone(timezone)
    return lambda: pendulum.now(zone)


class PickerState(enum.Enum):
    IDLE = "idle"
    DAYS_LOADED = "days_loaded"
    DAY_SELECTED = "day_selected"
    SLOTS_LOADED = "slots_loaded"
    SLOT_SELECTED = "slot_selected"
    CONFIRMED = "confirmed"


class SlotPicker:
    """
    State machine for one booking flow.

    IDLE -> DAYS_LOADED -> DAY_SELECTED -> SLOTS_LOADED -> SLOT_SELECTED -> CONFIRMED

    Selecting another day discards the slot choice. A confirmed picker is
    finished; start a new one for the next booking.
    """

    def __init__(
        self,
        config: BusinessHoursConfig = DEFAULT_BUSINESS_HOURS,
        horizon_days: int = 3,
        clock: Optional[ClockProtocol] = None,
        cutoff_shift: bool = True,
    ) -> None:
        if horizon_days <= 0:
            raise InvalidArgumentError(f"horizon_days must be greater than zero, got {horizon_days}")

        self._horizon_days = horizon_days
        self._clock = clock or system_clock()
        self._day_generator = DayWindowGenerator(config=config, cutoff_shift=cutoff_shift)
        self._slot_generator = SlotGenerator(config=config)

        self._state = PickerState.IDLE
        self._now: Optional[DateTime] = None
        self._days: List[CalendarDay] = []
        self._slots: List[TimeSlot] = []
        self._selected_day: Optional[CalendarDay] = None
        self._selected_slot: Optional[TimeSlot] = None

    @property
    def state(self) -> PickerState:
        return self._state

    @property
    def now(self) -> Optional[DateTime]:
        """Reference instant captured by the last ``load_days``."""
        return self._now

    @property
    def days(self) -> List[CalendarDay]:
        return list(self._days)

    @property
    def slots(self) -> List[TimeSlot]:
        return list(self._slots)

    @property
    def selected_day(self) -> Optional[CalendarDay]:
        return self._selected_day

    @property
    def selected_slot(self) -> Optional[TimeSlot]:
        return self._selected_slot

    @property
    def has_slots(self) -> bool:
        return bool(self._slots)

    def load_days(self) -> List[CalendarDay]:
        """
        Capture ``now`` and generate the day list.

        Calling it again refreshes the picker: previous days, slots and
        choices are dropped.
        """
        self._ensure_not_confirmed()

        self._now = self._clock()
        self._days = self._day_generator.generate_days(self._now, self._horizon_days)
        self._slots = []
        self._selected_day = None
        self._selected_slot = None
        self._transition(PickerState.DAYS_LOADED)

        return self.days

    def select_day(self, day: Optional[CalendarDay] = None) -> CalendarDay:
        """
        Select one of the loaded days (default: the first one).

        Raises:
            InvalidArgumentError: If the day is not in the loaded list
            PickerStateError: If no days are loaded
        """
        self._ensure_state(
            PickerState.DAYS_LOADED,
            PickerState.DAY_SELECTED,
            PickerState.SLOTS_LOADED,
            PickerState.SLOT_SELECTED,
        )

        if day is None:
            chosen = self._days[0]
        else:
            chosen = self._find(self._days, day, "day")

        self._selected_day = chosen
        self._slots = []
        self._selected_slot = None
        self._transition(PickerState.DAY_SELECTED)

        return chosen

    def load_slots(self) -> List[TimeSlot]:
        """
        Generate the slots of the selected day against the captured ``now``.

        An empty list is a valid outcome; the caller should offer another day.
        """
        self._ensure_state(PickerState.DAY_SELECTED)

        self._slots = self._slot_generator.generate_slots(self._selected_day, self._now)
        self._selected_slot = None
        self._transition(PickerState.SLOTS_LOADED)

        if not self._slots:
            logger.info("No slots available on %s", self._selected_day.full_date)

        return self.slots

    def choose_day(self, day: Optional[CalendarDay] = None) -> List[TimeSlot]:
        """Select a day and load its slots in one step."""
        self.select_day(day)
        return self.load_slots()

    def select_slot(self, slot: Optional[TimeSlot] = None) -> TimeSlot:
        """
        Select one of the loaded slots (default: the first one).

        Raises:
            NoSlotsAvailableError: If the selected day has no slots
            InvalidArgumentError: If the slot is not in the loaded list
        """
        self._ensure_state(PickerState.SLOTS_LOADED, PickerState.SLOT_SELECTED)

        if not self._slots:
            raise NoSlotsAvailableError(
                f"No slots available on {self._selected_day.full_date}, pick another day"
            )

        if slot is None:
            chosen = self._slots[0]
        else:
            chosen = self._find(self._slots, slot, "slot")

        self._selected_slot = chosen
        self._transition(PickerState.SLOT_SELECTED)

        return chosen

    def confirm(self) -> SlotSelection:
        """Finish the flow and return the selection."""
        self._ensure_state(PickerState.SLOT_SELECTED)

        selection = SlotSelection(
            day=self._selected_day,
            slot=self._selected_slot,
            combined_label=format_picker_label(self._selected_slot.instant),
        )
        self._transition(PickerState.CONFIRMED)

        return selection

    def _transition(self, new_state: PickerState) -> None:
        logger.info("Picker %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    def _ensure_state(self, *allowed: PickerState) -> None:
        self._ensure_not_confirmed()
        if self._state not in allowed:
            expected = ", ".join(state.value for state in allowed)
            raise PickerStateError(
                f"Not allowed in state '{self._state.value}' (expected one of: {expected})"
            )

    def _ensure_not_confirmed(self) -> None:
        if self._state is PickerState.CONFIRMED:
            raise PickerStateError("Picker already confirmed; start a new booking flow")

    @staticmethod
    def _find(candidates: Sequence[T], wanted: T, kind: str) -> T:
        # Match by identity (iso_date / instant), not by object
        for candidate in candidates:
            if candidate == wanted:
                return candidate
        raise InvalidArgumentError(f"Unknown {kind}: {wanted}")
