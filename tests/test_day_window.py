"""
Tests for the day window generator.
"""

import pendulum
import pytest

from serviceslots.domain.day_window import DayWindowGenerator
from serviceslots.domain.exceptions import InvalidArgumentError
from serviceslots.domain.models import BusinessHoursConfig
from serviceslots.domain.slot_generator import SlotGenerator

TZ = "Europe/Berlin"


class TestDayWindowGenerator:
    """Tests for DayWindowGenerator."""

    @pytest.mark.parametrize("horizon", [1, 3, 7, 30])
    def test_generates_consecutive_days(self, horizon):
        """N days, strictly increasing by exactly one calendar day."""
        now = pendulum.parse("2025-07-12 18:30", tz=TZ)

        days = DayWindowGenerator().generate_days(now, horizon)

        assert len(days) == horizon
        for earlier, later in zip(days, days[1:]):
            assert earlier.iso_date.add(days=1) == later.iso_date

    def test_starts_today_and_recommends_first(self):
        now = pendulum.parse("2025-07-12 18:30", tz=TZ)

        days = DayWindowGenerator().generate_days(now, 3)

        assert [day.full_date for day in days] == ["2025-07-12", "2025-07-13", "2025-07-14"]
        assert [day.is_recommended for day in days] == [True, False, False]
        assert days[0].label == "Sat"
        assert days[0].iso_date == pendulum.parse("2025-07-12 00:00", tz=TZ)

    def test_just_before_cutoff_starts_today(self):
        now = pendulum.parse("2025-07-12 19:59", tz=TZ)

        days = DayWindowGenerator().generate_days(now, 3)

        assert days[0].full_date == "2025-07-12"
        assert days[0].is_recommended

    def test_after_cutoff_recommends_tomorrow(self):
        """Past the cutoff the window starts on the day after now."""
        now = pendulum.parse("2025-07-12 20:15", tz=TZ)

        days = DayWindowGenerator().generate_days(now, 3)

        assert [day.full_date for day in days] == ["2025-07-13", "2025-07-14", "2025-07-15"]
        recommended = [day for day in days if day.is_recommended]
        assert len(recommended) == 1
        assert recommended[0].full_date == "2025-07-13"

    @pytest.mark.parametrize("hour", range(24))
    def test_recommended_day_follows_cutoff(self, hour):
        """Exactly one day is recommended and it always has slots."""
        now = pendulum.parse("2025-07-12 00:30", tz=TZ).set(hour=hour)

        days = DayWindowGenerator().generate_days(now, 3)

        recommended = [day for day in days if day.is_recommended]
        assert len(recommended) == 1
        expected = now if hour < 20 else now.add(days=1)
        assert recommended[0].full_date == expected.to_date_string()
        assert SlotGenerator().generate_slots(recommended[0], now)

    def test_recommended_day_at_cutoff_has_opening_slot(self):
        now = pendulum.parse("2025-07-12 20:15", tz=TZ)

        recommended = DayWindowGenerator().generate_days(now, 3)[0]
        slots = SlotGenerator().generate_slots(recommended, now)

        assert slots[0].iso_time == "10:00"

    def test_without_cutoff_shift_today_stays_first(self):
        now = pendulum.parse("2025-07-12 20:15", tz=TZ)

        days = DayWindowGenerator(cutoff_shift=False).generate_days(now, 3)

        assert days[0].full_date == "2025-07-12"
        assert days[0].is_recommended

    def test_uses_configured_cutoff(self):
        now = pendulum.parse("2025-07-12 18:00", tz=TZ)
        generator = DayWindowGenerator(config=BusinessHoursConfig(cutoff_hour=18))

        days = generator.generate_days(now, 1)

        assert days[0].full_date == "2025-07-13"

    def test_crosses_month_and_year(self):
        now = pendulum.parse("2025-12-31 09:00", tz=TZ)

        days = DayWindowGenerator().generate_days(now, 2)

        assert [day.full_date for day in days] == ["2025-12-31", "2026-01-01"]
        assert days[1].month == "Jan"

    def test_days_keep_local_midnight_across_dst_change(self):
        """Clocks go forward on 2025-03-30 in Berlin."""
        now = pendulum.parse("2025-03-29 12:00", tz=TZ)

        days = DayWindowGenerator().generate_days(now, 3)

        assert all(day.iso_date.hour == 0 for day in days)
        assert [day.full_date for day in days] == ["2025-03-29", "2025-03-30", "2025-03-31"]

    @pytest.mark.parametrize("horizon", [0, -1])
    def test_non_positive_horizon_raises_error(self, horizon):
        now = pendulum.parse("2025-07-12 18:30", tz=TZ)

        with pytest.raises(InvalidArgumentError, match="horizon_days"):
            DayWindowGenerator().generate_days(now, horizon)

    def test_is_idempotent(self):
        now = pendulum.parse("2025-07-12 18:30", tz=TZ)
        generator = DayWindowGenerator()

        first = generator.generate_days(now, 5)
        second = generator.generate_days(now, 5)

        assert first == second
        assert [(d.label, d.day_of_month, d.month, d.is_recommended) for d in first] == [
            (d.label, d.day_of_month, d.month, d.is_recommended) for d in second
        ]
