from datetime import UTC, date, datetime, time

import pytest

from app.core.timeutils import (
    BusinessClock,
    day_of_week,
    minutes_to_time,
    overlaps,
    round_up_to_next_slot,
    time_to_minutes,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("09:30", 570),
        ("09:30:00", 570),
        (time(9, 30), 570),
        ("00:00", 0),
        ("23:59", 1439),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("9", 0),
        ("ab:cd", 0),
    ],
)
def test_time_to_minutes(value, expected) -> None:
    assert time_to_minutes(value) == expected


def test_minutes_to_time_zero_pads() -> None:
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(545) == "09:05"
    assert minutes_to_time(1440) == "24:00"


def test_round_up_to_next_slot() -> None:
    assert round_up_to_next_slot(60, 30) == 60
    assert round_up_to_next_slot(61, 30) == 90
    assert round_up_to_next_slot(596, 30, origin=540) == 600
    assert round_up_to_next_slot(601, 45, origin=540) == 630


def test_overlaps_is_half_open() -> None:
    assert overlaps(540, 600, 570, 630)
    assert overlaps(540, 720, 600, 630)
    assert not overlaps(540, 600, 600, 630)
    assert not overlaps(600, 630, 540, 600)


def test_day_of_week_starts_on_sunday() -> None:
    assert day_of_week(date(2026, 1, 4)) == 0
    assert day_of_week(date(2026, 1, 5)) == 1
    assert day_of_week(date(2026, 1, 10)) == 6


class TestBusinessClock:
    @pytest.fixture
    def late_clock(self) -> BusinessClock:
        # 23:30 UTC is already 00:30 the next day in Madrid (UTC+1 in winter)
        return BusinessClock("Europe/Madrid", 5, now=lambda: datetime(2026, 1, 5, 23, 30, tzinfo=UTC))

    def test_today_follows_business_timezone(self, late_clock: BusinessClock) -> None:
        assert late_clock.is_today(date(2026, 1, 6))
        assert not late_clock.is_today(date(2026, 1, 5))
        assert late_clock.current_time_in_minutes() == 30

    def test_has_slot_passed_uses_buffer(self, late_clock: BusinessClock) -> None:
        assert late_clock.has_slot_passed(35, date(2026, 1, 6))
        assert not late_clock.has_slot_passed(36, date(2026, 1, 6))

    def test_has_slot_passed_is_false_on_other_days(self, late_clock: BusinessClock) -> None:
        assert not late_clock.has_slot_passed(0, date(2026, 1, 7))
        assert not late_clock.has_slot_passed(0, date(2026, 1, 5))
