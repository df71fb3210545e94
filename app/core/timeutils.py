from collections.abc import Callable
from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo


def time_to_minutes(value: str | time | None) -> int:
    """Minutes since midnight for "HH:MM", "HH:MM:SS" or a time. Malformed input yields 0."""
    if value is None:
        return 0
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return 0
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def round_up_to_next_slot(minutes: int, duration: int, origin: int = 0) -> int:
    """Ceiling of `minutes` to the next multiple of `duration` counted from `origin`."""
    steps = -(-(minutes - origin) // duration)
    return origin + steps * duration


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap: touching intervals do not overlap."""
    return start_a < end_b and start_b < end_a


def day_of_week(d: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


class BusinessClock:
    """Wall clock pinned to the business timezone, with the safety buffer for imminent slots."""

    def __init__(
        self,
        timezone: str,
        buffer_minutes: int = 5,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.zone = ZoneInfo(timezone)
        self.buffer_minutes = buffer_minutes
        self._now = now or (lambda: datetime.now(UTC))

    def now(self) -> datetime:
        return self._now().astimezone(self.zone)

    def current_time_in_minutes(self) -> int:
        current = self.now()
        return current.hour * 60 + current.minute

    def is_today(self, d: date) -> bool:
        return d == self.now().date()

    def cutoff_minutes(self) -> int:
        return self.current_time_in_minutes() + self.buffer_minutes

    def has_slot_passed(self, slot_start: int, d: date) -> bool:
        if not self.is_today(d):
            return False
        return slot_start <= self.cutoff_minutes()
