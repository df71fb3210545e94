import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import NamedTuple

from app.core.timeutils import BusinessClock, minutes_to_time, overlaps, round_up_to_next_slot

logger = logging.getLogger(__name__)


class Interval(NamedTuple):
    """Half-open [start, end) in minutes since midnight."""

    start: int
    end: int


@dataclass
class DayConflicts:
    appointments: list[Interval] = field(default_factory=list)
    group_activities: list[Interval] = field(default_factory=list)


@dataclass
class Slot:
    start: int
    end: int
    available: bool = True
    professional_id: str | None = None
    professional_name: str | None = None

    @property
    def start_time(self) -> str:
        return minutes_to_time(self.start)

    @property
    def end_time(self) -> str:
        return minutes_to_time(self.end)


def _latest_overlapping_end(start: int, end: int, intervals: Sequence[Interval]) -> int | None:
    ends = [i.end for i in intervals if overlaps(start, end, i.start, i.end)]
    return max(ends) if ends else None


def next_cursor(
    start: int,
    end: int,
    main_break: Interval | None,
    breaks: Sequence[Interval],
    conflicts: DayConflicts,
) -> int | None:
    """Where the cursor must jump to for [start, end) to clear its first conflicting category.

    Categories are checked in order: breaks (the schedule's main break together
    with the additional breaks), appointments, group activities. Within a
    category the latest overlapping end wins. Returns None when the window is free.
    """
    candidate_breaks = [main_break, *breaks] if main_break else list(breaks)
    for intervals in (candidate_breaks, conflicts.appointments, conflicts.group_activities):
        jump = _latest_overlapping_end(start, end, intervals)
        if jump is not None:
            return max(jump, start)
    return None


def generate_slots(
    window: Interval,
    main_break: Interval | None,
    breaks: Sequence[Interval],
    conflicts: DayConflicts,
    duration: int,
    target_date: date,
    clock: BusinessClock,
) -> list[Slot]:
    """Walk one working window in `duration` steps, emitting every free, future slot."""
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration}")
    cursor = window.start

    if clock.is_today(target_date):
        # First boundary strictly after now + buffer; earlier starts count as passed
        first_bookable = round_up_to_next_slot(clock.cutoff_minutes() + 1, duration, origin=window.start)
        if first_bookable > cursor:
            logger.debug("Fast-forward to %s on %s", minutes_to_time(first_bookable), target_date)
            cursor = first_bookable

    slots: list[Slot] = []
    while cursor + duration <= window.end:
        slot_end = cursor + duration
        jump = next_cursor(cursor, slot_end, main_break, breaks, conflicts)
        if jump is not None:
            logger.debug(
                "Slot %s-%s conflicts, jumping to %s",
                minutes_to_time(cursor), minutes_to_time(slot_end), minutes_to_time(jump),
            )
            cursor = jump
            continue
        if clock.has_slot_passed(cursor, target_date):
            cursor += 1
            continue
        slots.append(Slot(start=cursor, end=slot_end))
        cursor += duration
    return slots


def generate_for_schedules(
    windows: Sequence[tuple[Interval, Interval | None]],
    breaks: Sequence[Interval],
    conflicts: DayConflicts,
    duration: int,
    target_date: date,
    clock: BusinessClock,
) -> list[Slot]:
    """Run the generator once per (window, main break) pair, keeping row order."""
    slots: list[Slot] = []
    for window, main_break in windows:
        slots.extend(generate_slots(window, main_break, breaks, conflicts, duration, target_date, clock))
    return slots
