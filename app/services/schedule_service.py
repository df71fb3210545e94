import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timeutils import day_of_week, time_to_minutes
from app.models.schedule import WorkSchedule, WorkScheduleBreak
from app.services.slot_service import Interval

logger = logging.getLogger(__name__)


@dataclass
class ScheduleResolution:
    schedules: list[WorkSchedule] = field(default_factory=list)
    breaks: list[WorkScheduleBreak] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.schedules

    def windows(self) -> list[tuple[Interval, Interval | None]]:
        """(working window, main break) per schedule row, in row order."""
        out: list[tuple[Interval, Interval | None]] = []
        for s in self.schedules:
            main_break = None
            if s.break_start and s.break_end:
                main_break = Interval(time_to_minutes(s.break_start), time_to_minutes(s.break_end))
            out.append((Interval(time_to_minutes(s.start_time), time_to_minutes(s.end_time)), main_break))
        return out

    def break_intervals(self) -> list[Interval]:
        return [Interval(time_to_minutes(b.start_time), time_to_minutes(b.end_time)) for b in self.breaks]


async def get_exception_schedules(
    session: AsyncSession, professional_id: str, d: date
) -> list[WorkSchedule]:
    """Active exception rows dated to `d`. A failed lookup falls back to the recurring schedule."""
    try:
        result = await session.execute(
            select(WorkSchedule)
            .where(
                WorkSchedule.user_id == professional_id,
                WorkSchedule.is_active.is_(True),
                WorkSchedule.is_exception.is_(True),
                WorkSchedule.date_exception == d,
            )
            .order_by(WorkSchedule.id)
        )
    except SQLAlchemyError as e:
        logger.exception("Exception schedule lookup for professional %s on %s failed: %s", professional_id, d, e)
        await session.rollback()
        return []
    return list(result.scalars().all())


async def get_recurring_schedules(
    session: AsyncSession, professional_id: str, d: date
) -> list[WorkSchedule]:
    """Active weekly rows for the weekday of `d`. A failed lookup means no schedule that day."""
    try:
        result = await session.execute(
            select(WorkSchedule)
            .where(
                WorkSchedule.user_id == professional_id,
                WorkSchedule.is_active.is_(True),
                WorkSchedule.is_exception.is_(False),
                WorkSchedule.day_of_week == day_of_week(d),
            )
            .order_by(WorkSchedule.id)
        )
    except SQLAlchemyError as e:
        logger.exception("Recurring schedule lookup for professional %s on %s failed: %s", professional_id, d, e)
        await session.rollback()
        return []
    return list(result.scalars().all())


async def get_schedule_breaks(session: AsyncSession, schedule_id: int) -> list[WorkScheduleBreak]:
    """Active breaks of one schedule by start time. Failures degrade to no breaks."""
    try:
        result = await session.execute(
            select(WorkScheduleBreak)
            .where(
                WorkScheduleBreak.work_schedule_id == schedule_id,
                WorkScheduleBreak.is_active.is_(True),
            )
            .order_by(WorkScheduleBreak.start_time)
        )
    except SQLAlchemyError as e:
        logger.exception("Fetching breaks for schedule %s failed: %s", schedule_id, e)
        await session.rollback()
        return []
    return list(result.scalars().all())


async def resolve_schedule(
    session: AsyncSession, professional_id: str, d: date
) -> ScheduleResolution:
    """Authoritative schedule rows for a professional/date plus the breaks of the first row.

    An active exception dated to `d` replaces the recurring schedule for that
    weekday entirely.
    """
    schedules = await get_exception_schedules(session, professional_id, d)
    source = "exception"
    if not schedules:
        schedules = await get_recurring_schedules(session, professional_id, d)
        source = "recurring"
    if not schedules:
        logger.debug("No work schedule for professional %s on %s", professional_id, d)
        return ScheduleResolution()
    if len(schedules) > 1:
        logger.warning(
            "Professional %s has %d active %s schedules on %s; breaks are taken from schedule %s only",
            professional_id, len(schedules), source, d, schedules[0].id,
        )
    breaks = await get_schedule_breaks(session, schedules[0].id)
    return ScheduleResolution(schedules=schedules, breaks=breaks)
