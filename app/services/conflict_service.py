import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictLookupError
from app.core.timeutils import time_to_minutes
from app.models.appointment import CANCELLED_STATUS, Appointment, GroupActivity
from app.models.vacation import APPROVED_STATUS, VacationRequest
from app.services.slot_service import DayConflicts, Interval

logger = logging.getLogger(__name__)


async def find_approved_vacations(
    session: AsyncSession, professional_id: str, d: date
) -> list[VacationRequest]:
    """Approved vacations covering `d`. A failed lookup counts as not on vacation."""
    try:
        result = await session.execute(
            select(VacationRequest).where(
                VacationRequest.user_id == professional_id,
                VacationRequest.status == APPROVED_STATUS,
                VacationRequest.start_date <= d,
                VacationRequest.end_date >= d,
            )
        )
    except SQLAlchemyError as e:
        logger.exception("Vacation lookup for professional %s on %s failed: %s", professional_id, d, e)
        await session.rollback()
        return []
    return list(result.scalars().all())


async def get_booked_appointments(
    session: AsyncSession, professional_id: str, d: date
) -> list[Appointment]:
    result = await session.execute(
        select(Appointment).where(
            Appointment.professional_id == professional_id,
            Appointment.date == d,
            Appointment.status != CANCELLED_STATUS,
        )
    )
    return list(result.scalars().all())


async def get_group_activities(
    session: AsyncSession, professional_id: str, d: date
) -> list[GroupActivity]:
    result = await session.execute(
        select(GroupActivity).where(
            GroupActivity.professional_id == professional_id,
            GroupActivity.date == d,
            GroupActivity.status != CANCELLED_STATUS,
        )
    )
    return list(result.scalars().all())


def _intervals(rows: list[Appointment] | list[GroupActivity]) -> list[Interval]:
    return [Interval(time_to_minutes(r.start_time), time_to_minutes(r.end_time)) for r in rows]


async def collect_conflicts(session: AsyncSession, professional_id: str, d: date) -> DayConflicts:
    """Appointments and group activities occupying the professional's calendar on `d`."""
    try:
        appointments = await get_booked_appointments(session, professional_id, d)
        activities = await get_group_activities(session, professional_id, d)
    except SQLAlchemyError as e:
        await session.rollback()
        raise ConflictLookupError(
            f"Could not load bookings for professional {professional_id} on {d.isoformat()}"
        ) from e
    return DayConflicts(appointments=_intervals(appointments), group_activities=_intervals(activities))
