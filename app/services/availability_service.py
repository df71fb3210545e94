import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.errors import (
    AvailabilityError,
    ConflictLookupError,
    InvalidRequestError,
    InvalidServiceDurationError,
    NotFoundError,
)
from app.core.timeutils import BusinessClock
from app.models.organization import Organization, Service, UserService
from app.models.user import User
from app.services.conflict_service import collect_conflicts, find_approved_vacations
from app.services.schedule_service import resolve_schedule
from app.services.slot_service import Slot, generate_for_schedules

logger = logging.getLogger(__name__)

ANY_PROFESSIONAL = "any"


@dataclass(frozen=True)
class AnyProfessional:
    pass


@dataclass(frozen=True)
class SpecificProfessional:
    professional_id: str


ProfessionalSelector = AnyProfessional | SpecificProfessional


@dataclass(frozen=True)
class SlotQuery:
    organization_id: int
    professional: ProfessionalSelector
    service_id: int
    start_date: date
    end_date: date

    def dates(self) -> list[date]:
        days = (self.end_date - self.start_date).days
        return [self.start_date + timedelta(days=i) for i in range(days + 1)]


def _is_missing(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_positive_int(value: int | str, message: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequestError(message)
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise InvalidRequestError(message)
    if parsed <= 0:
        raise InvalidRequestError(message)
    return parsed


def _parse_iso_date(value: str, field_name: str) -> date:
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise InvalidRequestError(f"Invalid {field_name}: expected an ISO date (YYYY-MM-DD)")


def parse_professional(value: int | str) -> ProfessionalSelector:
    raw = str(value).strip()
    if raw.lower() == ANY_PROFESSIONAL:
        return AnyProfessional()
    return SpecificProfessional(professional_id=raw)


def parse_slot_query(
    organization_id: int | str | None,
    professional_id: int | str | None,
    service_id: int | str | None,
    start_date: str | None,
    end_date: str | None,
    max_range_days: int | None = None,
) -> SlotQuery:
    """Validate raw request fields. Runs before any data-store access."""
    required = {
        "organizationId": organization_id,
        "professionalId": professional_id,
        "serviceId": service_id,
        "startDate": start_date,
        "endDate": end_date,
    }
    missing = [name for name, value in required.items() if _is_missing(value)]
    if missing:
        raise InvalidRequestError(f"Missing required parameters: {', '.join(missing)}")

    org_id = _parse_positive_int(organization_id, "Invalid organization id")
    svc_id = _parse_positive_int(service_id, "Invalid service id")
    start = _parse_iso_date(start_date, "startDate")
    end = _parse_iso_date(end_date, "endDate")
    if start > end:
        raise InvalidRequestError("startDate must not be after endDate")
    limit = settings.max_range_days if max_range_days is None else max_range_days
    if (end - start).days > limit:
        raise InvalidRequestError(f"Date range cannot exceed {limit} days")

    return SlotQuery(
        organization_id=org_id,
        professional=parse_professional(professional_id),
        service_id=svc_id,
        start_date=start,
        end_date=end,
    )


def parse_service_duration(raw: object) -> int:
    if isinstance(raw, bool) or raw is None:
        raise InvalidServiceDurationError("Invalid service duration")
    try:
        duration = int(str(raw).strip())
    except ValueError:
        raise InvalidServiceDurationError("Invalid service duration")
    if duration <= 0:
        raise InvalidServiceDurationError("Invalid service duration")
    return duration


async def get_organization(session: AsyncSession, organization_id: int) -> Organization | None:
    result = await session.execute(select(Organization).where(Organization.id == organization_id))
    return result.scalar_one_or_none()


async def get_service(session: AsyncSession, service_id: int, organization_id: int) -> Service | None:
    result = await session.execute(
        select(Service).where(
            Service.id == service_id,
            Service.organization_id == organization_id,
        )
    )
    return result.scalar_one_or_none()


async def is_professional_assigned(session: AsyncSession, professional_id: str, service_id: int) -> bool:
    result = await session.execute(
        select(UserService.id).where(
            UserService.user_id == professional_id,
            UserService.service_id == service_id,
        )
    )
    return result.first() is not None


async def get_eligible_professionals(
    session: AsyncSession, service_id: int, organization_id: int
) -> list[User]:
    """Active professionals assigned to the service; every active professional of the organization if none are."""
    result = await session.execute(
        select(User)
        .join(UserService, UserService.user_id == User.id)
        .where(
            UserService.service_id == service_id,
            User.organization_id == organization_id,
            User.is_active.is_(True),
        )
        .order_by(User.id)
    )
    assigned = list(result.scalars().unique().all())
    if assigned:
        return assigned
    logger.info("Service %s has no assigned professionals, using all active professionals", service_id)
    result = await session.execute(
        select(User)
        .where(User.organization_id == organization_id, User.is_active.is_(True))
        .order_by(User.id)
    )
    return list(result.scalars().all())


async def get_slots_for_professional(
    session: AsyncSession,
    professional_id: str,
    d: date,
    duration: int,
    clock: BusinessClock,
) -> list[Slot]:
    vacations = await find_approved_vacations(session, professional_id, d)
    if vacations:
        logger.debug("Professional %s is on vacation on %s", professional_id, d)
        return []

    resolution = await resolve_schedule(session, professional_id, d)
    if resolution.is_empty:
        return []

    try:
        conflicts = await collect_conflicts(session, professional_id, d)
    except ConflictLookupError as e:
        logger.exception("%s; offering no slots", e.detail)
        return []

    slots = generate_for_schedules(
        resolution.windows(), resolution.break_intervals(), conflicts, duration, d, clock
    )
    logger.debug("Professional %s: %d slot(s) on %s", professional_id, len(slots), d)
    return slots


async def get_slots_for_any_professional(
    session: AsyncSession,
    professionals: list[User],
    d: date,
    duration: int,
    clock: BusinessClock,
) -> list[Slot]:
    """Union of every professional's slots; the first professional offering a time window keeps it."""
    merged: dict[tuple[int, int], Slot] = {}
    for professional in professionals:
        name = professional.name or settings.default_professional_name
        try:
            slots = await get_slots_for_professional(session, professional.id, d, duration, clock)
        except (SQLAlchemyError, AvailabilityError) as e:
            logger.exception("Slots for professional %s (%s) on %s failed: %s", professional.id, name, d, e)
            await session.rollback()
            continue
        for slot in slots:
            merged.setdefault(
                (slot.start, slot.end),
                Slot(start=slot.start, end=slot.end, professional_id=professional.id, professional_name=name),
            )
    return sorted(merged.values(), key=lambda s: s.start)


async def get_available_slots(
    session: AsyncSession, query: SlotQuery, clock: BusinessClock
) -> dict[str, list[Slot]]:
    """Slots per date (YYYY-MM-DD) over the inclusive range of `query`."""
    organization = await get_organization(session, query.organization_id)
    if not organization:
        raise NotFoundError("Organization not found")
    service = await get_service(session, query.service_id, query.organization_id)
    if not service:
        raise NotFoundError("Service not found")
    duration = parse_service_duration(service.duration)
    logger.info(
        "Available slots: org=%s service=%s (%d min) professional=%s %s..%s",
        query.organization_id, query.service_id, duration, query.professional,
        query.start_date, query.end_date,
    )

    slots_by_date: dict[str, list[Slot]] = {}
    if isinstance(query.professional, AnyProfessional):
        professionals = await get_eligible_professionals(session, query.service_id, query.organization_id)
        if not professionals:
            logger.info("Organization %s has no active professionals", query.organization_id)
        for d in query.dates():
            slots_by_date[d.isoformat()] = (
                await get_slots_for_any_professional(session, professionals, d, duration, clock)
                if professionals
                else []
            )
        return slots_by_date

    professional_id = query.professional.professional_id
    if not await is_professional_assigned(session, professional_id, query.service_id):
        logger.info("Professional %s is not assigned to service %s; allowing anyway", professional_id, query.service_id)
    for d in query.dates():
        slots_by_date[d.isoformat()] = await get_slots_for_professional(
            session, professional_id, d, duration, clock
        )
    return slots_by_date
