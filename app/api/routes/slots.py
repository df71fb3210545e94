import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_clock, get_session
from app.api.schemas.slots import (
    AvailableSlotsRequest,
    AvailableSlotsResponse,
    DateRange,
    DaySlotsResponse,
    SlotInfo,
)
from app.core.errors import AvailabilityError, InvalidRequestError
from app.core.timeutils import BusinessClock
from app.services.availability_service import get_available_slots, parse_slot_query
from app.services.slot_service import Slot

logger = logging.getLogger(__name__)
router = APIRouter(tags=["slots"])


def _to_slot_info(slot: Slot) -> SlotInfo:
    return SlotInfo(
        start_time=slot.start_time,
        end_time=slot.end_time,
        available=slot.available,
        professional_id=slot.professional_id,
        professional_name=slot.professional_name,
    )


@router.post(
    "/available-slots",
    response_model=AvailableSlotsResponse,
    response_model_exclude_none=True,
)
async def available_slots(
    body: AvailableSlotsRequest,
    session: AsyncSession = Depends(get_session),
    clock: BusinessClock = Depends(get_clock),
) -> AvailableSlotsResponse:
    """Bookable slots per date for one professional, or for "any" professional offering the service."""
    try:
        query = parse_slot_query(
            body.organization_id,
            body.professional_id,
            body.service_id,
            body.start_date,
            body.end_date,
        )
        slots_by_date = await get_available_slots(session, query, clock)
    except AvailabilityError as e:
        logger.warning("Available slots rejected (%d): %s", e.status_code, e.detail)
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e
    return AvailableSlotsResponse(
        slots_by_date={day: [_to_slot_info(s) for s in slots] for day, slots in slots_by_date.items()},
        date_range=DateRange(
            start_date=query.start_date.isoformat(),
            end_date=query.end_date.isoformat(),
        ),
    )


@router.get(
    "/organizations/{organization_id}/available-slots",
    response_model=DaySlotsResponse,
    response_model_exclude_none=True,
)
async def available_slots_for_day(
    organization_id: str,
    professional_id: str | None = Query(None, alias="professionalId"),
    service_id: str | None = Query(None, alias="serviceId"),
    date_param: str | None = Query(None, alias="date"),
    session: AsyncSession = Depends(get_session),
    clock: BusinessClock = Depends(get_clock),
) -> DaySlotsResponse:
    """Single-day variant used by the public booking page."""
    try:
        if not date_param or not date_param.strip():
            raise InvalidRequestError("Missing required parameters: date")
        query = parse_slot_query(organization_id, professional_id, service_id, date_param, date_param)
        slots_by_date = await get_available_slots(session, query, clock)
    except AvailabilityError as e:
        logger.warning("Available slots rejected (%d): %s", e.status_code, e.detail)
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e
    slots = slots_by_date.get(query.start_date.isoformat(), [])
    return DaySlotsResponse(slots=[_to_slot_info(s) for s in slots])
