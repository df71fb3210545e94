from app.core.config import settings
from app.core.db import get_session
from app.core.timeutils import BusinessClock

__all__ = ["get_clock", "get_session"]


def get_clock() -> BusinessClock:
    """Clock in the business timezone; overridden in tests to pin "now"."""
    return BusinessClock(settings.business_timezone, settings.past_slot_buffer_minutes)
