from app.models.organization import Organization, Service, UserService
from app.models.user import User
from app.models.schedule import WorkSchedule, WorkScheduleBreak
from app.models.appointment import Appointment, GroupActivity
from app.models.vacation import VacationRequest

__all__ = [
    "Organization",
    "Service",
    "UserService",
    "User",
    "WorkSchedule",
    "WorkScheduleBreak",
    "Appointment",
    "GroupActivity",
    "VacationRequest",
]
