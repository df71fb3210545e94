import datetime

from sqlmodel import Field, SQLModel

CANCELLED_STATUS = "cancelled"


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: int | None = Field(default=None, primary_key=True)
    professional_id: str = Field(foreign_key="users.id", index=True)
    date: datetime.date = Field(index=True)
    start_time: datetime.time
    end_time: datetime.time
    status: str = "pending"


class GroupActivity(SQLModel, table=True):
    """A class or session with several attendees; blocks the professional like one appointment."""

    __tablename__ = "group_activities"
    id: int | None = Field(default=None, primary_key=True)
    professional_id: str = Field(foreign_key="users.id", index=True)
    name: str | None = None
    date: datetime.date = Field(index=True)
    start_time: datetime.time
    end_time: datetime.time
    status: str = "active"
