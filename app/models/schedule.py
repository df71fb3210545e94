from datetime import date, time

from sqlmodel import Field, SQLModel


class WorkSchedule(SQLModel, table=True):
    """Working window of a professional.

    Recurring rows carry `day_of_week` (0 = Sunday); exception rows carry
    `date_exception` and override the recurring row for that one date.
    """

    __tablename__ = "work_schedules"
    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    day_of_week: int | None = None
    start_time: time
    end_time: time
    break_start: time | None = None
    break_end: time | None = None
    is_exception: bool = False
    date_exception: date | None = Field(default=None, index=True)
    is_active: bool = True


class WorkScheduleBreak(SQLModel, table=True):
    __tablename__ = "work_schedule_breaks"
    id: int | None = Field(default=None, primary_key=True)
    work_schedule_id: int = Field(foreign_key="work_schedules.id", index=True)
    break_name: str
    start_time: time
    end_time: time
    is_active: bool = True
    sort_order: int = 0
