from datetime import date

from sqlmodel import Field, SQLModel

APPROVED_STATUS = "approved"


class VacationRequest(SQLModel, table=True):
    __tablename__ = "vacation_requests"
    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    start_date: date
    end_date: date
    status: str = "pending"
