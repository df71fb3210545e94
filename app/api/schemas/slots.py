from pydantic import BaseModel, ConfigDict, Field


class AvailableSlotsRequest(BaseModel):
    """Raw body; fields are checked in the availability service so every problem maps to a 400."""

    model_config = ConfigDict(populate_by_name=True)

    organization_id: int | str | None = Field(default=None, alias="organizationId")
    professional_id: int | str | None = Field(default=None, alias="professionalId")
    service_id: int | str | None = Field(default=None, alias="serviceId")
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")


class SlotInfo(BaseModel):
    start_time: str  # HH:MM
    end_time: str
    available: bool = True
    professional_id: str | None = None
    professional_name: str | None = None


class DateRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_date: str = Field(alias="startDate")  # YYYY-MM-DD
    end_date: str = Field(alias="endDate")


class AvailableSlotsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slots_by_date: dict[str, list[SlotInfo]] = Field(alias="slotsByDate")
    date_range: DateRange = Field(alias="dateRange")


class DaySlotsResponse(BaseModel):
    slots: list[SlotInfo]
