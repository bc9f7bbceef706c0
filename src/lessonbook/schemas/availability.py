from datetime import date

from pydantic import BaseModel, Field, model_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class AvailabilityCreate(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)

    @model_validator(mode="after")
    def check_order(self) -> "AvailabilityCreate":
        # Zero-padded HH:MM compares correctly as text
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityRead(AvailabilityCreate):
    id: int
    teacher_id: int

    model_config = {"from_attributes": True}


class BlockedSlotCreate(BaseModel):
    blocked_date: date
    all_day: bool = False
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    reason: str | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def check_window(self) -> "BlockedSlotCreate":
        if self.all_day:
            return self
        if self.start_time is None or self.end_time is None:
            raise ValueError("start_time and end_time are required unless all_day is set")
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class BlockedSlotRead(BaseModel):
    id: int
    teacher_id: int
    blocked_date: date
    all_day: bool
    start_time: str | None = None
    end_time: str | None = None
    reason: str | None = None

    model_config = {"from_attributes": True}


class TimeSlotRead(BaseModel):
    start_time: str
    end_time: str
    available: bool

    model_config = {"from_attributes": True}


class FeasibilityRead(BaseModel):
    date: date
    bookable: bool


class CalendarRead(BaseModel):
    start: date
    days: int = Field(ge=1)
    bookable_dates: list[date]
