from datetime import date, datetime

from pydantic import BaseModel, Field

from lessonbook.schemas.availability import TIME_PATTERN


class BookingRequest(BaseModel):
    student_id: int
    teacher_id: int
    lesson_date: date
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    duration: int = Field(gt=0)
    notes: str | None = Field(default=None, max_length=2000)


class LessonAction(BaseModel):
    """Who is changing the lesson: the teacher for accept/reject, either side for cancel."""

    actor_id: int


class LessonRead(BaseModel):
    id: int
    teacher_id: int
    student_id: int
    lesson_date: date
    start_time: str
    end_time: str
    duration: int
    status: str
    notes: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentRead(BaseModel):
    id: int
    lesson_id: int
    teacher_id: int
    student_id: int
    amount: float
    status: str
    month: str
    paid_at: datetime | None = None

    model_config = {"from_attributes": True}


class PaymentStatusUpdate(BaseModel):
    status: str = Field(pattern=r"^(paid|unpaid)$")


class PaymentSummaryRead(BaseModel):
    teacher_id: int
    month: str
    currency: str
    total: float
    paid: float
    unpaid: float
