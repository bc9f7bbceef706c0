from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, PositiveInt


class UserBase(BaseModel):
    name: str = Field(max_length=100)
    email: EmailStr
    role: str = Field(default="student", pattern=r"^(admin|teacher|student)$")


class UserCreate(UserBase):
    pass


class UserRead(UserBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TeacherProfileBase(BaseModel):
    bio: str | None = None
    hourly_rate: float = Field(ge=0)
    lesson_durations: list[PositiveInt] = Field(default_factory=lambda: [30, 60], min_length=1)
    auto_accept: bool = False


class TeacherProfileUpdate(TeacherProfileBase):
    pass


class TeacherProfileRead(TeacherProfileBase):
    user_id: int

    model_config = {"from_attributes": True}


class SubscriptionCreate(BaseModel):
    student_id: int


class SubscriptionRead(BaseModel):
    id: int
    student_id: int
    teacher_id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TeacherDirectoryEntry(BaseModel):
    """A teacher as students browse them; `profile` is None until the teacher sets rates."""

    id: int
    name: str
    email: EmailStr
    profile: TeacherProfileRead | None = None
