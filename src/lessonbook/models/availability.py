from datetime import date

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from lessonbook.database import Base


class Availability(Base):
    """Recurring weekly window. Deleted and recreated, never edited."""

    __tablename__ = "availability"

    id: Mapped[int] = mapped_column(primary_key=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    day_of_week: Mapped[int]  # 0=Sunday, 6=Saturday
    start_time: Mapped[str] = mapped_column(String(5))  # "HH:MM"
    end_time: Mapped[str] = mapped_column(String(5))


class BlockedSlot(Base):
    __tablename__ = "blocked_slots"

    id: Mapped[int] = mapped_column(primary_key=True)
    teacher_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    blocked_date: Mapped[date] = mapped_column(index=True)
    all_day: Mapped[bool] = mapped_column(default=False)
    # Both set when all_day is False
    start_time: Mapped[str | None] = mapped_column(String(5), default=None)
    end_time: Mapped[str | None] = mapped_column(String(5), default=None)
    reason: Mapped[str | None] = mapped_column(String(200), default=None)
