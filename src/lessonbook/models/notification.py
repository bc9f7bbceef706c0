from datetime import datetime

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lessonbook.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    type: Mapped[str] = mapped_column(
        String(30)
    )  # lesson_request, lesson_confirmed, lesson_rejected, lesson_cancelled, lesson_completed
    message: Mapped[str] = mapped_column(Text)
    read: Mapped[bool] = mapped_column(default=False)
    related_id: Mapped[int | None] = mapped_column(default=None)  # lesson id
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
