"""Notification records for lesson events. Delivery happens elsewhere."""

from datetime import date

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models.notification import Notification

LESSON_REQUEST = "lesson_request"
LESSON_CONFIRMED = "lesson_confirmed"
LESSON_REJECTED = "lesson_rejected"
LESSON_CANCELLED = "lesson_cancelled"
LESSON_COMPLETED = "lesson_completed"

NOTIFICATION_TYPES = (
    LESSON_REQUEST,
    LESSON_CONFIRMED,
    LESSON_REJECTED,
    LESSON_CANCELLED,
    LESSON_COMPLETED,
)


def format_date(d: date) -> str:
    """e.g. "Monday, March 2, 2026"."""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def lesson_request_message(student_name: str, lesson_date: date, start_time: str) -> str:
    return f"New lesson request from {student_name} on {format_date(lesson_date)} at {start_time}"


def lesson_confirmed_message(teacher_name: str) -> str:
    return f"{teacher_name} has confirmed your lesson."


def lesson_rejected_message(teacher_name: str) -> str:
    return f"{teacher_name} has declined your lesson request."


def lesson_cancelled_message(canceller_name: str) -> str:
    return f"{canceller_name} has cancelled the lesson."


def lesson_completed_message(lesson_date: date) -> str:
    return f"Your lesson on {format_date(lesson_date)} has been marked as completed."


def build_notification(
    user_id: int, type_: str, message: str, related_id: int | None = None
) -> Notification:
    if type_ not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type '{type_}'")
    return Notification(
        user_id=user_id,
        type=type_,
        message=message,
        read=False,
        related_id=related_id,
    )


async def list_notifications(
    session: AsyncSession, user_id: int, unread_only: bool = False
) -> list[Notification]:
    stmt = select(Notification).where(Notification.user_id == user_id)
    if unread_only:
        stmt = stmt.where(Notification.read.is_(False))
    result = await session.execute(
        stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return list(result.scalars().all())


async def mark_read(session: AsyncSession, notification_id: int) -> Notification | None:
    notification = await session.get(Notification, notification_id)
    if notification is None:
        return None
    notification.read = True
    await session.commit()
    return notification


async def mark_all_read(session: AsyncSession, user_id: int) -> int:
    """Mark every unread notification of a user as read. Returns how many changed."""
    result = await session.execute(
        update(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
        .values(read=True)
    )
    await session.commit()
    return result.rowcount or 0


async def unread_count(session: AsyncSession, user_id: int) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(Notification)
        .where(Notification.user_id == user_id, Notification.read.is_(False))
    )
    return result.scalar_one()


async def delete_notification(session: AsyncSession, notification_id: int) -> bool:
    """Delete one notification. Returns False if it did not exist."""
    notification = await session.get(Notification, notification_id)
    if notification is None:
        return False
    await session.delete(notification)
    await session.commit()
    return True
