"""Storage interface used by the booking service."""

from abc import ABC, abstractmethod
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models.availability import Availability, BlockedSlot
from lessonbook.models.lesson import Lesson, Payment
from lessonbook.models.notification import Notification
from lessonbook.models.user import Subscription, TeacherProfile, User


class SchedulingStore(ABC):
    """Abstract persistence for the scheduling core.

    Reads return snapshots. Writes are staged until `commit()`; `rollback()`
    discards everything staged since the last commit, which is what makes a
    booking all-or-nothing.
    """

    @abstractmethod
    async def list_availability(self, teacher_id: int) -> list[Availability]: ...

    @abstractmethod
    async def list_blocked_slots(
        self, teacher_id: int, on_date: date | None = None
    ) -> list[BlockedSlot]: ...

    @abstractmethod
    async def list_lessons(self, teacher_id: int, on_date: date | None = None) -> list[Lesson]: ...

    @abstractmethod
    async def get_profile(self, teacher_id: int) -> TeacherProfile | None: ...

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    async def get_lesson(self, lesson_id: int) -> Lesson | None: ...

    @abstractmethod
    async def is_subscribed(self, student_id: int, teacher_id: int) -> bool: ...

    @abstractmethod
    async def add_lesson(self, lesson: Lesson) -> Lesson:
        """Stage a lesson. Its id must be populated on return."""
        ...

    @abstractmethod
    async def add_payment(self, payment: Payment) -> Payment: ...

    @abstractmethod
    async def add_notification(self, notification: Notification) -> Notification: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...


class SqlAlchemyStore(SchedulingStore):
    """SchedulingStore over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_availability(self, teacher_id: int) -> list[Availability]:
        stmt = (
            select(Availability)
            .where(Availability.teacher_id == teacher_id)
            .order_by(Availability.day_of_week, Availability.start_time, Availability.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_blocked_slots(
        self, teacher_id: int, on_date: date | None = None
    ) -> list[BlockedSlot]:
        stmt = select(BlockedSlot).where(BlockedSlot.teacher_id == teacher_id)
        if on_date is not None:
            stmt = stmt.where(BlockedSlot.blocked_date == on_date)
        result = await self.session.execute(stmt.order_by(BlockedSlot.blocked_date, BlockedSlot.id))
        return list(result.scalars().all())

    async def list_lessons(self, teacher_id: int, on_date: date | None = None) -> list[Lesson]:
        stmt = select(Lesson).where(Lesson.teacher_id == teacher_id)
        if on_date is not None:
            stmt = stmt.where(Lesson.lesson_date == on_date)
        result = await self.session.execute(stmt.order_by(Lesson.lesson_date, Lesson.start_time))
        return list(result.scalars().all())

    async def get_profile(self, teacher_id: int) -> TeacherProfile | None:
        return await self.session.get(TeacherProfile, teacher_id)

    async def get_user(self, user_id: int) -> User | None:
        return await self.session.get(User, user_id)

    async def get_lesson(self, lesson_id: int) -> Lesson | None:
        return await self.session.get(Lesson, lesson_id)

    async def is_subscribed(self, student_id: int, teacher_id: int) -> bool:
        result = await self.session.execute(
            select(Subscription.id).where(
                Subscription.student_id == student_id,
                Subscription.teacher_id == teacher_id,
            )
        )
        return result.first() is not None

    async def add_lesson(self, lesson: Lesson) -> Lesson:
        self.session.add(lesson)
        await self.session.flush()
        return lesson

    async def add_payment(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        return payment

    async def add_notification(self, notification: Notification) -> Notification:
        self.session.add(notification)
        await self.session.flush()
        return notification

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
