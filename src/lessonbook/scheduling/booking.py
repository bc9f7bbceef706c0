"""Booking service: turns a chosen slot into a lesson and moves lessons through their lifecycle."""

import logging
from collections.abc import Callable
from datetime import date

from lessonbook.config import Settings, get_settings
from lessonbook.models.lesson import Lesson, Payment
from lessonbook.models.notification import Notification
from lessonbook.models.user import TeacherProfile
from lessonbook.scheduling.billing import UNPAID, lesson_amount
from lessonbook.scheduling.errors import (
    BookingFailedError,
    NotFoundError,
    PermissionDeniedError,
    SlotUnavailableError,
)
from lessonbook.scheduling.lifecycle import (
    CANCELLED,
    COMPLETED,
    CONFIRMED,
    PENDING,
    REJECTED,
    ensure_transition,
)
from lessonbook.scheduling.notifications import (
    LESSON_CANCELLED,
    LESSON_COMPLETED,
    LESSON_CONFIRMED,
    LESSON_REJECTED,
    LESSON_REQUEST,
    build_notification,
    lesson_cancelled_message,
    lesson_completed_message,
    lesson_confirmed_message,
    lesson_rejected_message,
    lesson_request_message,
)
from lessonbook.scheduling.slots import (
    CandidateSlot,
    TimeSlot,
    bookable_dates,
    has_any_available_slot,
    resolve_slots_for_date,
)
from lessonbook.scheduling.store import SchedulingStore
from lessonbook.scheduling.timeutils import month_key, time_to_minutes

logger = logging.getLogger(__name__)


class BookingService:
    """Availability queries, bookings and lesson status changes for one store.

    Objects returned by the store are tracked by it: status changes made here are
    persisted by the next `commit()`.
    """

    def __init__(
        self,
        store: SchedulingStore,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        settings = settings or get_settings()
        self._store = store
        self._clock = clock
        self._stride = settings.slot_stride_minutes
        self._revalidate = settings.revalidate_on_book

    # -- Queries --------------------------------------------------------------

    async def available_slots(
        self, teacher_id: int, target_date: date, duration: int
    ) -> list[TimeSlot]:
        availability = await self._store.list_availability(teacher_id)
        blocked = await self._store.list_blocked_slots(teacher_id, on_date=target_date)
        lessons = await self._store.list_lessons(teacher_id, on_date=target_date)
        return resolve_slots_for_date(
            target_date, availability, blocked, lessons, duration, self._stride
        )

    async def is_date_bookable(self, teacher_id: int, target_date: date) -> bool:
        profile = await self._require_profile(teacher_id)
        availability = await self._store.list_availability(teacher_id)
        blocked = await self._store.list_blocked_slots(teacher_id, on_date=target_date)
        lessons = await self._store.list_lessons(teacher_id, on_date=target_date)
        return has_any_available_slot(
            target_date, availability, blocked, lessons, profile.lesson_durations, self._stride
        )

    async def bookable_dates(
        self, teacher_id: int, start: date, days: int, today: date | None = None
    ) -> list[date]:
        profile = await self._require_profile(teacher_id)
        availability = await self._store.list_availability(teacher_id)
        blocked = await self._store.list_blocked_slots(teacher_id)
        lessons = await self._store.list_lessons(teacher_id)
        return bookable_dates(
            start,
            days,
            availability,
            blocked,
            lessons,
            profile.lesson_durations,
            today=today or self._clock(),
            stride=self._stride,
        )

    # -- Booking --------------------------------------------------------------

    async def is_subscribed(self, student_id: int, teacher_id: int) -> bool:
        return await self._store.is_subscribed(student_id, teacher_id)

    async def book_lesson(
        self,
        student_id: int,
        teacher_id: int,
        target_date: date,
        slot: CandidateSlot | TimeSlot,
        duration: int,
        profile: TeacherProfile,
        notes: str | None = None,
    ) -> Lesson:
        """Book `slot` on `target_date` and record its payment and teacher notification.

        The student is assumed to be subscribed to the teacher. Lesson, Payment and
        Notification are committed together or not at all.

        Raises:
            ValueError: duration is not positive or does not match the slot.
            SlotUnavailableError: the date is past, or the slot is not free according
                to fresh data.
            BookingFailedError: the records could not be saved.
        """
        if duration <= 0:
            raise ValueError(f"Lesson duration must be positive, got {duration}")
        span = time_to_minutes(slot.end_time) - time_to_minutes(slot.start_time)
        if span != duration:
            raise ValueError(
                f"Slot {slot.start_time}-{slot.end_time} is {span} minutes, expected {duration}"
            )
        if target_date < self._clock():
            logger.warning(
                "Rejected booking for student %d with teacher %d on past date %s",
                student_id,
                teacher_id,
                target_date,
            )
            raise SlotUnavailableError(f"{target_date} is in the past")

        status = CONFIRMED if profile.auto_accept else PENDING
        amount = lesson_amount(duration, profile.hourly_rate)

        try:
            if self._revalidate:
                await self._ensure_slot_free(teacher_id, target_date, slot, duration)

            student = await self._store.get_user(student_id)
            student_name = student.name if student is not None else f"Student #{student_id}"

            lesson = await self._store.add_lesson(
                Lesson(
                    teacher_id=teacher_id,
                    student_id=student_id,
                    lesson_date=target_date,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    duration=duration,
                    status=status,
                    notes=notes or None,
                )
            )
            await self._store.add_payment(
                Payment(
                    lesson_id=lesson.id,
                    teacher_id=teacher_id,
                    student_id=student_id,
                    amount=amount,
                    status=UNPAID,
                    month=month_key(target_date),
                )
            )
            await self._store.add_notification(
                build_notification(
                    teacher_id,
                    LESSON_REQUEST,
                    lesson_request_message(student_name, target_date, slot.start_time),
                    lesson.id,
                )
            )
            await self._store.commit()
        except SlotUnavailableError:
            await self._store.rollback()
            logger.warning(
                "Slot %s-%s on %s for teacher %d is no longer available",
                slot.start_time,
                slot.end_time,
                target_date,
                teacher_id,
            )
            raise
        except Exception as e:
            await self._store.rollback()
            logger.error(
                "Booking for student %d with teacher %d on %s failed: %s",
                student_id,
                teacher_id,
                target_date,
                e,
                exc_info=True,
            )
            raise BookingFailedError("Lesson booking could not be saved") from e

        logger.info(
            "Lesson %d booked (%s) for student %d with teacher %d on %s %s-%s",
            lesson.id,
            status,
            student_id,
            teacher_id,
            target_date,
            slot.start_time,
            slot.end_time,
        )
        return lesson

    async def _ensure_slot_free(
        self,
        teacher_id: int,
        target_date: date,
        slot: CandidateSlot | TimeSlot,
        duration: int,
    ) -> None:
        slots = await self.available_slots(teacher_id, target_date, duration)
        for candidate in slots:
            if candidate.key == (slot.start_time, slot.end_time):
                if candidate.available:
                    return
                break
        raise SlotUnavailableError(
            f"Slot {slot.start_time}-{slot.end_time} on {target_date} is no longer available"
        )

    # -- Status transitions ---------------------------------------------------

    async def accept_lesson(self, lesson_id: int, teacher_id: int) -> Lesson:
        lesson = await self._require_lesson(lesson_id)
        self._require_teacher(lesson, teacher_id)
        ensure_transition(lesson.status, CONFIRMED)
        teacher_name = await self._user_name(teacher_id)
        notification = build_notification(
            lesson.student_id, LESSON_CONFIRMED, lesson_confirmed_message(teacher_name), lesson.id
        )
        return await self._apply(lesson, CONFIRMED, notification)

    async def reject_lesson(self, lesson_id: int, teacher_id: int) -> Lesson:
        lesson = await self._require_lesson(lesson_id)
        self._require_teacher(lesson, teacher_id)
        ensure_transition(lesson.status, REJECTED)
        teacher_name = await self._user_name(teacher_id)
        notification = build_notification(
            lesson.student_id, LESSON_REJECTED, lesson_rejected_message(teacher_name), lesson.id
        )
        return await self._apply(lesson, REJECTED, notification)

    async def cancel_lesson(self, lesson_id: int, actor_id: int) -> Lesson:
        """Cancel on behalf of the lesson's student or teacher; the other side is notified."""
        lesson = await self._require_lesson(lesson_id)
        if actor_id == lesson.student_id:
            recipient = lesson.teacher_id
        elif actor_id == lesson.teacher_id:
            recipient = lesson.student_id
        else:
            raise PermissionDeniedError(f"User {actor_id} is not part of lesson {lesson_id}")
        ensure_transition(lesson.status, CANCELLED)
        actor_name = await self._user_name(actor_id)
        notification = build_notification(
            recipient, LESSON_CANCELLED, lesson_cancelled_message(actor_name), lesson.id
        )
        return await self._apply(lesson, CANCELLED, notification)

    async def complete_lesson(self, lesson_id: int) -> Lesson:
        lesson = await self._require_lesson(lesson_id)
        ensure_transition(lesson.status, COMPLETED)
        notification = build_notification(
            lesson.student_id,
            LESSON_COMPLETED,
            lesson_completed_message(lesson.lesson_date),
            lesson.id,
        )
        return await self._apply(lesson, COMPLETED, notification)

    async def _apply(self, lesson: Lesson, status: str, notification: Notification) -> Lesson:
        lesson_id = lesson.id
        previous = lesson.status
        try:
            lesson.status = status
            await self._store.add_notification(notification)
            await self._store.commit()
        except Exception as e:
            await self._store.rollback()
            logger.error(
                "Moving lesson %d from %s to %s failed: %s",
                lesson_id,
                previous,
                status,
                e,
                exc_info=True,
            )
            raise BookingFailedError(f"Lesson {lesson_id} could not be updated") from e
        logger.info("Lesson %d moved from %s to %s", lesson_id, previous, status)
        return lesson

    # -- Helpers --------------------------------------------------------------

    async def _require_lesson(self, lesson_id: int) -> Lesson:
        lesson = await self._store.get_lesson(lesson_id)
        if lesson is None:
            raise NotFoundError(f"Lesson {lesson_id} not found")
        return lesson

    async def _require_profile(self, teacher_id: int) -> TeacherProfile:
        profile = await self._store.get_profile(teacher_id)
        if profile is None:
            raise NotFoundError(f"No teacher profile for user {teacher_id}")
        return profile

    @staticmethod
    def _require_teacher(lesson: Lesson, teacher_id: int) -> None:
        if lesson.teacher_id != teacher_id:
            raise PermissionDeniedError(
                f"Lesson {lesson.id} belongs to another teacher"
            )

    async def _user_name(self, user_id: int) -> str:
        user = await self._store.get_user(user_id)
        return user.name if user is not None else f"User #{user_id}"
