from datetime import date

import pytest
from pydantic import ValidationError

from lessonbook.schemas.availability import AvailabilityCreate, BlockedSlotCreate, CalendarRead
from lessonbook.schemas.lesson import BookingRequest, PaymentStatusUpdate
from lessonbook.schemas.system import StatusResponse
from lessonbook.schemas.user import TeacherProfileUpdate, UserCreate


class TestUserSchemas:
    def test_user_create_valid(self) -> None:
        user = UserCreate(name="Sam", email="sam@example.com")
        assert user.role == "student"

    def test_user_create_invalid_email(self) -> None:
        with pytest.raises(ValidationError):
            UserCreate(name="Sam", email="not-an-email")

    def test_user_create_invalid_role(self) -> None:
        with pytest.raises(ValidationError):
            UserCreate(name="Sam", email="sam@example.com", role="owner")

    def test_profile_defaults(self) -> None:
        profile = TeacherProfileUpdate(hourly_rate=45.0)
        assert profile.lesson_durations == [30, 60]
        assert profile.auto_accept is False

    @pytest.mark.parametrize("durations", [[], [0], [-30]])
    def test_profile_invalid_durations(self, durations: list[int]) -> None:
        with pytest.raises(ValidationError):
            TeacherProfileUpdate(hourly_rate=45.0, lesson_durations=durations)

    def test_profile_negative_rate(self) -> None:
        with pytest.raises(ValidationError):
            TeacherProfileUpdate(hourly_rate=-1)


class TestAvailabilitySchemas:
    def test_window_valid(self) -> None:
        window = AvailabilityCreate(day_of_week=0, start_time="08:00", end_time="23:59")
        assert window.day_of_week == 0

    @pytest.mark.parametrize(
        "start,end",
        [
            ("12:00", "09:00"),
            ("09:00", "09:00"),
            ("9:00", "12:00"),
            ("09:00", "24:00"),
            ("09:60", "10:00"),
        ],
    )
    def test_window_invalid_times(self, start: str, end: str) -> None:
        with pytest.raises(ValidationError):
            AvailabilityCreate(day_of_week=1, start_time=start, end_time=end)

    @pytest.mark.parametrize("day", [-1, 7])
    def test_window_invalid_day(self, day: int) -> None:
        with pytest.raises(ValidationError):
            AvailabilityCreate(day_of_week=day, start_time="09:00", end_time="10:00")

    def test_all_day_block_needs_no_times(self) -> None:
        block = BlockedSlotCreate(blocked_date=date(2026, 12, 24), all_day=True)
        assert block.start_time is None

    def test_partial_block_needs_both_times(self) -> None:
        with pytest.raises(ValidationError, match="required unless all_day"):
            BlockedSlotCreate(blocked_date=date(2026, 12, 24), start_time="10:00")

    def test_partial_block_order(self) -> None:
        with pytest.raises(ValidationError):
            BlockedSlotCreate(
                blocked_date=date(2026, 12, 24), start_time="11:00", end_time="10:00"
            )

    def test_calendar_days_positive(self) -> None:
        with pytest.raises(ValidationError):
            CalendarRead(start=date(2026, 3, 1), days=0, bookable_dates=[])


class TestLessonSchemas:
    def test_booking_request_valid(self) -> None:
        request = BookingRequest(
            student_id=2,
            teacher_id=1,
            lesson_date=date(2026, 3, 2),
            start_time="10:00",
            end_time="11:00",
            duration=60,
        )
        assert request.notes is None

    def test_booking_request_rejects_bad_duration(self) -> None:
        with pytest.raises(ValidationError):
            BookingRequest(
                student_id=2,
                teacher_id=1,
                lesson_date=date(2026, 3, 2),
                start_time="10:00",
                end_time="11:00",
                duration=0,
            )

    def test_payment_status(self) -> None:
        assert PaymentStatusUpdate(status="paid").status == "paid"
        with pytest.raises(ValidationError):
            PaymentStatusUpdate(status="refunded")


def test_status_response() -> None:
    assert StatusResponse(status="ok").status == "ok"
