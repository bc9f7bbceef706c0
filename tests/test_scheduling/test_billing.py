from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models.lesson import Lesson, Payment
from lessonbook.models.user import User
from lessonbook.scheduling.billing import (
    PaymentSummary,
    lesson_amount,
    list_payments,
    monthly_summary,
    set_payment_status,
)
from lessonbook.scheduling.errors import NotFoundError
from tests.conftest import test_session


async def _seed_payments(session: AsyncSession) -> tuple[int, list[int]]:
    teacher = User(name="Tina Teacher", email="tina@example.com", role="teacher")
    student = User(name="Sam Student", email="sam@example.com")
    session.add_all([teacher, student])
    await session.flush()

    rows = [
        (date(2026, 3, 2), 30.0),
        (date(2026, 3, 9), 40.0),
        (date(2026, 4, 6), 25.5),
    ]
    payment_ids = []
    for lesson_date, amount in rows:
        lesson = Lesson(
            teacher_id=teacher.id,
            student_id=student.id,
            lesson_date=lesson_date,
            start_time="09:00",
            end_time="10:00",
            duration=60,
            status="confirmed",
        )
        session.add(lesson)
        await session.flush()
        payment = Payment(
            lesson_id=lesson.id,
            teacher_id=teacher.id,
            student_id=student.id,
            amount=amount,
            month=f"{lesson_date:%Y-%m}",
        )
        session.add(payment)
        await session.flush()
        payment_ids.append(payment.id)
    await session.commit()
    return teacher.id, payment_ids


class TestLessonAmount:
    @pytest.mark.parametrize(
        "duration,rate,expected",
        [(45, 40.0, 30.0), (60, 55.0, 55.0), (30, 35.0, 17.5), (50, 33.0, 27.5), (45, 0.0, 0.0)],
    )
    def test_prorated_from_hourly_rate(self, duration: int, rate: float, expected: float) -> None:
        assert lesson_amount(duration, rate) == pytest.approx(expected)

    def test_rounded_to_cents(self) -> None:
        assert lesson_amount(20, 10.0) == 3.33


class TestPaymentStatus:
    async def test_mark_paid_stamps_paid_at(self) -> None:
        async with test_session() as session:
            _, payment_ids = await _seed_payments(session)
            payment = await set_payment_status(session, payment_ids[0], "paid")
        assert payment.status == "paid"
        assert payment.paid_at is not None

    async def test_mark_unpaid_clears_paid_at(self) -> None:
        async with test_session() as session:
            _, payment_ids = await _seed_payments(session)
            await set_payment_status(session, payment_ids[0], "paid")
            payment = await set_payment_status(session, payment_ids[0], "unpaid")
        assert payment.status == "unpaid"
        assert payment.paid_at is None

    async def test_unknown_status(self) -> None:
        async with test_session() as session:
            _, payment_ids = await _seed_payments(session)
            with pytest.raises(ValueError, match="refunded"):
                await set_payment_status(session, payment_ids[0], "refunded")

    async def test_missing_payment(self) -> None:
        async with test_session() as session:
            with pytest.raises(NotFoundError):
                await set_payment_status(session, 999, "paid")


class TestMonthlySummary:
    async def test_list_filters_by_month(self) -> None:
        async with test_session() as session:
            teacher_id, _ = await _seed_payments(session)
            march = await list_payments(session, teacher_id=teacher_id, month="2026-03")
            everything = await list_payments(session, teacher_id=teacher_id)
        assert [p.amount for p in march] == [30.0, 40.0]
        # newest month first
        assert [p.month for p in everything] == ["2026-04", "2026-03", "2026-03"]

    async def test_totals_split_by_status(self) -> None:
        async with test_session() as session:
            teacher_id, payment_ids = await _seed_payments(session)
            await set_payment_status(session, payment_ids[1], "paid")
            summary = await monthly_summary(session, teacher_id, "2026-03")
        assert summary == PaymentSummary(month="2026-03", total=70.0, paid=40.0, unpaid=30.0)

    async def test_empty_month(self) -> None:
        async with test_session() as session:
            teacher_id, _ = await _seed_payments(session)
            summary = await monthly_summary(session, teacher_id, "2025-12")
        assert summary == PaymentSummary(month="2025-12")
