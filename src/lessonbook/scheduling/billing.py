"""Billing records: lesson pricing, paid/unpaid marking and monthly totals.

A Payment is a bookkeeping entry, not a money transfer. Its amount is set once
when the lesson is booked and never recomputed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.models.lesson import Payment
from lessonbook.scheduling.errors import NotFoundError

logger = logging.getLogger(__name__)

UNPAID = "unpaid"
PAID = "paid"
PAYMENT_STATUSES = (UNPAID, PAID)


@dataclass
class PaymentSummary:
    month: str
    total: float = 0.0
    paid: float = 0.0
    unpaid: float = 0.0


def lesson_amount(duration: int, hourly_rate: float) -> float:
    """Price of a lesson, prorated from the hourly rate. 45 min at 40/h -> 30.0."""
    return round(duration / 60 * hourly_rate, 2)


async def set_payment_status(session: AsyncSession, payment_id: int, status: str) -> Payment:
    if status not in PAYMENT_STATUSES:
        raise ValueError(f"Unknown payment status '{status}'")
    payment = await session.get(Payment, payment_id)
    if payment is None:
        raise NotFoundError(f"Payment {payment_id} not found")

    payment.status = status
    payment.paid_at = datetime.utcnow() if status == PAID else None
    await session.commit()
    await session.refresh(payment)
    logger.info("Payment %d marked %s", payment_id, status)
    return payment


async def list_payments(
    session: AsyncSession, teacher_id: int | None = None, month: str | None = None
) -> list[Payment]:
    stmt = select(Payment)
    if teacher_id is not None:
        stmt = stmt.where(Payment.teacher_id == teacher_id)
    if month is not None:
        stmt = stmt.where(Payment.month == month)
    result = await session.execute(stmt.order_by(Payment.month.desc(), Payment.id))
    return list(result.scalars().all())


async def monthly_summary(session: AsyncSession, teacher_id: int, month: str) -> PaymentSummary:
    summary = PaymentSummary(month=month)
    for payment in await list_payments(session, teacher_id=teacher_id, month=month):
        if payment.status == PAID:
            summary.paid += payment.amount
        else:
            summary.unpaid += payment.amount
    summary.paid = round(summary.paid, 2)
    summary.unpaid = round(summary.unpaid, 2)
    summary.total = round(summary.paid + summary.unpaid, 2)
    return summary
