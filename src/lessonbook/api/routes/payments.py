"""Billing record routes: listing, paid/unpaid marking and monthly totals."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.config import get_settings
from lessonbook.database import get_db
from lessonbook.models.lesson import Payment
from lessonbook.scheduling.billing import list_payments, monthly_summary, set_payment_status
from lessonbook.scheduling.errors import NotFoundError
from lessonbook.schemas.lesson import PaymentRead, PaymentStatusUpdate, PaymentSummaryRead

router = APIRouter(prefix="/api/payments", tags=["payments"])

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


@router.get("", response_model=list[PaymentRead])
async def get_payments(
    teacher_id: int | None = Query(default=None),
    month: str | None = Query(default=None, pattern=MONTH_PATTERN),
    session: AsyncSession = Depends(get_db),
) -> list[Payment]:
    return await list_payments(session, teacher_id=teacher_id, month=month)


@router.get("/summary", response_model=PaymentSummaryRead)
async def get_summary(
    teacher_id: int = Query(...),
    month: str = Query(..., pattern=MONTH_PATTERN),
    session: AsyncSession = Depends(get_db),
) -> PaymentSummaryRead:
    """Paid, unpaid and total amounts for one teacher and month ("YYYY-MM")."""
    summary = await monthly_summary(session, teacher_id, month)
    return PaymentSummaryRead(
        teacher_id=teacher_id,
        month=summary.month,
        currency=get_settings().currency,
        total=summary.total,
        paid=summary.paid,
        unpaid=summary.unpaid,
    )


@router.post("/{payment_id}/status", response_model=PaymentRead)
async def update_status(
    payment_id: int,
    body: PaymentStatusUpdate,
    session: AsyncSession = Depends(get_db),
) -> Payment:
    """Mark a payment paid (stamps paid_at) or unpaid (clears it)."""
    try:
        return await set_payment_status(session, payment_id, body.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
