# school_ledger/services/payment_service.py
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .base_service import BaseService
from .student_fee_service import StudentFeeService
from ..core.exceptions import DatabaseError, NotFoundError
from ..models.fee_management import Payment, StudentFee, FeeStatus
from ..utils.cache_invalidation import invalidate_fee_summary_cache

logger = logging.getLogger(__name__)


def derive_fee_status(total_paid: Decimal, final_amount: Decimal) -> FeeStatus:
    """Status of a student fee given everything paid against it"""
    if total_paid >= final_amount:
        return FeeStatus.PAID
    if total_paid > 0:
        return FeeStatus.PARTIAL
    return FeeStatus.PENDING


class PaymentService(BaseService[Payment]):
    """Append-only payment journal; keeps each student fee's paid amount and status in step."""
    resource_name = "Payment"

    def __init__(self, db: AsyncSession):
        super().__init__(Payment, db)

    async def total_paid(self, student_fee_id: UUID) -> Decimal:
        """Sum of every payment recorded against a student fee"""
        stmt = select(Payment.amount).where(Payment.student_fee_id == student_fee_id)
        result = await self.db.execute(stmt)
        return sum(result.scalars().all(), Decimal("0"))

    async def record_payment(self, payment_in: dict, received_by: Optional[UUID]) -> Tuple[Payment, StudentFee]:
        """
        Insert a payment and recompute the owning fee's paid amount and status.

        The student fee row stays locked until commit, so concurrent payments
        against the same fee are applied one after another. The paid amount is
        re-summed from the journal rather than incremented.
        """
        student_fee_id = payment_in["student_fee_id"]
        student_fee = await StudentFeeService(self.db).get_for_update(student_fee_id)
        if student_fee is None:
            await self.db.rollback()
            raise NotFoundError("Student fee", student_fee_id)

        payment = Payment(
            **payment_in,
            student_id=student_fee.student_id,
            received_by=received_by,
        )
        self.db.add(payment)

        try:
            await self.db.flush()
            total_paid = await self.total_paid(student_fee.id)
            status = derive_fee_status(total_paid, student_fee.final_amount)

            student_fee.paid_amount = total_paid
            student_fee.status = status.value
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Payment against student fee {student_fee_id} failed: {e}")
            raise DatabaseError("Payment could not be recorded")

        await self.db.refresh(payment)
        await self.db.refresh(student_fee)
        await invalidate_fee_summary_cache()

        if total_paid > student_fee.final_amount:
            logger.warning(
                f"Student fee {student_fee.id} overpaid: {total_paid} against {student_fee.final_amount}"
            )
        logger.info(
            f"Payment {payment.id} of {payment.amount} via {payment.payment_method} recorded; "
            f"student fee {student_fee.id} now {student_fee.status} ({student_fee.paid_amount}/{student_fee.final_amount})"
        )
        return payment, student_fee

    async def get_payments_paginated(
        self,
        page: int = 1,
        size: int = 20,
        student_id: Optional[UUID] = None,
        student_fee_id: Optional[UUID] = None
    ):
        return await self.get_paginated(
            page=page,
            size=size,
            order_by="payment_date",
            sort="desc",
            student_id=student_id,
            student_fee_id=student_fee_id
        )
