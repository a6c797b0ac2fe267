# school_ledger/services/student_fee_service.py
from decimal import Decimal
from typing import Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from .base_service import BaseService
from .fee_structure_service import FeeStructureService
from ..core.exceptions import ConflictError, DuplicateRecordError, NotFoundError
from ..models.fee_management import StudentFee, Payment, FeeStatus
from ..utils.cache_invalidation import invalidate_fee_summary_cache

logger = logging.getLogger(__name__)

OUTSTANDING_STATUSES = (FeeStatus.PENDING.value, FeeStatus.PARTIAL.value)


class StudentFeeService(BaseService[StudentFee]):
    resource_name = "Student fee"

    def __init__(self, db: AsyncSession):
        super().__init__(StudentFee, db)

    async def get_for_update(self, student_fee_id: UUID) -> Optional[StudentFee]:
        """Load a student fee and hold its row lock until the transaction ends"""
        stmt = (
            select(self.model)
            .where(self.model.id == student_fee_id, self.model.is_deleted == False)
            .with_for_update()
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_student_fees_paginated(
        self,
        page: int = 1,
        size: int = 20,
        student_id: Optional[UUID] = None,
        outstanding_only: bool = False
    ):
        """Student fees, newest first; outstanding means pending or partial"""
        stmt = select(self.model).where(self.model.is_deleted == False)
        count_stmt = select(func.count()).select_from(self.model).where(self.model.is_deleted == False)

        if student_id:
            stmt = stmt.where(self.model.student_id == student_id)
            count_stmt = count_stmt.where(self.model.student_id == student_id)
        if outstanding_only:
            stmt = stmt.where(self.model.status.in_(OUTSTANDING_STATUSES))
            count_stmt = count_stmt.where(self.model.status.in_(OUTSTANDING_STATUSES))

        total = (await self.db.execute(count_stmt)).scalar()
        stmt = stmt.order_by(self.model.created_at.desc()).offset((page - 1) * size).limit(size)
        items = (await self.db.execute(stmt)).scalars().all()

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "total_pages": (total + size - 1) // size,
            "has_next": page * size < total,
            "has_previous": page > 1,
        }

    async def create_student_fee(self, data: dict) -> StudentFee:
        """Manually bill one student against a fee structure"""
        structure = await FeeStructureService(self.db).get_or_404(data["fee_structure_id"])
        discount = data.get("discount_amount") or Decimal("0")

        student_fee = StudentFee(
            student_id=data["student_id"],
            fee_structure_id=structure.id,
            amount=structure.amount,
            discount_amount=discount,
            waiver_reason=data.get("waiver_reason"),
            final_amount=structure.amount - discount,
            paid_amount=Decimal("0"),
            status=FeeStatus.PENDING.value,
            due_date=data.get("due_date") or structure.due_date,
        )
        self.db.add(student_fee)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateRecordError(
                "student fee",
                "This student is already billed for this fee structure"
            )
        await self.db.refresh(student_fee)
        await invalidate_fee_summary_cache(structure.academic_session_id)
        return student_fee

    async def apply_waiver(
        self,
        student_fee_id: UUID,
        discount_amount: Decimal,
        waiver_reason: Optional[str] = None,
        status: Optional[str] = None
    ) -> StudentFee:
        """
        Set the discount on a student fee and recompute its final amount.

        The discount is not checked against the amount, and payments are not
        re-evaluated: the status only changes when one is supplied.
        """
        student_fee = await self.get_or_404(student_fee_id)

        student_fee.discount_amount = discount_amount
        student_fee.final_amount = student_fee.amount - discount_amount
        if waiver_reason is not None:
            student_fee.waiver_reason = waiver_reason
        if status is not None:
            student_fee.status = status

        await self.db.commit()
        await self.db.refresh(student_fee)
        await invalidate_fee_summary_cache()

        if student_fee.final_amount < 0:
            logger.warning(f"Waiver on student fee {student_fee.id} exceeds the fee amount: final {student_fee.final_amount}")
        logger.info(
            f"Waiver applied to student fee {student_fee.id}: discount {student_fee.discount_amount}, "
            f"final {student_fee.final_amount}, status {student_fee.status}"
        )
        return student_fee

    async def delete_student_fee(self, student_fee_id: UUID) -> None:
        """Remove an unpaid ledger entry; entries with payments are kept for the journal"""
        # Locked so a payment cannot land between the count and the delete
        student_fee = await self.get_for_update(student_fee_id)
        if student_fee is None:
            await self.db.rollback()
            raise NotFoundError(self.resource_name, student_fee_id)

        payment_count = (await self.db.execute(
            select(func.count()).select_from(Payment).where(Payment.student_fee_id == student_fee.id)
        )).scalar()
        if payment_count:
            await self.db.rollback()
            raise ConflictError(
                "Student fee has payments",
                f"Student fee has {payment_count} recorded payment(s) and cannot be deleted"
            )

        await self.db.delete(student_fee)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(
                "Student fee has payments",
                "A payment was recorded against this student fee while it was being deleted"
            )
        await invalidate_fee_summary_cache()
