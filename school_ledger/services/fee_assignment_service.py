# school_ledger/services/fee_assignment_service.py
from decimal import Decimal
from typing import Any, Dict, List, Set, Tuple
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .academic_session_service import AcademicSessionService
from .enrollment_service import EnrollmentService
from .fee_structure_service import FeeStructureService
from ..core.exceptions import DatabaseError, DuplicateRecordError
from ..models.fee_management import StudentFee, FeeStatus
from ..utils.cache_invalidation import invalidate_fee_summary_cache

logger = logging.getLogger(__name__)


class FeeAssignmentService:
    """Materializes student fee ledger rows for a class in an academic session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _existing_pairs(self, student_ids: List[UUID], structure_ids: List[UUID]) -> Set[Tuple[UUID, UUID]]:
        stmt = select(StudentFee.student_id, StudentFee.fee_structure_id).where(
            StudentFee.student_id.in_(student_ids),
            StudentFee.fee_structure_id.in_(structure_ids)
        )
        result = await self.db.execute(stmt)
        return {(row.student_id, row.fee_structure_id) for row in result}

    async def assign_fees_to_students(self, class_id: UUID, academic_session_id: UUID) -> Dict[str, Any]:
        """
        Create one pending StudentFee per active enrollment x fee structure.

        Pairs that already have a StudentFee are skipped and never modified, so
        re-running is a no-op. All new rows are committed together; a failure
        leaves nothing behind.
        """
        await AcademicSessionService(self.db).get_or_404(academic_session_id)

        enrollments = await EnrollmentService(self.db).get_active_enrollments(class_id, academic_session_id)
        structures = await FeeStructureService(self.db).get_for_class_session(class_id, academic_session_id)

        result = {
            "class_id": class_id,
            "academic_session_id": academic_session_id,
            "enrollments": len(enrollments),
            "fee_structures": len(structures),
            "created": 0,
            "skipped": 0,
            "student_fees": [],
        }
        if not enrollments or not structures:
            logger.info(f"Nothing to assign for class {class_id} in session {academic_session_id}")
            return result

        seen = await self._existing_pairs(
            list({e.student_id for e in enrollments}),
            [s.id for s in structures]
        )

        new_fees: List[StudentFee] = []
        for enrollment in enrollments:
            for structure in structures:
                pair = (enrollment.student_id, structure.id)
                if pair in seen:
                    result["skipped"] += 1
                    continue
                # A student enrolled twice in the same class still gets one row per structure
                seen.add(pair)
                new_fees.append(StudentFee(
                    student_id=enrollment.student_id,
                    fee_structure_id=structure.id,
                    amount=structure.amount,
                    discount_amount=Decimal("0"),
                    final_amount=structure.amount,
                    paid_amount=Decimal("0"),
                    status=FeeStatus.PENDING.value,
                    due_date=structure.due_date,
                ))

        if not new_fees:
            logger.info(f"All fees already assigned for class {class_id} in session {academic_session_id}")
            return result

        self.db.add_all(new_fees)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Fee assignment for class {class_id} conflicted with a concurrent run: {e}")
            raise DuplicateRecordError(
                "student fee",
                "Fees were assigned concurrently for this class and session; no rows were written, retry the assignment"
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Fee assignment for class {class_id} failed, batch rolled back: {e}")
            raise DatabaseError("Fee assignment failed; no student fees were written")

        for fee in new_fees:
            await self.db.refresh(fee)

        await invalidate_fee_summary_cache(academic_session_id)

        result["created"] = len(new_fees)
        result["student_fees"] = new_fees
        logger.info(
            f"Assigned {len(new_fees)} fees for class {class_id} in session {academic_session_id} "
            f"({result['skipped']} already present)"
        )
        return result
