# school_ledger/services/fee_summary_service.py
from decimal import Decimal
from typing import Any, Dict
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from .academic_session_service import AcademicSessionService
from ..core.cache import cache_manager
from ..core.config import settings
from ..models.fee_management import StudentFee, FeeStructure, FeeStatus
from ..utils.cache_invalidation import fee_summary_key

logger = logging.getLogger(__name__)


class FeeSummaryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_fee_summary(self, academic_session_id: UUID) -> Dict[str, Any]:
        """Fee collection summary for an academic session"""
        await AcademicSessionService(self.db).get_or_404(academic_session_id)

        cache_key = fee_summary_key(academic_session_id)
        cached = await cache_manager.get(cache_key)
        if cached:
            return cached

        stmt = (
            select(StudentFee.final_amount, StudentFee.paid_amount, StudentFee.status)
            .join(FeeStructure, StudentFee.fee_structure_id == FeeStructure.id)
            .where(
                FeeStructure.academic_session_id == academic_session_id,
                StudentFee.is_deleted == False
            )
        )
        rows = (await self.db.execute(stmt)).all()

        total_billed = Decimal("0")
        total_collected = Decimal("0")
        total_outstanding = Decimal("0")
        status_counts = {status.value: 0 for status in FeeStatus}

        for row in rows:
            total_billed += row.final_amount
            total_collected += row.paid_amount
            # Overpaid fees do not offset what other students still owe
            total_outstanding += max(row.final_amount - row.paid_amount, Decimal("0"))
            status_counts[row.status] = status_counts.get(row.status, 0) + 1

        summary = {
            "academic_session_id": academic_session_id,
            "total_fees": len(rows),
            "total_billed": total_billed,
            "total_collected": total_collected,
            "total_outstanding": total_outstanding,
            "collection_percentage": round(float(total_collected / total_billed * 100), 2) if total_billed > 0 else 0.0,
            "status_counts": status_counts,
        }

        await cache_manager.set(cache_key, summary, expire=settings.cache_ttl)
        logger.debug(f"Fee summary computed for session {academic_session_id}: {len(rows)} fees")
        return summary
