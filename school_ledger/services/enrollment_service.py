# school_ledger/services/enrollment_service.py
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .base_service import BaseService
from .academic_session_service import AcademicSessionService
from ..models.enrollment import Enrollment, EnrollmentStatus

logger = logging.getLogger(__name__)


class EnrollmentService(BaseService[Enrollment]):
    resource_name = "Enrollment"

    def __init__(self, db: AsyncSession):
        super().__init__(Enrollment, db)

    async def get_active_enrollments(self, class_id: UUID, academic_session_id: UUID) -> List[Enrollment]:
        """Active enrollments of a class in a session; only these are billed"""
        stmt = select(self.model).where(
            self.model.class_id == class_id,
            self.model.academic_session_id == academic_session_id,
            self.model.status == EnrollmentStatus.ACTIVE.value,
            self.model.is_deleted == False
        ).order_by(self.model.enrollment_date.asc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create(self, obj_in: dict) -> Enrollment:
        await AcademicSessionService(self.db).get_or_404(obj_in["academic_session_id"])
        enrollment = await super().create(obj_in)
        logger.info(
            f"Enrolled student {enrollment.student_id} in class {enrollment.class_id} "
            f"for session {enrollment.academic_session_id}"
        )
        return enrollment

    async def update_enrollment(self, enrollment_id: UUID, data: dict) -> Enrollment:
        enrollment = await self.get_or_404(enrollment_id)
        previous_status = enrollment.status
        enrollment = await self.update(enrollment_id, data)
        if data.get("status") and data["status"] != previous_status:
            logger.info(f"Enrollment {enrollment_id} status {previous_status} -> {enrollment.status}")
        return enrollment

    async def get_enrollments_paginated(
        self,
        page: int = 1,
        size: int = 20,
        student_id: Optional[UUID] = None,
        class_id: Optional[UUID] = None,
        academic_session_id: Optional[UUID] = None,
        status: Optional[str] = None
    ):
        return await self.get_paginated(
            page=page,
            size=size,
            student_id=student_id,
            class_id=class_id,
            academic_session_id=academic_session_id,
            status=status
        )
