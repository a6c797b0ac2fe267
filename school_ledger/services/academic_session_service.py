# school_ledger/services/academic_session_service.py
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from .base_service import BaseService
from ..core.exceptions import NotFoundError, ValidationError
from ..models.institution import AcademicSession, Institution

logger = logging.getLogger(__name__)


class InstitutionService(BaseService[Institution]):
    resource_name = "Institution"

    def __init__(self, db: AsyncSession):
        super().__init__(Institution, db)

    async def get_first(self) -> Optional[Institution]:
        """The deployment serves a single institution; the oldest row wins"""
        stmt = (
            select(self.model)
            .where(self.model.is_deleted == False)
            .order_by(self.model.created_at.asc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_first_or_404(self) -> Institution:
        institution = await self.get_first()
        if institution is None:
            raise NotFoundError("Institution")
        return institution


class AcademicSessionService(BaseService[AcademicSession]):
    resource_name = "Academic session"

    def __init__(self, db: AsyncSession):
        super().__init__(AcademicSession, db)

    async def get_all(self) -> List[AcademicSession]:
        stmt = (
            select(self.model)
            .where(self.model.is_deleted == False)
            .order_by(self.model.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_current_id(self) -> Optional[UUID]:
        institution = await InstitutionService(self.db).get_first()
        return institution.current_academic_session_id if institution else None

    async def get_current(self) -> Optional[AcademicSession]:
        """Session referenced by the institution, if any"""
        current_id = await self.get_current_id()
        if current_id is None:
            return None
        return await self.get(current_id)

    async def set_current(self, session_id: UUID) -> AcademicSession:
        """Point the institution at a session with a single UPDATE"""
        session = await self.get_or_404(session_id)
        institution = await InstitutionService(self.db).get_first_or_404()

        await self.db.execute(
            update(Institution)
            .where(Institution.id == institution.id)
            .values(current_academic_session_id=session.id)
        )
        await self.db.commit()
        await self.db.refresh(institution)

        logger.info(f"Current academic session set to {session.name} ({session.id})")
        return session

    async def update_session(self, session_id: UUID, data: dict) -> AcademicSession:
        session = await self.get_or_404(session_id)
        start_date = data.get("start_date") or session.start_date
        end_date = data.get("end_date") or session.end_date
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date", field="end_date")
        return await self.update(session_id, data)

    async def delete_session(self, session_id: UUID) -> None:
        session = await self.get_or_404(session_id)

        # Dropping the current session leaves the institution without one
        await self.db.execute(
            update(Institution)
            .where(Institution.current_academic_session_id == session.id)
            .values(current_academic_session_id=None)
        )
        session.is_deleted = True
        await self.db.commit()
        logger.info(f"Academic session {session.id} deleted")
