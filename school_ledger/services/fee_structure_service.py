# school_ledger/services/fee_structure_service.py
"""Fee catalog: categories and per class/session fee structures."""
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .base_service import BaseService
from .academic_session_service import AcademicSessionService
from ..core.exceptions import NotFoundError
from ..models.fee_management import FeeCategory, FeeStructure

logger = logging.getLogger(__name__)


class FeeCategoryService(BaseService[FeeCategory]):
    resource_name = "Fee category"

    def __init__(self, db: AsyncSession):
        super().__init__(FeeCategory, db)

    async def get_all(self) -> List[FeeCategory]:
        stmt = (
            select(self.model)
            .where(self.model.is_deleted == False)
            .order_by(self.model.name.asc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()


class FeeStructureService(BaseService[FeeStructure]):
    resource_name = "Fee structure"

    def __init__(self, db: AsyncSession):
        super().__init__(FeeStructure, db)

    async def get_structures(
        self,
        class_id: Optional[UUID] = None,
        academic_session_id: Optional[UUID] = None
    ) -> List[FeeStructure]:
        stmt = select(self.model).where(self.model.is_deleted == False)
        if class_id:
            stmt = stmt.where(self.model.class_id == class_id)
        if academic_session_id:
            stmt = stmt.where(self.model.academic_session_id == academic_session_id)
        result = await self.db.execute(stmt.order_by(self.model.created_at.desc()))
        return result.scalars().all()

    async def get_for_class_session(self, class_id: UUID, academic_session_id: UUID) -> List[FeeStructure]:
        stmt = select(self.model).where(
            self.model.class_id == class_id,
            self.model.academic_session_id == academic_session_id,
            self.model.is_deleted == False
        ).order_by(self.model.created_at.asc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def _check_references(self, data: dict):
        if data.get("academic_session_id"):
            await AcademicSessionService(self.db).get_or_404(data["academic_session_id"])
        if data.get("fee_category_id"):
            category = await FeeCategoryService(self.db).get(data["fee_category_id"])
            if category is None:
                raise NotFoundError("Fee category", data["fee_category_id"])

    async def create_fee_structure(self, data: dict) -> FeeStructure:
        await self._check_references(data)
        structure = await self.create(data)
        logger.info(f"Fee structure '{structure.name}' created: {structure.amount} for class {structure.class_id}")
        return structure

    async def update_fee_structure(self, structure_id: UUID, data: dict) -> FeeStructure:
        await self.get_or_404(structure_id)
        await self._check_references(data)
        return await self.update(structure_id, data)
