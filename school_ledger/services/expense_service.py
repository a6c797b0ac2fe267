# school_ledger/services/expense_service.py
"""Institutional expenses: categories, records and the approval step."""
from datetime import date
from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from .base_service import BaseService
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models.expense import Expense, ExpenseCategory, ExpenseStatus

logger = logging.getLogger(__name__)


class ExpenseCategoryService(BaseService[ExpenseCategory]):
    resource_name = "Expense category"

    def __init__(self, db: AsyncSession):
        super().__init__(ExpenseCategory, db)

    async def get_all(self) -> List[ExpenseCategory]:
        stmt = (
            select(self.model)
            .where(self.model.is_deleted == False)
            .order_by(self.model.name.asc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()


class ExpenseService(BaseService[Expense]):
    resource_name = "Expense"

    def __init__(self, db: AsyncSession):
        super().__init__(Expense, db)

    async def _check_category(self, category_id: Optional[UUID]):
        if category_id and await ExpenseCategoryService(self.db).get(category_id) is None:
            raise NotFoundError("Expense category", category_id)

    async def get_expenses_paginated(
        self,
        page: int = 1,
        size: int = 20,
        category_id: Optional[UUID] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ):
        """Expenses, latest expense date first; the date range is inclusive on both ends"""
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end_date must not be before start_date", field="end_date")

        stmt = self._apply_filters(select(self.model), category_id=category_id, status=status)
        count_stmt = self._apply_filters(
            select(func.count()).select_from(self.model), category_id=category_id, status=status
        )
        if start_date:
            stmt = stmt.where(self.model.expense_date >= start_date)
            count_stmt = count_stmt.where(self.model.expense_date >= start_date)
        if end_date:
            stmt = stmt.where(self.model.expense_date <= end_date)
            count_stmt = count_stmt.where(self.model.expense_date <= end_date)

        total = (await self.db.execute(count_stmt)).scalar()
        stmt = (
            stmt.order_by(self.model.expense_date.desc(), self.model.created_at.desc())
            .offset((page - 1) * size)
            .limit(size)
        )
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

    async def create_expense(self, data: dict, created_by: Optional[UUID]) -> Expense:
        await self._check_category(data.get("category_id"))
        expense = await self.create({
            **data,
            "status": ExpenseStatus.PENDING.value,
            "created_by": created_by,
        })
        logger.info(f"Expense '{expense.title}' of {expense.amount} recorded on {expense.expense_date}")
        return expense

    async def update_expense(self, expense_id: UUID, data: dict) -> Expense:
        expense = await self.get_or_404(expense_id)
        if expense.status != ExpenseStatus.PENDING.value:
            raise ConflictError("Expense already reviewed", f"Expense is {expense.status} and can no longer be edited")
        await self._check_category(data.get("category_id"))
        return await self.update(expense_id, data)

    async def review_expense(self, expense_id: UUID, status: ExpenseStatus, reviewed_by: UUID) -> Expense:
        """Approve or reject a pending expense, stamping the reviewer"""
        expense = await self.get_or_404(expense_id)
        if expense.status != ExpenseStatus.PENDING.value:
            raise ConflictError("Expense already reviewed", f"Expense is already {expense.status}")

        expense.status = status.value
        expense.reviewed_by = reviewed_by
        await self.db.commit()
        await self.db.refresh(expense)

        logger.info(f"Expense {expense.id} {expense.status} by {reviewed_by}")
        return expense
