from datetime import date
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, get_current_user
from ..models.expense import ExpenseStatus
from ..schemas.expense_schemas import (
    ExpenseCategoryCreate, ExpenseCategoryUpdate, ExpenseCategoryResponse,
    ExpenseCreate, ExpenseUpdate, ExpenseResponse
)
from ..schemas.pagination import PaginatedResponse
from ..services.expense_service import ExpenseCategoryService, ExpenseService

router = APIRouter(
    prefix="/api/v1/expenses",
    tags=["Expenses"],
    dependencies=[Depends(get_current_user)]
)

# Expense Categories
@router.get("/categories", response_model=List[ExpenseCategoryResponse])
async def get_expense_categories(db: AsyncSession = Depends(get_db)):
    return await ExpenseCategoryService(db).get_all()

@router.post("/categories", response_model=ExpenseCategoryResponse, status_code=201)
async def create_expense_category(category_data: ExpenseCategoryCreate, db: AsyncSession = Depends(get_db)):
    return await ExpenseCategoryService(db).create(category_data.model_dump())

@router.patch("/categories/{category_id}", response_model=ExpenseCategoryResponse)
async def update_expense_category(
    category_id: UUID,
    category_data: ExpenseCategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = ExpenseCategoryService(db)
    await service.get_or_404(category_id)
    return await service.update(category_id, category_data.model_dump(exclude_unset=True))

@router.delete("/categories/{category_id}")
async def delete_expense_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    service = ExpenseCategoryService(db)
    await service.get_or_404(category_id)
    await service.soft_delete(category_id)
    return {"message": "Expense category deleted successfully"}


# Expenses
@router.get("", response_model=PaginatedResponse[ExpenseResponse])
async def get_expenses(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    category_id: Optional[UUID] = Query(None),
    status: Optional[ExpenseStatus] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Expenses filtered by category, review status and expense date range"""
    result = await ExpenseService(db).get_expenses_paginated(
        page=page,
        size=size,
        category_id=category_id,
        status=status.value if status else None,
        start_date=start_date,
        end_date=end_date
    )
    return PaginatedResponse[ExpenseResponse].from_page(result)

@router.post("", response_model=ExpenseResponse, status_code=201)
async def create_expense(
    expense_data: ExpenseCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ExpenseService(db).create_expense(expense_data.model_dump(), created_by=current_user.id)

@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(expense_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ExpenseService(db).get_or_404(expense_id)

@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: UUID,
    expense_data: ExpenseUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Edit a pending expense"""
    return await ExpenseService(db).update_expense(expense_id, expense_data.model_dump(exclude_unset=True))

@router.post("/{expense_id}/approve", response_model=ExpenseResponse)
async def approve_expense(
    expense_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ExpenseService(db).review_expense(expense_id, ExpenseStatus.APPROVED, reviewed_by=current_user.id)

@router.post("/{expense_id}/reject", response_model=ExpenseResponse)
async def reject_expense(
    expense_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ExpenseService(db).review_expense(expense_id, ExpenseStatus.REJECTED, reviewed_by=current_user.id)

@router.delete("/{expense_id}")
async def delete_expense(expense_id: UUID, db: AsyncSession = Depends(get_db)):
    service = ExpenseService(db)
    await service.get_or_404(expense_id)
    await service.soft_delete(expense_id)
    return {"message": "Expense deleted successfully"}
