from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, get_current_user
from ..schemas.fee_schemas import PaymentCreate, PaymentResponse, PaymentReceipt
from ..schemas.pagination import PaginatedResponse
from ..services.payment_service import PaymentService

router = APIRouter(
    prefix="/api/v1/fees/payments",
    tags=["Fee Payments"],
    dependencies=[Depends(get_current_user)]
)

@router.post("", response_model=PaymentReceipt, status_code=201)
async def record_payment(
    payment_data: PaymentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a payment; the student fee's paid amount and status are recomputed"""
    payment, student_fee = await PaymentService(db).record_payment(
        payment_data.model_dump(),
        received_by=current_user.id
    )
    return {"payment": payment, "student_fee": student_fee}

@router.get("", response_model=PaginatedResponse[PaymentResponse])
async def get_payments(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    student_id: Optional[UUID] = Query(None),
    student_fee_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Payment history, newest first"""
    result = await PaymentService(db).get_payments_paginated(
        page=page,
        size=size,
        student_id=student_id,
        student_fee_id=student_fee_id
    )
    return PaginatedResponse[PaymentResponse].from_page(result)

@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: UUID, db: AsyncSession = Depends(get_db)):
    return await PaymentService(db).get_or_404(payment_id)
