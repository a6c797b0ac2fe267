# school_ledger/schemas/expense_schemas.py
"""Pydantic schemas for institutional expenses."""
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from .validators import reject_null
from ..models.fee_management import PaymentMethod


class ExpenseCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class ExpenseCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class ExpenseCategoryResponse(ExpenseCategoryCreate):
    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class ExpenseCreate(BaseModel):
    category_id: Optional[UUID] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    expense_date: date = Field(default_factory=date.today)
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = Field(default=None, max_length=100)

    model_config = {"use_enum_values": True}

class ExpenseUpdate(BaseModel):
    """Review status is changed through approve/reject only"""
    category_id: Optional[UUID] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    expense_date: Optional[date] = None
    payment_method: Optional[PaymentMethod] = None
    reference_number: Optional[str] = Field(default=None, max_length=100)

    model_config = {"use_enum_values": True}

    @field_validator("title", "amount", "expense_date")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class ExpenseResponse(BaseModel):
    id: UUID
    category_id: Optional[UUID] = None
    title: str
    description: Optional[str] = None
    amount: Decimal
    expense_date: date
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    status: str
    reviewed_by: Optional[UUID] = None
    created_by: Optional[UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}
