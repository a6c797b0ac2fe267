# school_ledger/schemas/fee_schemas.py
"""Pydantic schemas for the fee catalog, student fee ledger and payments."""
from typing import Dict, List, Optional
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from .validators import reject_null
from ..models.fee_management import FeeStatus, PaymentMethod


# Fee categories
class FeeCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None

class FeeCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class FeeCategoryResponse(FeeCategoryCreate):
    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


# Fee structures
class FeeStructureBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    class_id: UUID
    academic_session_id: UUID
    fee_category_id: Optional[UUID] = None
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    due_date: Optional[date] = None
    is_recurring: bool = False

class FeeStructureCreate(FeeStructureBase):
    pass

class FeeStructureUpdate(BaseModel):
    """Editing an amount does not touch student fees that were already assigned"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    fee_category_id: Optional[UUID] = None
    amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    due_date: Optional[date] = None
    is_recurring: Optional[bool] = None

    @field_validator("name", "amount", "is_recurring")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class FeeStructureResponse(FeeStructureBase):
    id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


# Student fees
class StudentFeeCreate(BaseModel):
    student_id: UUID
    fee_structure_id: UUID
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    waiver_reason: Optional[str] = None
    due_date: Optional[date] = None

class StudentFeeResponse(BaseModel):
    id: UUID
    student_id: UUID
    fee_structure_id: UUID
    amount: Decimal
    discount_amount: Decimal
    waiver_reason: Optional[str] = None
    final_amount: Decimal
    paid_amount: Decimal
    status: str
    due_date: Optional[date] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class WaiverUpdate(BaseModel):
    discount_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    waiver_reason: Optional[str] = None
    status: Optional[FeeStatus] = Field(default=None, description="Explicit status override, e.g. waived")

    model_config = {"use_enum_values": True}


# Assignment
class FeeAssignmentRequest(BaseModel):
    class_id: UUID
    academic_session_id: UUID

class FeeAssignmentResult(BaseModel):
    class_id: UUID
    academic_session_id: UUID
    enrollments: int
    fee_structures: int
    created: int
    skipped: int
    student_fees: List[StudentFeeResponse]


# Payments
class PaymentCreate(BaseModel):
    student_fee_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod
    payment_date: date = Field(default_factory=date.today)
    transaction_id: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None

    model_config = {"use_enum_values": True}

class PaymentResponse(BaseModel):
    id: UUID
    student_fee_id: UUID
    student_id: UUID
    amount: Decimal
    payment_method: str
    transaction_id: Optional[str] = None
    payment_date: date
    notes: Optional[str] = None
    received_by: Optional[UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}

class PaymentReceipt(BaseModel):
    """A recorded payment together with the ledger entry it settled against"""
    payment: PaymentResponse
    student_fee: StudentFeeResponse


# Reports
class FeeSummaryResponse(BaseModel):
    academic_session_id: UUID
    total_fees: int
    total_billed: Decimal
    total_collected: Decimal
    total_outstanding: Decimal
    collection_percentage: float
    status_counts: Dict[str, int]
