# school_ledger/schemas/institution_schemas.py
"""Pydantic schemas for the institution and its academic sessions."""
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from .validators import reject_null

class InstitutionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Institution name")
    logo: Optional[str] = Field(default=None, max_length=500)
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(default=None, max_length=200)

class InstitutionCreate(InstitutionBase):
    pass

class InstitutionUpdate(BaseModel):
    """All fields optional; the current session is changed through set-current only"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    logo: Optional[str] = Field(default=None, max_length=500)
    address: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class InstitutionResponse(InstitutionBase):
    id: UUID
    current_academic_session_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AcademicSessionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="e.g. 2024-25")
    start_date: date
    end_date: date

    @model_validator(mode='after')
    def validate_dates(self):
        if self.end_date < self.start_date:
            raise ValueError('end_date must not be before start_date')
        return self

class AcademicSessionCreate(AcademicSessionBase):
    pass

class AcademicSessionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("name", "start_date", "end_date")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class AcademicSessionResponse(AcademicSessionBase):
    id: UUID
    is_current: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}
