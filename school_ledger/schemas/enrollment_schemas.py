# school_ledger/schemas/enrollment_schemas.py
from typing import Optional
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from .validators import reject_null
from ..models.enrollment import EnrollmentStatus

class EnrollmentCreate(BaseModel):
    student_id: UUID
    class_id: UUID
    section_id: Optional[UUID] = None
    academic_session_id: UUID
    enrollment_date: date = Field(default_factory=date.today)
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE

    model_config = {"use_enum_values": True}

class EnrollmentUpdate(BaseModel):
    section_id: Optional[UUID] = None
    enrollment_date: Optional[date] = None
    status: Optional[EnrollmentStatus] = None

    model_config = {"use_enum_values": True}

    @field_validator("enrollment_date", "status")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

class EnrollmentResponse(BaseModel):
    id: UUID
    student_id: UUID
    class_id: UUID
    section_id: Optional[UUID] = None
    academic_session_id: UUID
    enrollment_date: date
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
