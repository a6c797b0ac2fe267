# school_ledger/routers/enrollments.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import get_current_user
from ..models.enrollment import EnrollmentStatus
from ..schemas.enrollment_schemas import EnrollmentCreate, EnrollmentUpdate, EnrollmentResponse
from ..schemas.pagination import PaginatedResponse
from ..services.enrollment_service import EnrollmentService

router = APIRouter(
    prefix="/api/v1/enrollments",
    tags=["Enrollment Management"],
    dependencies=[Depends(get_current_user)]
)

@router.get("", response_model=PaginatedResponse[EnrollmentResponse])
async def get_enrollments(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    student_id: Optional[UUID] = Query(None),
    class_id: Optional[UUID] = Query(None),
    academic_session_id: Optional[UUID] = Query(None),
    status: Optional[EnrollmentStatus] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated enrollments with filtering"""
    result = await EnrollmentService(db).get_enrollments_paginated(
        page=page,
        size=size,
        student_id=student_id,
        class_id=class_id,
        academic_session_id=academic_session_id,
        status=status.value if status else None
    )
    return PaginatedResponse[EnrollmentResponse].from_page(result)

@router.post("", response_model=EnrollmentResponse, status_code=201)
async def create_enrollment(
    enrollment_data: EnrollmentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create new enrollment"""
    return await EnrollmentService(db).create(enrollment_data.model_dump())

@router.get("/{enrollment_id}", response_model=EnrollmentResponse)
async def get_enrollment(enrollment_id: UUID, db: AsyncSession = Depends(get_db)):
    return await EnrollmentService(db).get_or_404(enrollment_id)

@router.patch("/{enrollment_id}", response_model=EnrollmentResponse)
async def update_enrollment(
    enrollment_id: UUID,
    enrollment_data: EnrollmentUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update enrollment details; status changes (transfer, graduation, drop) take it out of fee assignment"""
    return await EnrollmentService(db).update_enrollment(
        enrollment_id, enrollment_data.model_dump(exclude_unset=True)
    )

@router.delete("/{enrollment_id}")
async def delete_enrollment(enrollment_id: UUID, db: AsyncSession = Depends(get_db)):
    service = EnrollmentService(db)
    await service.get_or_404(enrollment_id)
    await service.soft_delete(enrollment_id)
    return {"message": "Enrollment deleted successfully"}
