from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import get_current_user
from ..schemas.fee_schemas import (
    FeeCategoryCreate, FeeCategoryUpdate, FeeCategoryResponse,
    FeeStructureCreate, FeeStructureUpdate, FeeStructureResponse,
    FeeAssignmentRequest, FeeAssignmentResult,
    StudentFeeCreate, StudentFeeResponse, WaiverUpdate,
    FeeSummaryResponse
)
from ..schemas.pagination import PaginatedResponse
from ..services.fee_structure_service import FeeCategoryService, FeeStructureService
from ..services.fee_assignment_service import FeeAssignmentService
from ..services.student_fee_service import StudentFeeService
from ..services.fee_summary_service import FeeSummaryService

router = APIRouter(
    prefix="/api/v1/fees",
    tags=["Fee Management"],
    dependencies=[Depends(get_current_user)]
)

# Fee Categories
@router.get("/categories", response_model=List[FeeCategoryResponse])
async def get_fee_categories(db: AsyncSession = Depends(get_db)):
    return await FeeCategoryService(db).get_all()

@router.post("/categories", response_model=FeeCategoryResponse, status_code=201)
async def create_fee_category(category_data: FeeCategoryCreate, db: AsyncSession = Depends(get_db)):
    return await FeeCategoryService(db).create(category_data.model_dump())

@router.patch("/categories/{category_id}", response_model=FeeCategoryResponse)
async def update_fee_category(
    category_id: UUID,
    category_data: FeeCategoryUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = FeeCategoryService(db)
    await service.get_or_404(category_id)
    return await service.update(category_id, category_data.model_dump(exclude_unset=True))

@router.delete("/categories/{category_id}")
async def delete_fee_category(category_id: UUID, db: AsyncSession = Depends(get_db)):
    service = FeeCategoryService(db)
    await service.get_or_404(category_id)
    await service.soft_delete(category_id)
    return {"message": "Fee category deleted successfully"}


# Fee Structure Management
@router.get("/structures", response_model=List[FeeStructureResponse])
async def get_fee_structures(
    class_id: Optional[UUID] = Query(None),
    academic_session_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Fee structures, optionally narrowed to a class and/or academic session"""
    return await FeeStructureService(db).get_structures(class_id=class_id, academic_session_id=academic_session_id)

@router.post("/structures", response_model=FeeStructureResponse, status_code=201)
async def create_fee_structure(structure_data: FeeStructureCreate, db: AsyncSession = Depends(get_db)):
    return await FeeStructureService(db).create_fee_structure(structure_data.model_dump())

# Declared before /structures/{structure_id} so "assign" is not parsed as an id
@router.post("/structures/assign", response_model=FeeAssignmentResult)
async def assign_fees_to_students(
    assignment_data: FeeAssignmentRequest,
    db: AsyncSession = Depends(get_db)
):
    """Bill every active enrollment of a class for each of its fee structures in the session"""
    return await FeeAssignmentService(db).assign_fees_to_students(
        class_id=assignment_data.class_id,
        academic_session_id=assignment_data.academic_session_id
    )

@router.get("/structures/{structure_id}", response_model=FeeStructureResponse)
async def get_fee_structure(structure_id: UUID, db: AsyncSession = Depends(get_db)):
    return await FeeStructureService(db).get_or_404(structure_id)

@router.patch("/structures/{structure_id}", response_model=FeeStructureResponse)
async def update_fee_structure(
    structure_id: UUID,
    structure_data: FeeStructureUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await FeeStructureService(db).update_fee_structure(
        structure_id, structure_data.model_dump(exclude_unset=True)
    )

@router.delete("/structures/{structure_id}")
async def delete_fee_structure(structure_id: UUID, db: AsyncSession = Depends(get_db)):
    service = FeeStructureService(db)
    await service.get_or_404(structure_id)
    await service.soft_delete(structure_id)
    return {"message": "Fee structure deleted successfully"}


# Student Fees
@router.get("/student-fees", response_model=PaginatedResponse[StudentFeeResponse])
async def get_student_fees(
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    student_id: Optional[UUID] = Query(None),
    outstanding: bool = Query(False, description="Only pending or partially paid fees"),
    db: AsyncSession = Depends(get_db)
):
    result = await StudentFeeService(db).get_student_fees_paginated(
        page=page,
        size=size,
        student_id=student_id,
        outstanding_only=outstanding
    )
    return PaginatedResponse[StudentFeeResponse].from_page(result)

@router.post("/student-fees", response_model=StudentFeeResponse, status_code=201)
async def create_student_fee(fee_data: StudentFeeCreate, db: AsyncSession = Depends(get_db)):
    """Bill a single student outside the class-wide assignment"""
    return await StudentFeeService(db).create_student_fee(fee_data.model_dump())

@router.get("/student-fees/{student_fee_id}", response_model=StudentFeeResponse)
async def get_student_fee(student_fee_id: UUID, db: AsyncSession = Depends(get_db)):
    return await StudentFeeService(db).get_or_404(student_fee_id)

@router.patch("/student-fees/{student_fee_id}/waiver", response_model=StudentFeeResponse)
async def apply_waiver(
    student_fee_id: UUID,
    waiver_data: WaiverUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Apply a discount or full waiver; the final amount becomes amount - discount"""
    return await StudentFeeService(db).apply_waiver(
        student_fee_id,
        discount_amount=waiver_data.discount_amount,
        waiver_reason=waiver_data.waiver_reason,
        status=waiver_data.status
    )

@router.delete("/student-fees/{student_fee_id}")
async def delete_student_fee(student_fee_id: UUID, db: AsyncSession = Depends(get_db)):
    await StudentFeeService(db).delete_student_fee(student_fee_id)
    return {"message": "Student fee deleted successfully"}


# Fee Summary and Reports
@router.get("/summary/{academic_session_id}", response_model=FeeSummaryResponse)
async def get_fee_summary(academic_session_id: UUID, db: AsyncSession = Depends(get_db)):
    """Fee collection summary for an academic session"""
    return await FeeSummaryService(db).get_fee_summary(academic_session_id)
