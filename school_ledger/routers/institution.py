from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import get_current_user
from ..models.institution import AcademicSession
from ..schemas.institution_schemas import (
    InstitutionCreate, InstitutionUpdate, InstitutionResponse,
    AcademicSessionCreate, AcademicSessionUpdate, AcademicSessionResponse
)
from ..services.academic_session_service import AcademicSessionService, InstitutionService
from ..core.exceptions import ConflictError

router = APIRouter(
    prefix="/api/v1",
    tags=["Institution & Academic Sessions"],
    dependencies=[Depends(get_current_user)]
)


def _session_response(session: AcademicSession, current_id: Optional[UUID]) -> AcademicSessionResponse:
    response = AcademicSessionResponse.model_validate(session)
    response.is_current = session.id == current_id
    return response


# Institution
@router.get("/institution", response_model=Optional[InstitutionResponse])
async def get_institution(db: AsyncSession = Depends(get_db)):
    """The configured institution, or null before setup"""
    return await InstitutionService(db).get_first()

@router.post("/institution", response_model=InstitutionResponse, status_code=201)
async def create_institution(
    institution_data: InstitutionCreate,
    db: AsyncSession = Depends(get_db)
):
    service = InstitutionService(db)
    if await service.get_first():
        raise ConflictError("Institution exists", "An institution is already configured; update it instead")
    return await service.create(institution_data.model_dump())

@router.patch("/institution/{institution_id}", response_model=InstitutionResponse)
async def update_institution(
    institution_id: UUID,
    institution_data: InstitutionUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = InstitutionService(db)
    await service.get_or_404(institution_id)
    return await service.update(institution_id, institution_data.model_dump(exclude_unset=True))


# Academic sessions
@router.get("/academic-sessions", response_model=List[AcademicSessionResponse])
async def get_academic_sessions(db: AsyncSession = Depends(get_db)):
    service = AcademicSessionService(db)
    current_id = await service.get_current_id()
    return [_session_response(s, current_id) for s in await service.get_all()]

@router.get("/academic-sessions/current", response_model=Optional[AcademicSessionResponse])
async def get_current_academic_session(db: AsyncSession = Depends(get_db)):
    session = await AcademicSessionService(db).get_current()
    return _session_response(session, session.id) if session else None

@router.post("/academic-sessions", response_model=AcademicSessionResponse, status_code=201)
async def create_academic_session(
    session_data: AcademicSessionCreate,
    db: AsyncSession = Depends(get_db)
):
    session = await AcademicSessionService(db).create(session_data.model_dump())
    return _session_response(session, None)

@router.get("/academic-sessions/{session_id}", response_model=AcademicSessionResponse)
async def get_academic_session(session_id: UUID, db: AsyncSession = Depends(get_db)):
    service = AcademicSessionService(db)
    session = await service.get_or_404(session_id)
    return _session_response(session, await service.get_current_id())

@router.patch("/academic-sessions/{session_id}", response_model=AcademicSessionResponse)
async def update_academic_session(
    session_id: UUID,
    session_data: AcademicSessionUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = AcademicSessionService(db)
    session = await service.update_session(session_id, session_data.model_dump(exclude_unset=True))
    return _session_response(session, await service.get_current_id())

@router.delete("/academic-sessions/{session_id}")
async def delete_academic_session(session_id: UUID, db: AsyncSession = Depends(get_db)):
    await AcademicSessionService(db).delete_session(session_id)
    return {"message": "Academic session deleted successfully"}

@router.post("/academic-sessions/{session_id}/set-current", response_model=AcademicSessionResponse)
async def set_current_academic_session(session_id: UUID, db: AsyncSession = Depends(get_db)):
    session = await AcademicSessionService(db).set_current(session_id)
    return _session_response(session, session.id)
