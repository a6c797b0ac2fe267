# tests/conftest.py
"""
Test fixtures: each test gets its own in-memory SQLite database and an
httpx client wired to the app through ASGITransport.

Settings are read at import time, so the environment is prepared before
anything from school_ledger is imported.
"""
import os
import uuid
from datetime import date
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["CACHE_ENABLED"] = "false"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from school_ledger.core.database import get_db
from school_ledger.core.security import create_access_token
from school_ledger.main import app
from school_ledger.models import (
    AcademicSession, Base, Enrollment, FeeStructure, Institution,
)
from school_ledger.models.enrollment import EnrollmentStatus


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def auth_headers(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id, {'role': 'accountant'})}"}


@pytest.fixture
async def client(session_factory, auth_headers):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=auth_headers) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def anon_client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# Ledger seed data

@pytest.fixture
async def institution(db):
    institution = Institution(name="Riverside High")
    db.add(institution)
    await db.commit()
    await db.refresh(institution)
    return institution


@pytest.fixture
async def academic_session(db):
    session = AcademicSession(name="2024-2025", start_date=date(2024, 4, 1), end_date=date(2025, 3, 31))
    db.add(session)
    await db.commit()
    await db.refresh(session)
    return session


@pytest.fixture
def class_id():
    return uuid.uuid4()


@pytest.fixture
def enroll(db, academic_session, class_id):
    async def _enroll(student_id=None, status=EnrollmentStatus.ACTIVE, cls=None):
        enrollment = Enrollment(
            student_id=student_id or uuid.uuid4(),
            class_id=cls or class_id,
            academic_session_id=academic_session.id,
            enrollment_date=date(2024, 4, 1),
            status=status.value,
        )
        db.add(enrollment)
        await db.commit()
        await db.refresh(enrollment)
        return enrollment
    return _enroll


@pytest.fixture
def fee_structure(db, academic_session, class_id):
    async def _structure(name="Tuition", amount="100.00", cls=None, due_date=date(2024, 5, 10)):
        structure = FeeStructure(
            name=name,
            class_id=cls or class_id,
            academic_session_id=academic_session.id,
            amount=Decimal(amount),
            due_date=due_date,
            is_recurring=False,
        )
        db.add(structure)
        await db.commit()
        await db.refresh(structure)
        return structure
    return _structure
