import uuid
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from school_ledger.core.exceptions import DatabaseError, DuplicateRecordError, NotFoundError
from school_ledger.models import StudentFee, EnrollmentStatus
from school_ledger.services.fee_assignment_service import FeeAssignmentService


async def _count_student_fees(db) -> int:
    return (await db.execute(select(func.count()).select_from(StudentFee))).scalar()


async def test_assigns_pending_fee_to_active_enrollment(db, academic_session, class_id, enroll, fee_structure):
    enrollment = await enroll()
    structure = await fee_structure(amount="100.00")

    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert result["created"] == 1
    assert result["skipped"] == 0
    fee = result["student_fees"][0]
    assert fee.student_id == enrollment.student_id
    assert fee.fee_structure_id == structure.id
    assert fee.amount == Decimal("100.00")
    assert fee.discount_amount == Decimal("0")
    assert fee.final_amount == Decimal("100.00")
    assert fee.paid_amount == Decimal("0")
    assert fee.status == "pending"
    assert fee.due_date == structure.due_date


async def test_every_enrollment_gets_every_structure(db, academic_session, class_id, enroll, fee_structure):
    for _ in range(3):
        await enroll()
    await fee_structure(name="Tuition", amount="100.00")
    await fee_structure(name="Library", amount="15.50")

    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert result["enrollments"] == 3
    assert result["fee_structures"] == 2
    assert result["created"] == 6
    assert await _count_student_fees(db) == 6


async def test_reassignment_creates_nothing_and_leaves_rows_alone(db, academic_session, class_id, enroll, fee_structure):
    await enroll()
    await fee_structure(amount="100.00")
    service = FeeAssignmentService(db)

    first = await service.assign_fees_to_students(class_id, academic_session.id)
    fee = first["student_fees"][0]
    fee.paid_amount = Decimal("100.00")
    fee.status = "paid"
    await db.commit()

    second = await service.assign_fees_to_students(class_id, academic_session.id)

    assert second["created"] == 0
    assert second["skipped"] == 1
    assert await _count_student_fees(db) == 1
    await db.refresh(fee)
    assert fee.status == "paid"
    assert fee.paid_amount == Decimal("100.00")


async def test_new_enrollment_is_billed_on_rerun(db, academic_session, class_id, enroll, fee_structure):
    await enroll()
    await fee_structure()
    service = FeeAssignmentService(db)
    await service.assign_fees_to_students(class_id, academic_session.id)

    late = await enroll()
    result = await service.assign_fees_to_students(class_id, academic_session.id)

    assert result["created"] == 1
    assert result["skipped"] == 1
    assert result["student_fees"][0].student_id == late.student_id


async def test_inactive_enrollments_are_not_billed(db, academic_session, class_id, enroll, fee_structure):
    active = await enroll()
    await enroll(status=EnrollmentStatus.TRANSFERRED)
    await enroll(status=EnrollmentStatus.GRADUATED)
    await fee_structure()

    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert result["enrollments"] == 1
    assert [f.student_id for f in result["student_fees"]] == [active.student_id]


async def test_student_enrolled_twice_is_billed_once(db, academic_session, class_id, enroll, fee_structure):
    student_id = uuid.uuid4()
    await enroll(student_id=student_id)
    await enroll(student_id=student_id)
    await fee_structure()

    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert result["created"] == 1
    assert await _count_student_fees(db) == 1


async def test_other_classes_are_untouched(db, academic_session, class_id, enroll, fee_structure):
    other_class = uuid.uuid4()
    await enroll(cls=other_class)
    await fee_structure(cls=other_class)
    await enroll()

    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert result["fee_structures"] == 0
    assert result["created"] == 0
    assert await _count_student_fees(db) == 0


async def test_unknown_class_matches_nothing(db, academic_session, enroll, fee_structure):
    await enroll()
    await fee_structure()

    result = await FeeAssignmentService(db).assign_fees_to_students(uuid.uuid4(), academic_session.id)

    assert result["enrollments"] == 0
    assert result["created"] == 0


async def test_unknown_session_is_not_found(db, class_id):
    with pytest.raises(NotFoundError):
        await FeeAssignmentService(db).assign_fees_to_students(class_id, uuid.uuid4())


async def test_assign_endpoint(client, academic_session, class_id, enroll, fee_structure):
    await enroll()
    await enroll()
    await fee_structure(amount="250.00")

    response = await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["created"] == 2
    assert body["skipped"] == 0
    assert {Decimal(f["final_amount"]) for f in body["student_fees"]} == {Decimal("250.00")}
    assert {f["status"] for f in body["student_fees"]} == {"pending"}

    again = await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )
    assert again.status_code == 200
    assert again.json()["created"] == 0
    assert again.json()["skipped"] == 2


async def test_assign_endpoint_unknown_session(client, class_id):
    response = await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(uuid.uuid4())},
    )
    assert response.status_code == 404


async def test_failed_commit_leaves_no_student_fees(db, academic_session, class_id, enroll, fee_structure, monkeypatch):
    for _ in range(3):
        await enroll()
    await fee_structure(name="Tuition")
    await fee_structure(name="Library", amount="15.00")

    async def failing_commit(self):
        # Rows reach the database before the commit itself fails
        await self.flush()
        raise OperationalError("COMMIT", None, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)

    with pytest.raises(DatabaseError):
        await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert await _count_student_fees(db) == 0


async def test_concurrent_assignment_conflict_is_409_and_writes_nothing(
    db, academic_session, class_id, enroll, fee_structure, monkeypatch
):
    first = await enroll()
    await enroll()
    structure = await fee_structure(amount="100.00")

    # Another run billed the first student after this run read the existing pairs
    db.add(StudentFee(
        student_id=first.student_id,
        fee_structure_id=structure.id,
        amount=Decimal("100.00"),
        discount_amount=Decimal("0"),
        final_amount=Decimal("100.00"),
        paid_amount=Decimal("0"),
        status="pending",
    ))
    await db.commit()

    async def stale_pairs(self, student_ids, structure_ids):
        return set()

    monkeypatch.setattr(FeeAssignmentService, "_existing_pairs", stale_pairs)

    with pytest.raises(DuplicateRecordError) as exc_info:
        await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)

    assert exc_info.value.status_code == 409
    assert await _count_student_fees(db) == 1


async def test_assign_endpoint_conflict_is_409(client, academic_session, class_id, enroll, fee_structure, monkeypatch):
    await enroll()
    await fee_structure()
    await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )

    async def stale_pairs(self, student_ids, structure_ids):
        return set()

    monkeypatch.setattr(FeeAssignmentService, "_existing_pairs", stale_pairs)

    response = await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )
    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "Duplicate student fee"
