import uuid
from datetime import date
from decimal import Decimal

import pytest

from school_ledger.core.exceptions import NotFoundError
from school_ledger.services.fee_assignment_service import FeeAssignmentService
from school_ledger.services.payment_service import PaymentService
from school_ledger.services.student_fee_service import StudentFeeService


@pytest.fixture
async def student_fee(db, academic_session, class_id, enroll, fee_structure):
    await enroll()
    await fee_structure(amount="100.00")
    result = await FeeAssignmentService(db).assign_fees_to_students(class_id, academic_session.id)
    return result["student_fees"][0]


async def test_discount_reduces_final_amount(db, student_fee):
    fee = await StudentFeeService(db).apply_waiver(
        student_fee.id, discount_amount=Decimal("20.00"), waiver_reason="Sibling discount"
    )

    assert fee.amount == Decimal("100.00")
    assert fee.discount_amount == Decimal("20.00")
    assert fee.final_amount == Decimal("80.00")
    assert fee.waiver_reason == "Sibling discount"
    assert fee.status == "pending"


async def test_discount_replaces_previous_discount(db, student_fee):
    service = StudentFeeService(db)
    await service.apply_waiver(student_fee.id, discount_amount=Decimal("20.00"))
    fee = await service.apply_waiver(student_fee.id, discount_amount=Decimal("5.00"))

    assert fee.final_amount == Decimal("95.00")


async def test_discount_larger_than_amount_is_kept(db, student_fee):
    fee = await StudentFeeService(db).apply_waiver(student_fee.id, discount_amount=Decimal("120.00"))

    assert fee.final_amount == Decimal("-20.00")
    assert fee.status == "pending"


async def test_waiver_does_not_reevaluate_payments(db, student_fee):
    await PaymentService(db).record_payment({
        "student_fee_id": student_fee.id,
        "amount": Decimal("80.00"),
        "payment_method": "cash",
        "payment_date": date(2024, 5, 1),
    }, received_by=None)

    fee = await StudentFeeService(db).apply_waiver(student_fee.id, discount_amount=Decimal("20.00"))

    assert fee.final_amount == Decimal("80.00")
    assert fee.paid_amount == Decimal("80.00")
    assert fee.status == "partial"


async def test_explicit_status_override(db, student_fee):
    fee = await StudentFeeService(db).apply_waiver(
        student_fee.id, discount_amount=Decimal("100.00"), waiver_reason="Scholarship", status="waived"
    )

    assert fee.final_amount == Decimal("0.00")
    assert fee.status == "waived"


async def test_waiver_on_missing_fee(db):
    with pytest.raises(NotFoundError):
        await StudentFeeService(db).apply_waiver(uuid.uuid4(), discount_amount=Decimal("1.00"))


async def test_waiver_endpoint(client, student_fee):
    response = await client.patch(
        f"/api/v1/fees/student-fees/{student_fee.id}/waiver",
        json={"discount_amount": "20.00", "waiver_reason": "Staff child"},
    )

    assert response.status_code == 200
    body = response.json()
    assert Decimal(body["final_amount"]) == Decimal("80.00")
    assert body["waiver_reason"] == "Staff child"
    assert body["status"] == "pending"


async def test_waiver_endpoint_with_status(client, student_fee):
    response = await client.patch(
        f"/api/v1/fees/student-fees/{student_fee.id}/waiver",
        json={"discount_amount": "100.00", "status": "waived"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "waived"


async def test_waiver_endpoint_rejects_negative_discount(client, student_fee):
    response = await client.patch(
        f"/api/v1/fees/student-fees/{student_fee.id}/waiver",
        json={"discount_amount": "-1.00"},
    )
    assert response.status_code == 422
