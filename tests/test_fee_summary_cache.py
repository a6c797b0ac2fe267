import uuid
from decimal import Decimal

import pytest
from fakeredis import aioredis as fake_aioredis

from school_ledger.core.cache import cache_manager
from school_ledger.utils.cache_invalidation import fee_summary_key, invalidate_fee_summary_cache


@pytest.fixture
async def redis(monkeypatch):
    fake = fake_aioredis.FakeRedis()
    monkeypatch.setattr(cache_manager, "enabled", True)
    monkeypatch.setattr(cache_manager, "redis", fake)
    yield fake
    await fake.flushall()
    await fake.aclose()


async def _billed_class(client, academic_session, class_id, enroll, fee_structure, students=2):
    for _ in range(students):
        await enroll()
    await fee_structure(amount="100.00")
    response = await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )
    return response.json()["student_fees"]


async def _summary(client, academic_session):
    response = await client.get(f"/api/v1/fees/summary/{academic_session.id}")
    assert response.status_code == 200
    return response.json()


async def test_summary_is_cached(client, redis, academic_session, class_id, enroll, fee_structure):
    await _billed_class(client, academic_session, class_id, enroll, fee_structure)

    summary = await _summary(client, academic_session)

    assert summary["total_fees"] == 2
    assert await redis.exists(fee_summary_key(academic_session.id)) == 1
    assert (await _summary(client, academic_session)) == summary


async def test_summary_is_fresh_after_payment(client, redis, academic_session, class_id, enroll, fee_structure):
    fees = await _billed_class(client, academic_session, class_id, enroll, fee_structure)
    before = await _summary(client, academic_session)
    assert Decimal(before["total_collected"]) == Decimal("0")

    await client.post("/api/v1/fees/payments", json={
        "student_fee_id": fees[0]["id"], "amount": "40.00", "payment_method": "cash",
    })
    assert await redis.exists(fee_summary_key(academic_session.id)) == 0

    after = await _summary(client, academic_session)
    assert Decimal(after["total_collected"]) == Decimal("40.00")
    assert Decimal(after["total_outstanding"]) == Decimal("160.00")
    assert after["status_counts"]["partial"] == 1


async def test_summary_is_fresh_after_waiver(client, redis, academic_session, class_id, enroll, fee_structure):
    fees = await _billed_class(client, academic_session, class_id, enroll, fee_structure)
    before = await _summary(client, academic_session)
    assert Decimal(before["total_billed"]) == Decimal("200.00")

    await client.patch(
        f"/api/v1/fees/student-fees/{fees[0]['id']}/waiver",
        json={"discount_amount": "100.00", "status": "waived"},
    )

    after = await _summary(client, academic_session)
    assert Decimal(after["total_billed"]) == Decimal("100.00")
    assert after["status_counts"]["waived"] == 1


async def test_summary_is_fresh_after_assignment(client, redis, academic_session, class_id, enroll, fee_structure):
    await _billed_class(client, academic_session, class_id, enroll, fee_structure, students=1)
    assert (await _summary(client, academic_session))["total_fees"] == 1

    await enroll()
    await client.post(
        "/api/v1/fees/structures/assign",
        json={"class_id": str(class_id), "academic_session_id": str(academic_session.id)},
    )

    assert (await _summary(client, academic_session))["total_fees"] == 2


async def test_invalidation_only_touches_summary_keys(redis):
    other_session = uuid.uuid4()
    await redis.set(fee_summary_key(uuid.uuid4()), b"stale")
    await redis.set(fee_summary_key(other_session), b"stale")
    await redis.set("ledger:unrelated", b"keep")

    assert await invalidate_fee_summary_cache(other_session) == 1
    assert await invalidate_fee_summary_cache() == 1
    assert await redis.get("ledger:unrelated") == b"keep"
