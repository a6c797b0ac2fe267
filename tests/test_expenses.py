import uuid
from decimal import Decimal

import pytest


async def _expense(client, title="Printer toner", amount="85.50", expense_date="2024-06-15", **extra):
    response = await client.post("/api/v1/expenses", json={
        "title": title, "amount": amount, "expense_date": expense_date, **extra,
    })
    assert response.status_code == 201
    return response.json()


async def test_record_expense(client, user_id):
    category = await client.post("/api/v1/expenses/categories", json={"name": "Supplies"})
    assert category.status_code == 201

    expense = await _expense(
        client,
        category_id=category.json()["id"],
        payment_method="bank_transfer",
        reference_number="INV-2024-113",
    )

    assert Decimal(expense["amount"]) == Decimal("85.50")
    assert expense["status"] == "pending"
    assert expense["created_by"] == str(user_id)
    assert expense["reviewed_by"] is None
    assert expense["category_id"] == category.json()["id"]


async def test_expense_requires_known_category(client):
    response = await client.post("/api/v1/expenses", json={
        "title": "Chalk", "amount": "5.00", "category_id": str(uuid.uuid4()),
    })
    assert response.status_code == 404


@pytest.mark.parametrize("amount", ["0", "-12.00"])
async def test_expense_amount_must_be_positive(client, amount):
    response = await client.post("/api/v1/expenses", json={"title": "Chalk", "amount": amount})
    assert response.status_code == 422


async def test_approve_stamps_reviewer(client, user_id):
    expense = await _expense(client)

    response = await client.post(f"/api/v1/expenses/{expense['id']}/approve")

    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["reviewed_by"] == str(user_id)


async def test_reviewed_expense_is_final(client):
    expense = await _expense(client)
    await client.post(f"/api/v1/expenses/{expense['id']}/reject")

    again = await client.post(f"/api/v1/expenses/{expense['id']}/approve")
    assert again.status_code == 409

    edit = await client.patch(f"/api/v1/expenses/{expense['id']}", json={"amount": "10.00"})
    assert edit.status_code == 409

    current = (await client.get(f"/api/v1/expenses/{expense['id']}")).json()
    assert current["status"] == "rejected"
    assert Decimal(current["amount"]) == Decimal("85.50")


async def test_edit_pending_expense(client):
    expense = await _expense(client)

    response = await client.patch(f"/api/v1/expenses/{expense['id']}", json={"amount": "90.00", "reference_number": None})
    assert response.status_code == 200
    assert Decimal(response.json()["amount"]) == Decimal("90.00")

    for field in ("title", "amount", "expense_date"):
        rejected = await client.patch(f"/api/v1/expenses/{expense['id']}", json={field: None})
        assert rejected.status_code == 422


async def test_expenses_by_date_range(client):
    await _expense(client, title="April", expense_date="2024-04-30")
    may_first = await _expense(client, title="May 1", expense_date="2024-05-01")
    may_last = await _expense(client, title="May 31", expense_date="2024-05-31")
    await _expense(client, title="June", expense_date="2024-06-01")

    response = await client.get("/api/v1/expenses", params={"start_date": "2024-05-01", "end_date": "2024-05-31"})

    body = response.json()
    assert body["total"] == 2
    assert [e["id"] for e in body["items"]] == [may_last["id"], may_first["id"]]

    since = await client.get("/api/v1/expenses", params={"start_date": "2024-05-31"})
    assert since.json()["total"] == 2


async def test_date_range_must_be_ordered(client):
    response = await client.get("/api/v1/expenses", params={"start_date": "2024-06-01", "end_date": "2024-05-01"})
    assert response.status_code == 422


async def test_expenses_by_category_and_status(client):
    supplies = (await client.post("/api/v1/expenses/categories", json={"name": "Supplies"})).json()
    repairs = (await client.post("/api/v1/expenses/categories", json={"name": "Repairs"})).json()
    await _expense(client, category_id=supplies["id"])
    repair = await _expense(client, title="Roof", amount="1200.00", category_id=repairs["id"])
    await client.post(f"/api/v1/expenses/{repair['id']}/approve")

    by_category = await client.get("/api/v1/expenses", params={"category_id": repairs["id"]})
    assert [e["id"] for e in by_category.json()["items"]] == [repair["id"]]

    pending = await client.get("/api/v1/expenses", params={"status": "pending"})
    assert pending.json()["total"] == 1

    names = [c["name"] for c in (await client.get("/api/v1/expenses/categories")).json()]
    assert names == ["Repairs", "Supplies"]


async def test_delete_expense(client):
    expense = await _expense(client)

    response = await client.delete(f"/api/v1/expenses/{expense['id']}")
    assert response.status_code == 200
    assert (await client.get(f"/api/v1/expenses/{expense['id']}")).status_code == 404
    assert (await client.get("/api/v1/expenses")).json()["total"] == 0


async def test_expense_category_patch(client):
    category = (await client.post("/api/v1/expenses/categories", json={"name": "Supplies"})).json()

    renamed = await client.patch(f"/api/v1/expenses/categories/{category['id']}", json={"name": "Stationery"})
    assert renamed.json()["name"] == "Stationery"

    rejected = await client.patch(f"/api/v1/expenses/categories/{category['id']}", json={"name": None})
    assert rejected.status_code == 422


async def test_expenses_need_a_token(anon_client):
    response = await anon_client.get("/api/v1/expenses")
    assert response.status_code == 401
