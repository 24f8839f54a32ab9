from datetime import datetime, timedelta, timezone

from app.models.constants import CATEGORIES

MISSING_ID = "0" * 32


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def test_create_expense_returns_record(client):
    resp = client.post(
        "/api/expenses",
        json={
            "amount": 45.99,
            "category": "Food",
            "description": "  Grocery shopping  ",
            "date": "2024-03-01",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert len(body["id"]) == 32
    assert body["amount"] == 45.99
    assert body["category"] == "Food"
    assert body["description"] == "Grocery shopping"
    assert body["date"].startswith("2024-03-01T00:00:00")
    assert "createdAt" in body and "updatedAt" in body


def test_create_coerces_amount_and_defaults(client):
    before = _utcnow() - timedelta(seconds=5)
    resp = client.post("/api/expenses", json={"amount": "12.50", "category": "Bills"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["amount"] == 12.5
    assert body["description"] == ""
    created_date = datetime.fromisoformat(body["date"])
    assert before <= created_date <= _utcnow() + timedelta(seconds=5)


def test_create_requires_amount_and_category(client, db):
    for payload in (
        {"category": "Food"},
        {"amount": 10},
        {"amount": 0, "category": "Food"},
        {"amount": 10, "category": ""},
        {},
    ):
        resp = client.post("/api/expenses", json=payload)
        assert resp.status_code == 400, payload
        assert resp.json() == {
            "error": "Validation failed",
            "details": "Amount and category are required",
        }
    assert db.count_expenses() == 0


def test_create_rejects_unknown_category(client, db):
    resp = client.post("/api/expenses", json={"amount": 5, "category": "Invalid"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation failed"
    assert "Invalid is not a valid category" in body["details"]
    assert db.count_expenses() == 0


def test_create_reports_every_violation(client, db):
    resp = client.post("/api/expenses", json={"amount": -3, "category": "Pets"})
    assert resp.status_code == 400
    assert resp.json()["details"] == (
        "Amount cannot be negative, Pets is not a valid category"
    )
    assert db.count_expenses() == 0


def test_create_rejects_non_numeric_amount(client):
    resp = client.post("/api/expenses", json={"amount": "lots", "category": "Food"})
    assert resp.status_code == 400
    assert resp.json()["details"].startswith("amount:")


def test_round_trip_get_by_id(client, add_expense):
    created = add_expense(120, "Travel", "2024-03-02T09:15:00", "Train")
    resp = client.get(f"/api/expenses/{created['id']}")
    assert resp.status_code == 200
    fetched = resp.json()
    for key in ("amount", "category", "description", "date"):
        assert fetched[key] == created[key]
    assert fetched["date"].startswith("2024-03-02T09:15:00")


def test_get_missing_and_malformed_ids(client):
    resp = client.get(f"/api/expenses/{MISSING_ID}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Expense not found"}

    resp = client.get("/api/expenses/not-an-id")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid expense ID"}


def test_update_with_empty_payload_changes_nothing(client, add_expense):
    created = add_expense(30, "Shopping", "2024-01-10", "Socks")
    resp = client.put(f"/api/expenses/{created['id']}", json={})
    assert resp.status_code == 200
    updated = resp.json()
    for key in ("id", "amount", "category", "description", "date", "createdAt"):
        assert updated[key] == created[key]
    assert datetime.fromisoformat(updated["updatedAt"]) >= datetime.fromisoformat(
        created["updatedAt"]
    )


def test_update_applies_present_falsy_values(client, add_expense):
    created = add_expense(30, "Shopping", "2024-01-10", "Socks")
    resp = client.put(
        f"/api/expenses/{created['id']}", json={"amount": 0, "description": ""}
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["amount"] == 0
    assert updated["description"] == ""
    assert updated["category"] == "Shopping"


def test_update_revalidates_supplied_fields(client, add_expense):
    created = add_expense(30, "Shopping", "2024-01-10")
    resp = client.put(f"/api/expenses/{created['id']}", json={"category": "Toys"})
    assert resp.status_code == 400
    assert resp.json()["details"] == "Toys is not a valid category"

    resp = client.put(f"/api/expenses/{created['id']}", json={"amount": None})
    assert resp.status_code == 400
    assert resp.json()["details"] == "Amount is required"

    unchanged = client.get(f"/api/expenses/{created['id']}").json()
    assert unchanged["category"] == "Shopping"
    assert unchanged["amount"] == 30


def test_update_moves_date_and_category(client, add_expense):
    created = add_expense(30, "Shopping", "2024-01-10")
    resp = client.put(
        f"/api/expenses/{created['id']}",
        json={"category": "Bills", "date": "2024-02-20T12:00:00"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["category"] == "Bills"
    assert body["date"].startswith("2024-02-20T12:00:00")


def test_update_missing_expense(client):
    resp = client.put(f"/api/expenses/{MISSING_ID}", json={"amount": 1})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Expense not found"}


def test_delete_returns_record_and_is_not_repeated(client, add_expense, db):
    created = add_expense(15, "Food", "2024-02-01")
    resp = client.delete(f"/api/expenses/{created['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Expense deleted successfully"
    assert body["expense"]["id"] == created["id"]
    assert body["expense"]["amount"] == 15

    again = client.delete(f"/api/expenses/{created['id']}")
    assert again.status_code == 404
    assert db.count_expenses() == 0


def test_list_filters_single_day_inclusive(client, add_expense):
    food_march_1 = add_expense(45.99, "Food", "2024-03-01T18:30:00")
    add_expense(120, "Travel", "2024-03-02")
    add_expense(15, "Food", "2024-02-01")
    add_expense(9, "Food", "2024-03-02T00:00:00")

    resp = client.get(
        "/api/expenses",
        params={"category": "Food", "startDate": "2024-03-01", "endDate": "2024-03-01"},
    )
    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()] == [food_march_1["id"]]


def test_list_sorted_newest_first_and_all_category(client, add_expense):
    add_expense(1, "Food", "2024-01-01")
    add_expense(2, "Bills", "2024-03-01")
    add_expense(3, "Other", "2024-02-01")

    for params in ({}, {"category": "all"}):
        resp = client.get("/api/expenses", params=params)
        assert [e["amount"] for e in resp.json()] == [2, 3, 1]

    resp = client.get("/api/expenses", params={"startDate": "2024-02-01"})
    assert [e["amount"] for e in resp.json()] == [2, 3]

    resp = client.get("/api/expenses", params={"endDate": "2024-02-01"})
    assert [e["amount"] for e in resp.json()] == [3, 1]


def test_list_rejects_bad_filters(client):
    resp = client.get("/api/expenses", params={"category": "Toys"})
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Validation failed",
        "details": "Toys is not a valid category",
    }

    resp = client.get(
        "/api/expenses", params={"startDate": "2024-03-02", "endDate": "2024-03-01"}
    )
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Validation failed",
        "details": "startDate cannot be after endDate",
    }

    resp = client.get("/api/expenses", params={"startDate": "yesterday"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_export_csv(client, add_expense):
    add_expense(45.99, "Food", "2024-03-01", 'Lunch "deluxe"')
    add_expense(120, "Travel", "2024-03-02")

    resp = client.get("/api/expenses/export")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "attachment" in resp.headers["content-disposition"]
    lines = resp.text.strip().split("\n")
    assert lines[0] == '"Date","Amount","Category","Description"'
    assert lines[1] == '"2024-03-02","120","Travel",""'
    assert lines[2] == '"2024-03-01","45.99","Food","Lunch ""deluxe"""'

    food_only = client.get("/api/expenses/export", params={"category": "Food"})
    assert len(food_only.text.strip().split("\n")) == 2


def test_categories_endpoint(client):
    resp = client.get("/api/expenses/categories")
    assert resp.json() == list(CATEGORIES)
    assert resp.json() == ["Food", "Travel", "Shopping", "Bills", "Other"]


def test_unknown_route_and_root(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "error" in resp.json()

    root = client.get("/")
    assert root.json()["message"] == "Smart Expense Tracker API"
    assert "x-request-id" in root.headers
