import pytest

from app.services.budget import budget_status
from app.services.preferences import MONTHLY_BUDGET_KEY, get_monthly_budget


def test_default_preferences(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json() == {"monthlyBudget": 2000.0, "theme": "light"}


def test_save_preferences_partially(client):
    resp = client.put("/api/settings", json={"monthlyBudget": 350})
    assert resp.status_code == 200
    assert resp.json() == {"monthlyBudget": 350.0, "theme": "light"}

    resp = client.put("/api/settings", json={"theme": "dark"})
    assert resp.json() == {"monthlyBudget": 350.0, "theme": "dark"}

    assert client.get("/api/settings").json() == {
        "monthlyBudget": 350.0,
        "theme": "dark",
    }


@pytest.mark.parametrize(
    "payload", [{"monthlyBudget": -1}, {"theme": "sepia"}, {"monthlyBudget": "x"}]
)
def test_save_preferences_rejects_invalid(client, payload):
    resp = client.put("/api/settings", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation failed"


def test_corrupt_budget_falls_back_to_default(db):
    db.set_metadata(MONTHLY_BUDGET_KEY, "not-a-number")
    assert get_monthly_budget(db, 2000.0) == 2000.0


def test_budget_status_transitions(client, add_expense):
    client.put("/api/settings", json={"monthlyBudget": 200})
    params = {"month": 3, "year": 2024}

    add_expense(160, "Food", "2024-03-01")
    add_expense(500, "Food", "2024-02-28")  # outside the reference month
    body = client.get("/api/budget/status", params=params).json()
    assert body == {
        "monthlyBudget": 200.0,
        "monthlyTotal": 160.0,
        "remaining": 40.0,
        "percentUsed": 80.0,
        "status": "ok",
    }

    add_expense(20, "Food", "2024-03-05")
    body = client.get("/api/budget/status", params=params).json()
    assert body["status"] == "warning"
    assert body["percentUsed"] == 90.0

    add_expense(20.5, "Food", "2024-03-31T23:00:00")
    body = client.get("/api/budget/status", params=params).json()
    assert body["status"] == "exceeded"
    assert body["remaining"] == 0


def test_budget_status_rejects_half_specified_pair(client):
    resp = client.get("/api/budget/status", params={"year": 2024})
    assert resp.status_code == 400
    assert resp.json() == {
        "error": "Validation failed",
        "details": "month and year must be provided together",
    }


def test_budget_status_zero_budget():
    assert budget_status(0, 0, 90).status == "ok"
    assert budget_status(5, 0, 90).status == "exceeded"
    assert budget_status(5, 0, 90).percent_used == 0
