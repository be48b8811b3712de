"""Analytics endpoint tests."""

import pytest

from app.api.deps import get_transaction_store
from app.main import app
from factories import FailingTransactionStore, at, make_txn


@pytest.fixture
def quarter(store):
    """Three months of salary, rent and food for user 1, plus noise for user 2."""
    store.add(
        make_txn(1, "income", 1000.0, "Salary", at(2026, 1, 5)),
        make_txn(2, "income", 1100.0, "Salary", at(2026, 2, 5)),
        make_txn(3, "income", 1200.0, "Salary", at(2026, 3, 5)),
        make_txn(4, "expense", 500.0, "Rent", at(2026, 1, 10)),
        make_txn(5, "expense", 500.0, "Rent", at(2026, 2, 10)),
        make_txn(6, "expense", 500.0, "Rent", at(2026, 3, 10)),
        make_txn(7, "expense", 300.0, "Food", at(2026, 1, 20)),
        make_txn(8, "expense", 300.0, "Food", at(2026, 2, 20)),
        make_txn(9, "expense", 300.0, "Food", at(2026, 3, 12)),
        make_txn(50, "expense", 9999.0, "Rent", at(2026, 3, 1), user_id=2),
    )
    return store


@pytest.mark.asyncio
async def test_expense_breakdown_by_category(client, quarter):
    response = await client.get("/api/v1/analytics/by-category", params={"kind": "expense"})
    assert response.status_code == 200
    body = response.json()

    assert body["total"] == 2400
    assert [(item["category"], item["amount"], item["percentage"]) for item in body["data"]] == [
        ("Rent", 1500, 62.5),
        ("Food", 900, 37.5),
    ]
    assert body["data"][0]["count"] == 3


@pytest.mark.asyncio
async def test_breakdown_respects_date_range(client, quarter):
    response = await client.get(
        "/api/v1/analytics/by-category",
        params={"kind": "expense", "date_from": "2026-03-01", "date_to": "2026-03-31"},
    )
    body = response.json()
    assert body["total"] == 800


@pytest.mark.asyncio
async def test_breakdown_rejects_unknown_kind(client, quarter):
    response = await client.get("/api/v1/analytics/by-category", params={"kind": "transfer"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_inverted_date_range_is_rejected(client, quarter):
    response = await client.get(
        "/api/v1/analytics/report",
        params={"date_from": "2026-03-01", "date_to": "2026-01-01"},
    )
    assert response.status_code == 422
    assert "date_from" in response.json()["detail"]


@pytest.mark.asyncio
async def test_monthly_trends(client, quarter):
    response = await client.get("/api/v1/analytics/trends")
    assert response.status_code == 200
    body = response.json()

    assert body["granularity"] == "month"
    assert [item["period"] for item in body["data"]] == ["2026-01", "2026-02", "2026-03"]
    assert [item["net"] for item in body["data"]] == [200, 300, 400]
    assert body["data"][0]["period_label"] == "Jan 2026"
    assert body["data"][0]["count"] == 3


@pytest.mark.asyncio
async def test_weekly_trends_use_iso_keys(client, quarter):
    response = await client.get(
        "/api/v1/analytics/trends",
        params={"granularity": "week", "date_from": "2026-03-01", "date_to": "2026-03-31"},
    )
    body = response.json()
    # Mar 5 (Thu) is W10; Mar 10 (Tue) and Mar 12 (Thu) are W11
    assert [item["period"] for item in body["data"]] == ["2026-W10", "2026-W11"]
    assert body["data"][1]["expense"] == 800


@pytest.mark.asyncio
async def test_unknown_granularity_is_rejected(client, quarter):
    response = await client.get("/api/v1/analytics/trends", params={"granularity": "year"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_income_vs_expense_window(client, quarter):
    response = await client.get("/api/v1/analytics/income-vs-expense", params={"months": 2})
    body = response.json()
    assert [item["period"] for item in body["data"]] == ["2026-02", "2026-03"]
    assert body["data"][1]["income"] == 1200


@pytest.mark.asyncio
async def test_report(client, quarter):
    response = await client.get("/api/v1/analytics/report")
    assert response.status_code == 200
    body = response.json()
    summary = body["summary"]

    assert body["has_data"] is True
    assert summary["total_income"] == 3300
    assert summary["total_expense"] == 2400
    assert summary["net_amount"] == 900
    assert summary["transaction_counts"] == {"income": 3, "expense": 6, "total": 9}
    assert summary["avg_income"] == 1100
    assert summary["avg_expense"] == 400
    assert [item["category"] for item in body["income_breakdown"]] == ["Salary"]
    # equal amounts stay newest first
    assert [item["id"] for item in body["top_expenses"]] == [6, 5, 4, 9, 8, 7]
    assert body["date_range"] == {"date_from": None, "date_to": None}


@pytest.mark.asyncio
async def test_report_for_one_month(client, quarter):
    response = await client.get(
        "/api/v1/analytics/report",
        params={"date_from": "2026-02-01", "date_to": "2026-02-28"},
    )
    body = response.json()
    assert body["summary"]["transaction_counts"] == {"income": 1, "expense": 2, "total": 3}
    assert body["summary"]["net_amount"] == 300
    assert body["date_range"] == {"date_from": "2026-02-01", "date_to": "2026-02-28"}


@pytest.mark.asyncio
async def test_empty_report(client):
    response = await client.get("/api/v1/analytics/report")
    body = response.json()
    assert body["has_data"] is False
    assert body["summary"]["avg_income"] == 0
    assert body["top_expenses"] == []


@pytest.mark.asyncio
async def test_savings_prediction(client, quarter):
    response = await client.post("/api/v1/analytics/savings-prediction", json={"months": 1})
    assert response.status_code == 200
    body = response.json()

    assert body["has_data"] is True
    assert body["historical"]["months_analyzed"] == 3
    assert body["historical"]["income_trend"] == 100
    assert [m["month"] for m in body["historical"]["historical_months"]] == [
        "2026-01",
        "2026-02",
        "2026-03",
    ]
    [prediction] = body["predictions"]
    assert prediction == {
        "month": 1,
        "month_label": "Apr 2026",
        "projected_income": 1200,
        "projected_expense": 800,
        "monthly_savings": 400,
        "cumulative_savings": 400,
    }
    assert body["summary"]["best_month"] == {"month": "Apr 2026", "savings": 400}
    assert "reason" not in body


@pytest.mark.asyncio
async def test_savings_prediction_with_scenario(client, quarter):
    response = await client.post(
        "/api/v1/analytics/savings-prediction",
        json={"months": 3, "expense_reduction": 25, "income_increase": 10},
    )
    body = response.json()
    assert body["scenario"]["expense_reduction"] == 25
    assert body["scenario"]["adjusted_avg_expense"] == 600
    assert body["summary"]["months_predicted"] == 3


@pytest.mark.asyncio
async def test_savings_prediction_needs_three_months(client, store):
    store.add(
        make_txn(1, "income", 1000.0, when=at(2026, 2, 5)),
        make_txn(2, "income", 1000.0, when=at(2026, 3, 5)),
    )
    response = await client.post("/api/v1/analytics/savings-prediction", json={})
    assert response.status_code == 200
    body = response.json()

    assert body["has_data"] is False
    assert body["reason"] == "insufficient_data"
    assert "found 2" in body["message"]
    assert "historical" not in body


@pytest.mark.asyncio
async def test_savings_prediction_without_data(client):
    response = await client.post("/api/v1/analytics/savings-prediction", json={})
    body = response.json()
    assert body["has_data"] is False
    assert body["reason"] == "no_data"


@pytest.mark.asyncio
async def test_savings_prediction_ignores_old_history(client, store):
    # only the current month and the eleven before it count
    store.add(
        make_txn(1, "income", 1000.0, when=at(2025, 1, 5)),
        make_txn(2, "income", 1000.0, when=at(2025, 2, 5)),
        make_txn(3, "income", 1000.0, when=at(2026, 3, 5)),
    )
    response = await client.post("/api/v1/analytics/savings-prediction", json={})
    body = response.json()
    assert body["reason"] == "insufficient_data"
    assert "found 1" in body["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, field",
    [
        ({"expense_reduction": 150}, "expense_reduction"),
        ({"income_increase": -5}, "income_increase"),
        ({"months": 0}, "months"),
    ],
)
async def test_invalid_scenario_is_rejected(client, quarter, payload, field):
    response = await client.post("/api/v1/analytics/savings-prediction", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", field]


@pytest.mark.asyncio
async def test_store_failure_maps_to_503(client):
    app.dependency_overrides[get_transaction_store] = lambda: FailingTransactionStore()
    response = await client.get("/api/v1/analytics/report")
    assert response.status_code == 503
    assert response.json()["detail"] == "Could not retrieve financial data"
