from __future__ import annotations

from datetime import date, timedelta


def test_reports_over_demo_data(client):
    seeded = client.post("/demo/seed")
    assert seeded.status_code == 200
    assert seeded.json()["seeded_now"] is True

    sales = client.get("/reports/sales")
    assert sales.status_code == 200
    payload = sales.json()
    assert payload["summary"]["transaction_count"] == 5
    assert payload["summary"]["total_sales"] == sum(row["total"] for row in payload["data"])
    statuses = {row["note_number"]: row["payment_status"] for row in payload["data"]}
    assert statuses == {
        "INV-001": "Settled",
        "INV-002": "Settled",
        "INV-003": "Unpaid",
        "INV-004": "PartiallyPaid",
        "INV-005": "Unpaid",
    }

    top = client.get("/reports/top-customers").json()
    assert top["data"][0]["customer_name"] == "Citra Lestari"
    assert top["data"][0]["total_spend"] == 12500000

    best = client.get("/reports/best-materials").json()
    assert best["data"][0]["material_name"] == "Artpaper"
    assert best["data"][0]["quantity_equivalent"] == 500

    expenses = client.get("/reports/expenses").json()
    assert expenses["summary"]["total_expenses"] == 300000 + 500000 + 2500000 + 250000 + 350000


def test_report_window_filters_by_calendar_day(client):
    client.post("/demo/seed")
    day = date.today() - timedelta(days=4)

    sales = client.get("/reports/sales", params={"start": day.isoformat(), "end": day.isoformat()}).json()
    assert [row["note_number"] for row in sales["data"]] == ["INV-002"]
    assert sales["period"] == {"start": day.isoformat(), "end": day.isoformat()}


def test_cashflow_and_finance_summary(client):
    client.post("/demo/seed")

    cashflow = client.get("/reports/cashflow").json()["data"]
    days = [bucket["day"] for bucket in cashflow]
    assert days == sorted(days)
    expense_only = [bucket for bucket in cashflow if bucket["revenue"] == 0]
    assert expense_only and all(bucket["expense"] > 0 for bucket in expense_only)

    summary = client.get("/finance/summary").json()
    assert summary["total_revenue"] == 88000 + 2200000 + 300000
    assert summary["total_expenses"] == 3900000
    assert summary["net_profit"] == summary["total_revenue"] - summary["total_expenses"]
    assert summary["total_receivables"] == 12500000 + 325000 + 2800000


def test_finance_payments_and_today(client):
    client.post("/demo/seed")

    payments = client.get("/finance/payments").json()
    assert payments["count"] == 3
    assert payments["payments"][0]["note_number"] == "INV-004"

    today = client.get("/finance/today").json()
    assert today["orders_today"] == 1
    assert today["unpaid_today"] == 2800000
    assert today["revenue_today"] == 0


def test_dashboard(client):
    client.post("/demo/seed")
    dashboard = client.get("/dashboard").json()
    assert dashboard["total_orders"] == 5
    assert dashboard["active_orders"] == 3
    assert dashboard["items_to_process"] == 2
    assert dashboard["total_customers"] == 5
    assert len(dashboard["orders_per_day"]) == 7
    assert sum(day["orders"] for day in dashboard["orders_per_day"]) == 5


def test_reports_on_empty_store(client):
    assert client.get("/reports/sales").json()["summary"] == {"transaction_count": 0, "total_sales": 0}
    assert client.get("/reports/cashflow").json()["data"] == []
    assert client.get("/reports/best-materials").json()["data"] == []


def test_demo_seed_is_idempotent(client):
    assert client.post("/demo/seed").json()["seeded_now"] is True
    second = client.post("/demo/seed").json()
    assert second["seeded_now"] is False
    assert second["orders"] == 5
