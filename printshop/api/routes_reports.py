from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from printshop.api.utils import date_window, to_payload, today, window_payload
from printshop.core.config import get_settings
from printshop.domain.reports import (
    best_materials_report,
    cashflow_series,
    dashboard_figures,
    expense_report,
    finance_summary,
    payment_history,
    sales_report,
    today_figures,
    top_customers_report,
)
from printshop.persistence.db import get_session
from printshop.services import load_snapshot

router = APIRouter(tags=["reports"])


def _report_response(name: str, start: date | None, end: date | None, report) -> dict:
    return {
        "report": name,
        "period": window_payload(date_window(start, end)),
        "data": to_payload(report.data),
        "summary": report.summary,
    }


@router.get("/reports/sales")
def get_sales_report(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    report = sales_report(snapshot.orders, snapshot.catalog, date_window(start, end))
    return _report_response("sales", start, end, report)


@router.get("/reports/expenses")
def get_expense_report(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    return _report_response("expenses", start, end, expense_report(snapshot.expenses, date_window(start, end)))


@router.get("/reports/top-customers")
def get_top_customers_report(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    report = top_customers_report(snapshot.orders, snapshot.catalog, date_window(start, end))
    return _report_response("top_customers", start, end, report)


@router.get("/reports/best-materials")
def get_best_materials_report(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    report = best_materials_report(snapshot.orders, snapshot.catalog, date_window(start, end))
    return _report_response("best_materials", start, end, report)


@router.get("/reports/cashflow")
def get_cashflow(
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    series = cashflow_series(
        snapshot.orders,
        snapshot.expenses,
        date_window(start, end),
        bucket_limit=get_settings().cashflow_bucket_limit,
    )
    return {
        "report": "cashflow",
        "period": window_payload(date_window(start, end)),
        "data": to_payload(series),
    }


@router.get("/finance/summary")
def get_finance_summary(session: Session = Depends(get_session)):
    snapshot = load_snapshot(session)
    summary = finance_summary(
        snapshot.orders,
        snapshot.expenses,
        snapshot.catalog,
        bucket_limit=get_settings().cashflow_bucket_limit,
    )
    return to_payload(summary)


@router.get("/finance/payments")
def get_payment_history(
    limit: int = Query(default=100, ge=1, le=1000),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    rows = payment_history(snapshot.orders, snapshot.catalog)[:limit]
    return {"count": len(rows), "payments": to_payload(rows)}


@router.get("/finance/today")
def get_today_figures(
    day: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    return to_payload(today_figures(snapshot.orders, snapshot.catalog, day or today()))


@router.get("/dashboard")
def get_dashboard(
    day: date | None = Query(default=None),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    figures = dashboard_figures(
        snapshot.orders,
        snapshot.catalog,
        today=day or today(),
        days=get_settings().dashboard_days,
    )
    return to_payload(figures)
