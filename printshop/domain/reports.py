from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Generic, Iterable, TypeVar

from printshop.domain.billing import compute_order_total, outstanding_balance, payment_status, total_paid
from printshop.domain.models import Expense, Order, PaymentStatus
from printshop.domain.pricing import Catalog, UnresolvedPolicy, priced_lines, whole_amount
from printshop.domain.production import items_to_process, production_state_counts

DEFAULT_CASHFLOW_BUCKETS = 30

RowT = TypeVar("RowT")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateWindow:
    start: date | None = None
    end: date | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, value: date | datetime) -> bool:
        day = _as_date(value)
        if self.start is not None and day < _as_date(self.start):
            return False
        if self.end is not None and day > _as_date(self.end):
            return False
        return True


OPEN_WINDOW = DateWindow()


@dataclass
class Report(Generic[RowT]):
    data: list[RowT] = field(default_factory=list)
    summary: dict[str, float] | None = None


@dataclass(frozen=True)
class SalesRow:
    order_id: int
    note_number: str
    date: date
    customer_name: str
    total: float
    payment_status: PaymentStatus


@dataclass(frozen=True)
class ExpenseRow:
    expense_id: int
    date: date
    category: str
    quantity: int
    unit_cost: int
    line_total: int


@dataclass(frozen=True)
class TopCustomerRow:
    customer_id: int
    customer_name: str
    total_spend: float
    order_count: int


@dataclass
class MaterialSalesRow:
    material_id: int
    material_name: str
    quantity_equivalent: float = 0
    revenue: float = 0


@dataclass
class CashflowBucket:
    day: date
    revenue: int = 0
    expense: int = 0


@dataclass(frozen=True)
class PaymentHistoryRow:
    order_id: int
    note_number: str
    customer_name: str
    amount: int
    date: date
    operator_id: str


@dataclass(frozen=True)
class FinanceSummary:
    total_revenue: int
    total_expenses: int
    net_profit: int
    total_receivables: float
    cashflow: list[CashflowBucket]


@dataclass(frozen=True)
class TodayFigures:
    day: date
    revenue_today: int
    unpaid_today: float
    orders_today: int


@dataclass(frozen=True)
class DailyCount:
    day: date
    orders: int


@dataclass(frozen=True)
class DashboardFigures:
    total_orders: int
    active_orders: int
    items_to_process: int
    total_customers: int
    orders_per_day: list[DailyCount]
    production_states: dict[str, int]


def filter_orders(orders: Iterable[Order], window: DateWindow) -> list[Order]:
    return [order for order in orders if window.contains(order.date)]


def filter_expenses(expenses: Iterable[Expense], window: DateWindow) -> list[Expense]:
    return [expense for expense in expenses if window.contains(expense.date)]


def sales_report(orders: Iterable[Order], catalog: Catalog, window: DateWindow = OPEN_WINDOW) -> Report[SalesRow]:
    rows = [
        SalesRow(
            order_id=order.id,
            note_number=order.note_number,
            date=order.date,
            customer_name=catalog.customer_name(order.customer_id),
            total=compute_order_total(order, catalog),
            payment_status=payment_status(order, catalog),
        )
        for order in filter_orders(orders, window)
    ]
    return Report(
        data=rows,
        summary={
            "transaction_count": len(rows),
            "total_sales": sum(row.total for row in rows),
        },
    )


def expense_report(expenses: Iterable[Expense], window: DateWindow = OPEN_WINDOW) -> Report[ExpenseRow]:
    rows = [
        ExpenseRow(
            expense_id=expense.id,
            date=expense.date,
            category=expense.category,
            quantity=expense.quantity,
            unit_cost=expense.unit_cost,
            line_total=expense.line_total,
        )
        for expense in filter_expenses(expenses, window)
    ]
    return Report(data=rows, summary={"total_expenses": sum(row.line_total for row in rows)})


def top_customers_report(
    orders: Iterable[Order],
    catalog: Catalog,
    window: DateWindow = OPEN_WINDOW,
) -> Report[TopCustomerRow]:
    all_orders = list(orders)

    spending: dict[int, float] = {}
    for order in filter_orders(all_orders, window):
        if order.customer_id is None:
            continue
        spending[order.customer_id] = spending.get(order.customer_id, 0) + compute_order_total(order, catalog)

    # Order counts are all-time on purpose; only spend follows the window.
    all_time_counts: dict[int, int] = {}
    for order in all_orders:
        if order.customer_id is not None:
            all_time_counts[order.customer_id] = all_time_counts.get(order.customer_id, 0) + 1

    ranked = sorted(spending.items(), key=lambda kv: (-kv[1], kv[0]))
    return Report(
        data=[
            TopCustomerRow(
                customer_id=customer_id,
                customer_name=catalog.customer_name(customer_id),
                total_spend=total,
                order_count=all_time_counts.get(customer_id, 0),
            )
            for customer_id, total in ranked
        ]
    )


def best_materials_report(
    orders: Iterable[Order],
    catalog: Catalog,
    window: DateWindow = OPEN_WINDOW,
) -> Report[MaterialSalesRow]:
    by_material: dict[int, MaterialSalesRow] = {}
    for order in filter_orders(orders, window):
        for line in priced_lines(order, catalog, UnresolvedPolicy.EXCLUDE):
            material = line.material
            row = by_material.get(material.id)
            if row is None:
                row = MaterialSalesRow(material_id=material.id, material_name=material.name)
                by_material[material.id] = row
            row.quantity_equivalent += line.quantity_equivalent
            row.revenue = whole_amount(row.revenue + line.amount)

    ranked = sorted(by_material.values(), key=lambda row: (-row.revenue, row.material_id))
    return Report(data=ranked)


def cashflow_series(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    window: DateWindow = OPEN_WINDOW,
    bucket_limit: int = DEFAULT_CASHFLOW_BUCKETS,
) -> list[CashflowBucket]:
    buckets: dict[date, CashflowBucket] = {}

    def bucket(day: date) -> CashflowBucket:
        if day not in buckets:
            buckets[day] = CashflowBucket(day=day)
        return buckets[day]

    for order in orders:
        for payment in order.payments:
            if window.contains(payment.date):
                bucket(_as_date(payment.date)).revenue += payment.amount

    for expense in expenses:
        if window.contains(expense.date):
            bucket(_as_date(expense.date)).expense += expense.line_total

    series = [buckets[day] for day in sorted(buckets)]
    if window.is_open:
        series = series[-bucket_limit:]
    return series


def total_receivables(orders: Iterable[Order], catalog: Catalog) -> float:
    receivables = 0
    for order in orders:
        if payment_status(order, catalog) is PaymentStatus.SETTLED:
            continue
        receivables += outstanding_balance(order, catalog)
    return receivables


def finance_summary(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    catalog: Catalog,
    bucket_limit: int = DEFAULT_CASHFLOW_BUCKETS,
) -> FinanceSummary:
    order_list = list(orders)
    expense_list = list(expenses)
    revenue = sum(total_paid(order) for order in order_list)
    spent = sum(expense.line_total for expense in expense_list)
    return FinanceSummary(
        total_revenue=revenue,
        total_expenses=spent,
        net_profit=revenue - spent,
        total_receivables=total_receivables(order_list, catalog),
        cashflow=cashflow_series(order_list, expense_list, bucket_limit=bucket_limit),
    )


def payment_history(orders: Iterable[Order], catalog: Catalog) -> list[PaymentHistoryRow]:
    rows = [
        PaymentHistoryRow(
            order_id=order.id,
            note_number=order.note_number,
            customer_name=catalog.customer_name(order.customer_id),
            amount=payment.amount,
            date=payment.date,
            operator_id=payment.operator_id,
        )
        for order in orders
        for payment in order.payments
    ]
    return sorted(rows, key=lambda row: row.date, reverse=True)


def today_figures(orders: Iterable[Order], catalog: Catalog, day: date) -> TodayFigures:
    order_list = list(orders)
    revenue_today = sum(
        payment.amount
        for order in order_list
        for payment in order.payments
        if _as_date(payment.date) == day
    )
    todays_orders = [order for order in order_list if _as_date(order.date) == day]
    unpaid_today = total_receivables(todays_orders, catalog)
    return TodayFigures(
        day=day,
        revenue_today=revenue_today,
        unpaid_today=unpaid_today,
        orders_today=len(todays_orders),
    )


def dashboard_figures(
    orders: Iterable[Order],
    catalog: Catalog,
    today: date,
    days: int = 7,
) -> DashboardFigures:
    order_list = list(orders)
    per_day: dict[date, int] = {}
    for order in order_list:
        day = _as_date(order.date)
        per_day[day] = per_day.get(day, 0) + 1

    window_days = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    return DashboardFigures(
        total_orders=len(order_list),
        active_orders=sum(
            1 for order in order_list if payment_status(order, catalog) is not PaymentStatus.SETTLED
        ),
        items_to_process=items_to_process(order_list),
        total_customers=len(catalog.customers),
        orders_per_day=[DailyCount(day=day, orders=per_day.get(day, 0)) for day in window_days],
        production_states=production_state_counts(order_list),
    )


def build_reports(
    orders: Iterable[Order],
    expenses: Iterable[Expense],
    catalog: Catalog,
    window: DateWindow = OPEN_WINDOW,
) -> dict[str, Report]:
    order_list = list(orders)
    return {
        "sales": sales_report(order_list, catalog, window),
        "expenses": expense_report(expenses, window),
        "top_customers": top_customers_report(order_list, catalog, window),
        "best_materials": best_materials_report(order_list, catalog, window),
    }
