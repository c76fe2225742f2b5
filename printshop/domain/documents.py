from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from printshop.domain.billing import compute_order_total, outstanding_balance, payment_status, total_paid
from printshop.domain.models import Order, PaymentStatus
from printshop.domain.pricing import Catalog, UnresolvedPolicy, priced_lines, whole_amount


@dataclass(frozen=True)
class InvoiceLine:
    material_name: str
    description: str
    length: float
    width: float
    quantity: int
    unit_price: int
    price_per_piece: float
    amount: float


@dataclass(frozen=True)
class InvoiceDocument:
    order_id: int
    note_number: str
    date: date
    customer_name: str
    customer_phone: str
    customer_address: str
    total: float
    paid: int
    outstanding: float
    payment_status: PaymentStatus
    cashier_id: str
    lines: list[InvoiceLine] = field(default_factory=list)


def last_cashier_id(order: Order) -> str:
    if not order.payments:
        return "-"
    return order.payments[-1].operator_id


def build_invoice(order: Order, catalog: Catalog) -> InvoiceDocument:
    customer = catalog.customer(order.customer_id)
    lines = [
        InvoiceLine(
            material_name=line.material.name,
            description=line.item.description,
            length=line.item.length,
            width=line.item.width,
            quantity=line.item.quantity,
            unit_price=line.unit_price,
            price_per_piece=whole_amount(line.unit_price * line.area),
            amount=line.amount,
        )
        for line in priced_lines(order, catalog, UnresolvedPolicy.EXCLUDE)
    ]
    # Figures come from the billing engine so printed and on-screen totals agree.
    return InvoiceDocument(
        order_id=order.id,
        note_number=order.note_number,
        date=order.date,
        customer_name=customer.name if customer is not None else "N/A",
        customer_phone=customer.phone if customer is not None else "",
        customer_address=customer.address if customer is not None else "",
        total=compute_order_total(order, catalog),
        paid=total_paid(order),
        outstanding=outstanding_balance(order, catalog),
        payment_status=payment_status(order, catalog),
        cashier_id=last_cashier_id(order),
        lines=lines,
    )


def format_currency(value: float, currency_code: str = "IDR") -> str:
    amount = f"{round(value):,}".replace(",", ".")
    if currency_code == "IDR":
        return f"Rp {amount}"
    return f"{currency_code} {amount}"


def invoice_message_text(invoice: InvoiceDocument, shop_name: str, currency_code: str = "IDR") -> str:
    def money(value: float) -> str:
        return format_currency(value, currency_code)

    parts = [
        f"*{shop_name}*",
        f"Note: {invoice.note_number}",
        f"Date: {invoice.date.isoformat()}",
        f"Customer: {invoice.customer_name}",
        "",
    ]
    for line in invoice.lines:
        parts.append(line.material_name)
        parts.append(f"  {line.quantity} x {money(line.price_per_piece)} = {money(line.amount)}")
    parts.extend(
        [
            "",
            f"Total: {money(invoice.total)}",
            f"Paid: {money(invoice.paid)}",
            f"Balance: {money(invoice.outstanding)}",
            f"Status: {invoice.payment_status.value}",
            f"Cashier: {invoice.cashier_id}",
        ]
    )
    return "\n".join(parts)
