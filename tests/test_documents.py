from __future__ import annotations

from datetime import date

from printshop.domain.billing import apply_payment, compute_order_total, total_paid
from printshop.domain.documents import build_invoice, format_currency, invoice_message_text
from printshop.domain.models import Order, OrderLineItem, PaymentStatus


def _order() -> Order:
    return Order(
        id=1,
        note_number="INV-001",
        date=date(2026, 3, 1),
        customer_id=1,
        items=[
            OrderLineItem(id=1, material_id=1, quantity=2, length=2, width=1, description="Shop banner"),
            OrderLineItem(id=2, material_id=404, quantity=1, description="Unknown"),
        ],
    )


def test_invoice_figures_come_from_billing_engine(catalog):
    order = apply_payment(_order(), 40000, date(2026, 3, 2), "kasir", catalog)
    invoice = build_invoice(order, catalog)

    assert invoice.total == compute_order_total(order, catalog) == 88000
    assert invoice.paid == total_paid(order) == 40000
    assert invoice.outstanding == 48000
    assert invoice.payment_status is PaymentStatus.PARTIALLY_PAID
    assert invoice.cashier_id == "kasir"
    assert invoice.customer_name == "Budi"


def test_invoice_lines_skip_unresolved_material(catalog):
    invoice = build_invoice(_order(), catalog)
    assert len(invoice.lines) == 1
    line = invoice.lines[0]
    assert line.material_name == "Banner"
    assert line.price_per_piece == 44000
    assert line.amount == 88000


def test_invoice_without_payments_has_no_cashier(catalog):
    assert build_invoice(_order(), catalog).cashier_id == "-"


def test_message_text_lists_lines_and_balance(catalog):
    invoice = build_invoice(_order(), catalog)
    text = invoice_message_text(invoice, "Nala Printing")

    assert text.splitlines()[0] == "*Nala Printing*"
    assert "  2 x Rp 44.000 = Rp 88.000" in text
    assert "Balance: Rp 88.000" in text
    assert "Status: Unpaid" in text


def test_format_currency():
    assert format_currency(2200000) == "Rp 2.200.000"
    assert format_currency(-12000) == "Rp -12.000"
    assert format_currency(500, "USD") == "USD 500"
