from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from printshop.domain.errors import InvalidAmount
from printshop.domain.models import Order, Payment, PaymentStatus
from printshop.domain.pricing import Catalog, UnresolvedPolicy, priced_lines, whole_amount

logger = logging.getLogger(__name__)


def compute_order_total(order: Order, catalog: Catalog) -> int | float:
    if catalog.customer(order.customer_id) is None:
        return 0
    return whole_amount(sum(line.amount for line in priced_lines(order, catalog, UnresolvedPolicy.ZERO_FILL)))


def total_paid(order: Order) -> int:
    return sum(payment.amount for payment in order.payments)


def outstanding_balance(order: Order, catalog: Catalog) -> int | float:
    return compute_order_total(order, catalog) - total_paid(order)


def derive_payment_status(order_total: float, paid: int) -> PaymentStatus:
    if paid <= 0:
        # A zero-priced order with no payments stays Unpaid.
        return PaymentStatus.UNPAID
    if paid >= order_total:
        return PaymentStatus.SETTLED
    return PaymentStatus.PARTIALLY_PAID


def payment_status(order: Order, catalog: Catalog) -> PaymentStatus:
    return derive_payment_status(compute_order_total(order, catalog), total_paid(order))


def refresh_payment_status(order: Order, catalog: Catalog) -> Order:
    return replace(order, payment_status=payment_status(order, catalog))


def apply_payment(
    order: Order,
    amount: int,
    paid_on: date,
    operator_id: str,
    catalog: Catalog,
) -> Order:
    if amount <= 0:
        logger.warning("rejected payment: order=%s amount=%s operator=%s", order.id, amount, operator_id)
        raise InvalidAmount(f"payment amount must be greater than 0, got {amount}")

    payment = Payment(amount=amount, date=paid_on, operator_id=operator_id)
    updated = refresh_payment_status(replace(order, payments=order.payments + (payment,)), catalog)
    logger.info(
        "payment applied: order=%s note=%s amount=%s paid=%s status=%s",
        updated.id,
        updated.note_number,
        amount,
        total_paid(updated),
        updated.payment_status.value,
    )
    return updated
