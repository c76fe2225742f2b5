from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy.orm import Session

from printshop.domain.billing import apply_payment, payment_status
from printshop.domain.models import Expense, Order, OrderLineItem, ProductionState
from printshop.domain.pricing import Catalog
from printshop.domain.production import (
    add_line_item,
    advance_production,
    edit_order_header,
    remove_line_item,
)
from printshop.persistence.repository import ShopRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopSnapshot:
    orders: list[Order]
    expenses: list[Expense]
    catalog: Catalog


def load_snapshot(session: Session) -> ShopSnapshot:
    repo = ShopRepository(session)
    return ShopSnapshot(orders=repo.list_orders(), expenses=repo.list_expenses(), catalog=repo.catalog())


def create_order(
    session: Session,
    note_number: str,
    order_date: date,
    customer_id: int | None,
    items: list[OrderLineItem],
    executor_id: int | None = None,
) -> Order:
    order = ShopRepository(session).add_order(
        note_number=note_number,
        order_date=order_date,
        customer_id=customer_id,
        items=items,
        executor_id=executor_id,
    )
    logger.info("order created: id=%s note=%s items=%s", order.id, order.note_number, len(order.items))
    return order


def record_payment(session: Session, order_id: int, amount: int, paid_on: date, operator_id: str) -> Order:
    repo = ShopRepository(session)
    order = repo.get_order(order_id)
    updated = apply_payment(order, amount, paid_on, operator_id, repo.catalog())
    return repo.append_payment(order_id, updated.payments[-1], updated.payment_status)


def advance_item_production(session: Session, order_id: int, item_id: int, state: ProductionState) -> Order:
    repo = ShopRepository(session)
    advance_production(repo.get_order(order_id), item_id, state)
    return repo.set_production_state(order_id, item_id, state)


def _save_edits(repo: ShopRepository, edited: Order) -> Order:
    catalog = repo.catalog()
    saved = repo.save_order_edits(edited, payment_status(edited, catalog))
    logger.info(
        "order edited: id=%s items=%s status=%s",
        saved.id,
        len(saved.items),
        saved.payment_status.value,
    )
    return saved


def edit_order(session: Session, order_id: int, **changes: Any) -> Order:
    repo = ShopRepository(session)
    return _save_edits(repo, edit_order_header(repo.get_order(order_id), **changes))


def add_order_item(session: Session, order_id: int, item: OrderLineItem) -> Order:
    repo = ShopRepository(session)
    return _save_edits(repo, add_line_item(repo.get_order(order_id), item))


def remove_order_item(session: Session, order_id: int, item_id: int) -> Order:
    repo = ShopRepository(session)
    return _save_edits(repo, remove_line_item(repo.get_order(order_id), item_id))


def delete_order(session: Session, order_id: int) -> None:
    ShopRepository(session).delete_order(order_id)
    logger.info("order deleted: id=%s", order_id)
