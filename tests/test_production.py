from __future__ import annotations

from datetime import date

import pytest

from printshop.domain.errors import EmptyOrder, InvalidTransition, LineItemNotFound
from printshop.domain.models import Order, OrderLineItem, PaymentStatus, ProductionState
from printshop.domain.production import (
    add_line_item,
    advance_production,
    edit_order_header,
    items_to_process,
    production_state_counts,
    remove_line_item,
    transaction_queue,
)


def _order(order_id: int, day: date, states: list[ProductionState]) -> Order:
    return Order(
        id=order_id,
        note_number=f"INV-{order_id:03d}",
        date=day,
        customer_id=1,
        items=[
            OrderLineItem(id=order_id * 10 + i, material_id=1, quantity=1, production_state=state)
            for i, state in enumerate(states)
        ],
    )


def test_advance_production_steps_forward_only():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED])

    order = advance_production(order, 10, ProductionState.IN_PROGRESS)
    assert order.items[0].production_state is ProductionState.IN_PROGRESS

    order = advance_production(order, 10, ProductionState.DONE)
    assert order.items[0].production_state is ProductionState.DONE

    with pytest.raises(InvalidTransition):
        advance_production(order, 10, ProductionState.IN_PROGRESS)


def test_advance_production_cannot_skip_a_step():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED])
    with pytest.raises(InvalidTransition):
        advance_production(order, 10, ProductionState.DONE)


def test_advance_production_leaves_billing_untouched():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED])
    updated = advance_production(order, 10, ProductionState.IN_PROGRESS)
    assert updated.payment_status is PaymentStatus.UNPAID
    assert updated.payments == order.payments


def test_unknown_item_is_reported():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED])
    with pytest.raises(LineItemNotFound):
        advance_production(order, 99, ProductionState.IN_PROGRESS)


def test_last_line_item_cannot_be_removed():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED, ProductionState.DONE])
    order = remove_line_item(order, 10)
    assert [item.id for item in order.items] == [11]

    with pytest.raises(EmptyOrder):
        remove_line_item(order, 11)


def test_add_line_item_returns_extended_copy():
    order = _order(1, date(2026, 3, 1), [ProductionState.DONE])
    extended = add_line_item(order, OrderLineItem(id=0, material_id=2, quantity=5))
    assert [item.material_id for item in extended.items] == [1, 2]
    assert extended.items[-1].production_state is ProductionState.NOT_STARTED
    assert len(order.items) == 1


def test_edit_order_header_only_accepts_header_fields():
    order = _order(1, date(2026, 3, 1), [ProductionState.NOT_STARTED])
    edited = edit_order_header(order, customer_id=2, date=date(2026, 3, 4))
    assert (edited.customer_id, edited.date) == (2, date(2026, 3, 4))

    with pytest.raises(ValueError):
        edit_order_header(order, note_number="INV-999")


def test_transaction_queue_holds_started_orders_newest_first():
    orders = [
        _order(1, date(2026, 3, 1), [ProductionState.DONE]),
        _order(2, date(2026, 3, 3), [ProductionState.NOT_STARTED, ProductionState.IN_PROGRESS]),
        _order(3, date(2026, 3, 4), [ProductionState.NOT_STARTED]),
    ]
    assert [order.id for order in transaction_queue(orders)] == [2, 1]


def test_production_counters():
    orders = [
        _order(1, date(2026, 3, 1), [ProductionState.DONE, ProductionState.IN_PROGRESS]),
        _order(2, date(2026, 3, 2), [ProductionState.NOT_STARTED]),
    ]
    assert items_to_process(orders) == 2
    assert production_state_counts(orders) == {"Done": 1, "InProgress": 1, "NotStarted": 1}
