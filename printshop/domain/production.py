from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from printshop.domain.errors import EmptyOrder, InvalidTransition, LineItemNotFound
from printshop.domain.models import Order, OrderLineItem, ProductionState

_NEXT_STATE: dict[ProductionState, ProductionState] = {
    ProductionState.NOT_STARTED: ProductionState.IN_PROGRESS,
    ProductionState.IN_PROGRESS: ProductionState.DONE,
}

_IN_TRANSACTION = {ProductionState.IN_PROGRESS, ProductionState.DONE}

_EDITABLE_HEADER_FIELDS = {"customer_id", "executor_id", "date"}


def _find_item_index(order: Order, item_id: int) -> int:
    for index, item in enumerate(order.items):
        if item.id == item_id:
            return index
    raise LineItemNotFound(f"order {order.id} has no line item {item_id}")


def advance_production(order: Order, item_id: int, target: ProductionState) -> Order:
    """Move one line item a single step forward in production.

    The billing status is not touched; the two lifecycles are
    independent.
    """
    index = _find_item_index(order, item_id)
    item = order.items[index]
    expected = _NEXT_STATE.get(item.production_state)
    if expected is None or target is not expected:
        raise InvalidTransition(
            f"line item {item_id} cannot move from {item.production_state.value} to {target.value}"
        )
    items = list(order.items)
    items[index] = replace(item, production_state=target)
    return replace(order, items=items)


def remove_line_item(order: Order, item_id: int) -> Order:
    index = _find_item_index(order, item_id)
    if len(order.items) <= 1:
        raise EmptyOrder(f"order {order.id} must keep at least one line item")
    items = [item for i, item in enumerate(order.items) if i != index]
    return replace(order, items=items)


def add_line_item(order: Order, item: OrderLineItem) -> Order:
    return replace(order, items=[*order.items, item])


def edit_order_header(order: Order, **changes: Any) -> Order:
    """Apply header edits (customer, executor, date); payments are kept as-is."""
    unknown = set(changes) - _EDITABLE_HEADER_FIELDS
    if unknown:
        raise ValueError(f"fields not editable: {sorted(unknown)}")
    return replace(order, **changes)


def is_in_transaction(order: Order) -> bool:
    return any(item.production_state in _IN_TRANSACTION for item in order.items)


def transaction_queue(orders: Iterable[Order]) -> list[Order]:
    queued = [order for order in orders if is_in_transaction(order)]
    return sorted(queued, key=lambda order: order.date, reverse=True)


def items_to_process(orders: Iterable[Order]) -> int:
    return sum(
        1
        for order in orders
        for item in order.items
        if item.production_state is not ProductionState.DONE
    )


def production_state_counts(orders: Iterable[Order]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for order in orders:
        for item in order.items:
            key = item.production_state.value
            counts[key] = counts.get(key, 0) + 1
    return counts
