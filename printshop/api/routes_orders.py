from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from printshop.api.schemas import (
    LineItemIn,
    OrderCreateRequest,
    OrderUpdateRequest,
    PaymentRequest,
    ProductionUpdateRequest,
)
from printshop.api.utils import to_payload, today
from printshop.core.config import get_settings
from printshop.domain.billing import compute_order_total, outstanding_balance, payment_status, total_paid
from printshop.domain.documents import build_invoice, invoice_message_text
from printshop.domain.models import Order
from printshop.domain.pricing import Catalog, UnresolvedPolicy, priced_lines
from printshop.domain.production import transaction_queue
from printshop.persistence.db import get_session
from printshop.persistence.repository import ShopRepository
from printshop.services import (
    add_order_item,
    advance_item_production,
    create_order,
    delete_order,
    edit_order,
    load_snapshot,
    record_payment,
    remove_order_item,
)


router = APIRouter(tags=["orders"])


def _order_payload(order: Order, catalog: Catalog) -> dict:
    amounts = {line.item.id: line.amount for line in priced_lines(order, catalog, UnresolvedPolicy.ZERO_FILL)}
    return {
        "id": order.id,
        "note_number": order.note_number,
        "date": order.date.isoformat(),
        "customer_id": order.customer_id,
        "customer_name": catalog.customer_name(order.customer_id),
        "executor_id": order.executor_id,
        "items": [
            {
                "id": item.id,
                "material_id": item.material_id,
                "description": item.description,
                "length": item.length,
                "width": item.width,
                "quantity": item.quantity,
                "production_state": item.production_state.value,
                "amount": amounts.get(item.id, 0),
            }
            for item in order.items
        ],
        "payments": [
            {"amount": p.amount, "date": p.date.isoformat(), "operator_id": p.operator_id}
            for p in order.payments
        ],
        "total": compute_order_total(order, catalog),
        "paid": total_paid(order),
        "outstanding": outstanding_balance(order, catalog),
        "payment_status": payment_status(order, catalog).value,
    }


@router.post("/orders", status_code=201)
def post_order(body: OrderCreateRequest, session: Session = Depends(get_session)):
    order = create_order(
        session,
        note_number=body.note_number,
        order_date=body.order_date,
        customer_id=body.customer_id,
        executor_id=body.executor_id,
        items=[item.to_domain() for item in body.items],
    )
    return _order_payload(order, ShopRepository(session).catalog())


@router.get("/orders/{order_id}")
def get_order(order_id: int, session: Session = Depends(get_session)):
    repo = ShopRepository(session)
    return _order_payload(repo.get_order(order_id), repo.catalog())


@router.delete("/orders/{order_id}", status_code=204)
def remove_order(order_id: int, session: Session = Depends(get_session)):
    delete_order(session, order_id)


@router.patch("/orders/{order_id}")
def patch_order(order_id: int, body: OrderUpdateRequest, session: Session = Depends(get_session)):
    order = edit_order(session, order_id, **body.changes())
    return _order_payload(order, ShopRepository(session).catalog())


@router.post("/orders/{order_id}/items", status_code=201)
def post_order_item(order_id: int, body: LineItemIn, session: Session = Depends(get_session)):
    order = add_order_item(session, order_id, body.to_domain())
    return _order_payload(order, ShopRepository(session).catalog())


@router.delete("/orders/{order_id}/items/{item_id}")
def delete_order_item(order_id: int, item_id: int, session: Session = Depends(get_session)):
    order = remove_order_item(session, order_id, item_id)
    return _order_payload(order, ShopRepository(session).catalog())


@router.post("/orders/{order_id}/payments")
def post_payment(order_id: int, body: PaymentRequest, session: Session = Depends(get_session)):
    order = record_payment(
        session,
        order_id=order_id,
        amount=body.amount,
        paid_on=body.paid_on or today(),
        operator_id=body.operator_id,
    )
    return _order_payload(order, ShopRepository(session).catalog())


@router.post("/orders/{order_id}/items/{item_id}/production")
def post_production_state(
    order_id: int,
    item_id: int,
    body: ProductionUpdateRequest,
    session: Session = Depends(get_session),
):
    order = advance_item_production(session, order_id, item_id, body.state)
    return _order_payload(order, ShopRepository(session).catalog())


@router.get("/orders/{order_id}/invoice")
def get_invoice(order_id: int, session: Session = Depends(get_session)):
    settings = get_settings()
    repo = ShopRepository(session)
    invoice = build_invoice(repo.get_order(order_id), repo.catalog())
    return {
        "invoice": to_payload(invoice),
        "message_text": invoice_message_text(invoice, settings.app_name, settings.currency_code),
    }


@router.get("/transactions")
def list_transactions(
    limit: int = Query(default=100, ge=1, le=1000),
    session: Session = Depends(get_session),
):
    snapshot = load_snapshot(session)
    queue = transaction_queue(snapshot.orders)[:limit]
    return {
        "count": len(queue),
        "transactions": [_order_payload(order, snapshot.catalog) for order in queue],
    }
