from __future__ import annotations

from datetime import date
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from printshop.domain.errors import DuplicateNoteNumber, LineItemNotFound, OrderNotFound
from printshop.domain.models import (
    Customer,
    CustomerTier,
    Expense,
    Material,
    Order,
    OrderLineItem,
    Payment,
    PaymentStatus,
    ProductionState,
)
from printshop.domain.pricing import Catalog
from printshop.persistence.models import (
    CustomerModel,
    ExpenseModel,
    MaterialModel,
    OrderItemModel,
    OrderModel,
    PaymentModel,
)

PRICE_COLUMNS: dict[CustomerTier, str] = {
    CustomerTier.END_CUSTOMER: "price_end_customer",
    CustomerTier.RETAIL: "price_retail",
    CustomerTier.WHOLESALE: "price_wholesale",
    CustomerTier.RESELLER: "price_reseller",
    CustomerTier.CORPORATE: "price_corporate",
}


def _customer_from_row(row: CustomerModel) -> Customer:
    return Customer(
        id=row.id,
        name=row.name,
        tier=CustomerTier(row.tier),
        email=row.email,
        phone=row.phone,
        address=row.address,
    )


def _material_from_row(row: MaterialModel) -> Material:
    return Material(
        id=row.id,
        name=row.name,
        prices={tier: int(getattr(row, column)) for tier, column in PRICE_COLUMNS.items()},
    )


def _order_from_row(row: OrderModel) -> Order:
    return Order(
        id=row.id,
        note_number=row.note_number,
        date=row.order_date,
        customer_id=row.customer_id,
        executor_id=row.executor_id,
        payment_status=PaymentStatus(row.payment_status),
        items=[
            OrderLineItem(
                id=item.id,
                material_id=item.material_id,
                quantity=item.quantity,
                length=item.length,
                width=item.width,
                description=item.description,
                production_state=ProductionState(item.production_state),
            )
            for item in row.items
        ],
        payments=tuple(
            Payment(amount=int(p.amount), date=p.paid_on, operator_id=p.operator_id)
            for p in row.payments
        ),
    )


def _item_row(position: int, item: OrderLineItem) -> OrderItemModel:
    return OrderItemModel(
        position=position,
        material_id=item.material_id,
        description=item.description,
        length=item.length,
        width=item.width,
        quantity=item.quantity,
        production_state=item.production_state.value,
    )


def _expense_from_row(row: ExpenseModel) -> Expense:
    return Expense(
        id=row.id,
        date=row.expense_date,
        category=row.category,
        quantity=row.quantity,
        unit_cost=int(row.unit_cost),
    )


class ShopRepository:
    def __init__(self, session: Session):
        self.session = session

    def _order_row(self, order_id: int) -> OrderModel:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.payments))
        )
        row = self.session.scalar(stmt)
        if row is None:
            raise OrderNotFound(f"order {order_id} not found")
        return row

    def catalog(self) -> Catalog:
        customers = self.session.scalars(select(CustomerModel).order_by(CustomerModel.id.asc())).all()
        materials = self.session.scalars(select(MaterialModel).order_by(MaterialModel.id.asc())).all()
        return Catalog.from_records(
            (_customer_from_row(row) for row in customers),
            (_material_from_row(row) for row in materials),
        )

    def list_orders(self) -> list[Order]:
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items), selectinload(OrderModel.payments))
            .order_by(OrderModel.id.asc())
        )
        return [_order_from_row(row) for row in self.session.scalars(stmt).all()]

    def list_expenses(self) -> list[Expense]:
        stmt = select(ExpenseModel).order_by(ExpenseModel.id.asc())
        return [_expense_from_row(row) for row in self.session.scalars(stmt).all()]

    def get_order(self, order_id: int) -> Order:
        return _order_from_row(self._order_row(order_id))

    def count_orders(self) -> int:
        return int(self.session.scalar(select(func.count()).select_from(OrderModel)) or 0)

    def note_number_exists(self, note_number: str) -> bool:
        stmt = select(OrderModel.id).where(OrderModel.note_number == note_number)
        return self.session.scalar(stmt) is not None

    def add_customer(self, customer: Customer) -> Customer:
        row = CustomerModel(
            name=customer.name,
            email=customer.email,
            phone=customer.phone,
            address=customer.address,
            tier=customer.tier.value,
        )
        self.session.add(row)
        self.session.flush()
        return _customer_from_row(row)

    def add_material(self, material: Material) -> Material:
        row = MaterialModel(name=material.name)
        for tier, column in PRICE_COLUMNS.items():
            setattr(row, column, int(material.prices.get(tier, 0)))
        self.session.add(row)
        self.session.flush()
        return _material_from_row(row)

    def add_expense(self, expense_date: date, category: str, quantity: int, unit_cost: int) -> Expense:
        row = ExpenseModel(expense_date=expense_date, category=category, quantity=quantity, unit_cost=unit_cost)
        self.session.add(row)
        self.session.flush()
        return _expense_from_row(row)

    def add_order(
        self,
        note_number: str,
        order_date: date,
        customer_id: int | None,
        items: Iterable[OrderLineItem],
        executor_id: int | None = None,
    ) -> Order:
        if self.note_number_exists(note_number):
            raise DuplicateNoteNumber(f"note number {note_number!r} is already used")
        row = OrderModel(
            note_number=note_number,
            order_date=order_date,
            customer_id=customer_id,
            executor_id=executor_id,
            payment_status=PaymentStatus.UNPAID.value,
        )
        row.items = [_item_row(position, item) for position, item in enumerate(items)]
        self.session.add(row)
        self.session.flush()
        return _order_from_row(row)

    def append_payment(self, order_id: int, payment: Payment, status: PaymentStatus) -> Order:
        row = self._order_row(order_id)
        row.payments.append(
            PaymentModel(amount=payment.amount, paid_on=payment.date, operator_id=payment.operator_id)
        )
        row.payment_status = status.value
        self.session.flush()
        return _order_from_row(row)

    def save_order_edits(self, order: Order, status: PaymentStatus) -> Order:
        """Write header and item edits back; items with id 0 are inserted."""
        row = self._order_row(order.id)
        row.customer_id = order.customer_id
        row.executor_id = order.executor_id
        row.order_date = order.date

        kept_ids = {item.id for item in order.items if item.id}
        for item_row in [r for r in row.items if r.id not in kept_ids]:
            row.items.remove(item_row)
        next_position = max((r.position for r in row.items), default=-1) + 1
        for item in order.items:
            if not item.id:
                row.items.append(_item_row(next_position, item))
                next_position += 1

        row.payment_status = status.value
        self.session.flush()
        return _order_from_row(row)

    def set_production_state(self, order_id: int, item_id: int, state: ProductionState) -> Order:
        row = self._order_row(order_id)
        for item in row.items:
            if item.id == item_id:
                item.production_state = state.value
                break
        else:
            raise LineItemNotFound(f"order {order_id} has no line item {item_id}")
        self.session.flush()
        return _order_from_row(row)

    def delete_order(self, order_id: int) -> None:
        # Items and payments go with the order through the ORM cascade.
        self.session.delete(self._order_row(order_id))
        self.session.flush()
