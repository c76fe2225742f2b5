from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import BigInteger, Date, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class CustomerModel(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(256), default="", nullable=False)
    phone: Mapped[str] = mapped_column(String(64), default="", nullable=False)
    address: Mapped[str] = mapped_column(Text, default="", nullable=False)
    tier: Mapped[str] = mapped_column(String(32), nullable=False)


class MaterialModel(Base):
    __tablename__ = "materials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    price_end_customer: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    price_retail: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    price_wholesale: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    price_reseller: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    price_corporate: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)


class OrderModel(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    note_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    order_date: Mapped[date] = mapped_column(Date, nullable=False)
    # No FK: a dangling customer reference must still load.
    customer_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    executor_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    payment_status: Mapped[str] = mapped_column(String(32), default="Unpaid", nullable=False)

    items: Mapped[list["OrderItemModel"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
    payments: Mapped[list["PaymentModel"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="PaymentModel.seq_id",
    )


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    material_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    length: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    width: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    production_state: Mapped[str] = mapped_column(String(32), default="NotStarted", nullable=False)

    order: Mapped[OrderModel] = relationship(back_populates="items")


class PaymentModel(Base):
    __tablename__ = "payments"

    seq_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    paid_on: Mapped[date] = mapped_column(Date, nullable=False)
    operator_id: Mapped[str] = mapped_column(String(128), nullable=False)

    order: Mapped[OrderModel] = relationship(back_populates="payments")


class ExpenseModel(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    expense_date: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(256), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_cost: Mapped[int] = mapped_column(BigInteger, nullable=False)


Index("ix_orders_order_date", OrderModel.order_date)
Index("ix_orders_customer_id", OrderModel.customer_id)
Index("ix_payments_paid_on", PaymentModel.paid_on)
Index("ix_expenses_expense_date", ExpenseModel.expense_date)
