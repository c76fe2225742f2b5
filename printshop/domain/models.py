from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class CustomerTier(str, Enum):
    END_CUSTOMER = "EndCustomer"
    RETAIL = "Retail"
    WHOLESALE = "Wholesale"
    RESELLER = "Reseller"
    CORPORATE = "Corporate"


class ProductionState(str, Enum):
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class PaymentStatus(str, Enum):
    UNPAID = "Unpaid"
    PARTIALLY_PAID = "PartiallyPaid"
    SETTLED = "Settled"


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    tier: CustomerTier
    email: str = ""
    phone: str = ""
    address: str = ""


@dataclass(frozen=True)
class Material:
    id: int
    name: str
    prices: dict[CustomerTier, int] = field(default_factory=dict)


@dataclass
class OrderLineItem:
    id: int
    material_id: int | None
    quantity: int
    length: float = 0
    width: float = 0
    description: str = ""
    production_state: ProductionState = ProductionState.NOT_STARTED

    @property
    def is_dimensional(self) -> bool:
        return self.length > 0 and self.width > 0


@dataclass(frozen=True)
class Payment:
    amount: int
    date: date
    operator_id: str


@dataclass
class Order:
    id: int
    note_number: str
    date: date
    customer_id: int | None
    items: list[OrderLineItem] = field(default_factory=list)
    executor_id: int | None = None
    # Cache only; refreshed on every payment event from the ledger below.
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payments: tuple[Payment, ...] = ()


@dataclass(frozen=True)
class Expense:
    id: int
    date: date
    category: str
    quantity: int
    unit_cost: int

    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_cost
