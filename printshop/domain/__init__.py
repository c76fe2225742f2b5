from printshop.domain.billing import (
    apply_payment,
    compute_order_total,
    derive_payment_status,
    outstanding_balance,
    payment_status,
    total_paid,
)
from printshop.domain.errors import (
    BillingError,
    DuplicateNoteNumber,
    EmptyOrder,
    InvalidAmount,
    InvalidTransition,
    LineItemNotFound,
    OrderNotFound,
    RecordNotFound,
)
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
from printshop.domain.pricing import Catalog, UnresolvedPolicy, compute_line_amount, resolve_price

__all__ = [
    "BillingError",
    "Catalog",
    "Customer",
    "CustomerTier",
    "DuplicateNoteNumber",
    "EmptyOrder",
    "Expense",
    "InvalidAmount",
    "InvalidTransition",
    "LineItemNotFound",
    "Material",
    "Order",
    "OrderLineItem",
    "OrderNotFound",
    "Payment",
    "PaymentStatus",
    "RecordNotFound",
    "ProductionState",
    "UnresolvedPolicy",
    "apply_payment",
    "compute_line_amount",
    "compute_order_total",
    "derive_payment_status",
    "outstanding_balance",
    "payment_status",
    "resolve_price",
    "total_paid",
]
