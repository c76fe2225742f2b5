from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from printshop.domain.models import Customer, CustomerTier, Material, Order, OrderLineItem

logger = logging.getLogger(__name__)


class UnresolvedPolicy(str, Enum):
    """How a line with a dangling customer or material reference is treated.

    ZERO_FILL keeps the line with a zero amount (order totals).
    EXCLUDE drops the line entirely (material rankings).
    """

    ZERO_FILL = "zero_fill"
    EXCLUDE = "exclude"


def resolve_price(material: Material, tier: CustomerTier) -> int:
    return int(material.prices.get(tier, 0))


def line_area(item: OrderLineItem) -> float:
    if item.length > 0 and item.width > 0:
        return item.length * item.width
    return 1


def whole_amount(value: float) -> int | float:
    """Collapse a float with no fractional part back to an int."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def compute_line_amount(item: OrderLineItem, unit_price: int) -> int | float:
    return whole_amount(unit_price * line_area(item) * item.quantity)


@dataclass
class Catalog:
    """Current reference data used for every price lookup."""

    customers: dict[int, Customer] = field(default_factory=dict)
    materials: dict[int, Material] = field(default_factory=dict)

    @classmethod
    def from_records(cls, customers: Iterable[Customer], materials: Iterable[Material]) -> "Catalog":
        return cls(
            customers={customer.id: customer for customer in customers},
            materials={material.id: material for material in materials},
        )

    def customer(self, customer_id: int | None) -> Customer | None:
        if customer_id is None:
            return None
        return self.customers.get(customer_id)

    def material(self, material_id: int | None) -> Material | None:
        if material_id is None:
            return None
        return self.materials.get(material_id)

    def customer_name(self, customer_id: int | None, default: str = "N/A") -> str:
        customer = self.customer(customer_id)
        return customer.name if customer is not None else default

    def current_unit_price(self, material: Material, tier: CustomerTier) -> int:
        # Totals are recomputed from today's price table; a historical
        # snapshot would replace this lookup.
        return resolve_price(material, tier)


@dataclass(frozen=True)
class PricedLine:
    item: OrderLineItem
    material: Material | None
    unit_price: int
    area: float
    amount: int | float

    @property
    def quantity_equivalent(self) -> float:
        return self.area * self.item.quantity


def priced_lines(order: Order, catalog: Catalog, policy: UnresolvedPolicy) -> Iterator[PricedLine]:
    customer = catalog.customer(order.customer_id)
    for item in order.items:
        material = catalog.material(item.material_id)
        area = line_area(item)
        if customer is None or material is None:
            logger.debug(
                "unresolved reference: order=%s item=%s customer=%s material=%s",
                order.id,
                item.id,
                order.customer_id,
                item.material_id,
            )
            if policy is UnresolvedPolicy.EXCLUDE:
                continue
            yield PricedLine(item=item, material=material, unit_price=0, area=area, amount=0)
            continue

        unit_price = catalog.current_unit_price(material, customer.tier)
        yield PricedLine(
            item=item,
            material=material,
            unit_price=unit_price,
            area=area,
            amount=compute_line_amount(item, unit_price),
        )
