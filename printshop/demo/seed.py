from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from sqlalchemy.orm import Session

from printshop.domain.models import Customer, CustomerTier, Material, OrderLineItem, ProductionState
from printshop.persistence.repository import ShopRepository
from printshop.services import create_order, record_payment

logger = logging.getLogger(__name__)

DEMO_SCENARIO_ID = "print_shop_week_v1"

DEMO_CUSTOMERS: list[dict[str, Any]] = [
    {"name": "Budi Santoso", "email": "budi.s@example.com", "phone": "081234567890", "address": "Jl. Merdeka No. 10, Jakarta", "tier": CustomerTier.RETAIL},
    {"name": "Citra Lestari", "email": "citra.l@example.com", "phone": "082345678901", "address": "Jl. Sudirman No. 25, Bandung", "tier": CustomerTier.END_CUSTOMER},
    {"name": "Dewi Anggraini", "email": "dewi.a@example.com", "phone": "083456789012", "address": "Jl. Gajah Mada No. 5, Surabaya", "tier": CustomerTier.WHOLESALE},
    {"name": "Eko Prasetyo", "email": "eko.p@example.com", "phone": "085678901234", "address": "Jl. Pahlawan No. 12, Semarang", "tier": CustomerTier.RESELLER},
    {"name": "Antok Sugiyanto", "email": "antok@example.com", "phone": "082247770012", "address": "Karanganyar Kota", "tier": CustomerTier.CORPORATE},
]

# Prices per tier: end customer, retail, wholesale, reseller, corporate.
DEMO_MATERIALS: list[tuple[str, tuple[int, int, int, int, int]]] = [
    ("Flexi 280gr", (25000, 22000, 20000, 18000, 15000)),
    ("Flexi 340gr", (30000, 28000, 25000, 23000, 20000)),
    ("Artpaper", (15000, 13000, 11000, 10000, 8000)),
    ("Art Carton", (20000, 18000, 16000, 14000, 12000)),
    ("One Way Vision", (75000, 70000, 65000, 60000, 55000)),
    ("Sticker Vynil", (50000, 45000, 40000, 38000, 35000)),
]

DEMO_EXPENSES: list[tuple[int, str, int, int]] = [
    (5, "Printer ink", 2, 150000),
    (4, "Electricity", 1, 500000),
    (3, "Staff salary", 1, 2500000),
    (2, "A4 paper (ream)", 5, 50000),
    (1, "Internet", 1, 350000),
]

# (note, days ago, customer index, executor id, [(material index, description, length, width, qty, state)], payments)
DEMO_ORDERS: list[tuple[str, int, int, int | None, list[tuple[int, str, float, float, int, ProductionState]], list[int]]] = [
    ("INV-001", 6, 0, 4, [(0, "Shop banner", 2, 1, 2, ProductionState.DONE)], [88000]),
    ("INV-002", 4, 4, 4, [(4, "Office window sticker", 5, 2, 4, ProductionState.DONE)], [2200000]),
    (
        "INV-003",
        2,
        1,
        4,
        [
            (2, "Promo brochure", 0, 0, 500, ProductionState.DONE),
            (5, "Logo sticker", 0, 0, 100, ProductionState.DONE),
        ],
        [],
    ),
    ("INV-004", 1, 2, None, [(1, "Event banner", 5, 1, 5, ProductionState.IN_PROGRESS)], [300000]),
    ("INV-005", 0, 3, None, [(3, "Business cards", 0, 0, 200, ProductionState.NOT_STARTED)], []),
]


def seed_demo_data(session: Session, today: date | None = None) -> dict[str, Any]:
    repo = ShopRepository(session)
    if repo.count_orders() > 0:
        return {"scenario_id": DEMO_SCENARIO_ID, "seeded_now": False, "orders": repo.count_orders()}

    today = today or date.today()
    customers = [
        repo.add_customer(Customer(id=0, name=c["name"], tier=c["tier"], email=c["email"], phone=c["phone"], address=c["address"]))
        for c in DEMO_CUSTOMERS
    ]
    tiers = list(CustomerTier)
    materials = [
        repo.add_material(Material(id=0, name=name, prices=dict(zip(tiers, prices))))
        for name, prices in DEMO_MATERIALS
    ]
    for days_ago, category, quantity, unit_cost in DEMO_EXPENSES:
        repo.add_expense(today - timedelta(days=days_ago), category, quantity, unit_cost)

    for note, days_ago, customer_index, executor_id, lines, payments in DEMO_ORDERS:
        order_date = today - timedelta(days=days_ago)
        order = create_order(
            session,
            note_number=note,
            order_date=order_date,
            customer_id=customers[customer_index].id,
            executor_id=executor_id,
            items=[
                OrderLineItem(
                    id=0,
                    material_id=materials[material_index].id,
                    description=description,
                    length=length,
                    width=width,
                    quantity=qty,
                    production_state=state,
                )
                for material_index, description, length, width, qty, state in lines
            ],
        )
        for amount in payments:
            record_payment(session, order.id, amount, order_date, "kasir")

    logger.info("demo data seeded: scenario_id=%s orders=%s", DEMO_SCENARIO_ID, len(DEMO_ORDERS))
    return {"scenario_id": DEMO_SCENARIO_ID, "seeded_now": True, "orders": len(DEMO_ORDERS)}
