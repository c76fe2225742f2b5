from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from printshop.domain.models import OrderLineItem, ProductionState


class LineItemIn(BaseModel):
    material_id: int | None = None
    description: str = ""
    length: float = Field(default=0, ge=0, description="metres; 0 for count-based items")
    width: float = Field(default=0, ge=0, description="metres; 0 for count-based items")
    quantity: int = Field(default=1, gt=0)

    def to_domain(self) -> OrderLineItem:
        return OrderLineItem(
            id=0,
            material_id=self.material_id,
            description=self.description,
            length=self.length,
            width=self.width,
            quantity=self.quantity,
        )


class OrderCreateRequest(BaseModel):
    note_number: str = Field(min_length=1)
    order_date: date
    customer_id: int | None = None
    executor_id: int | None = None
    items: list[LineItemIn] = Field(min_length=1)


class PaymentRequest(BaseModel):
    amount: int
    paid_on: date | None = None
    operator_id: str = Field(min_length=1)


class ProductionUpdateRequest(BaseModel):
    state: ProductionState


class OrderUpdateRequest(BaseModel):
    order_date: date | None = None
    customer_id: int | None = None
    executor_id: int | None = None

    def changes(self) -> dict:
        fields = self.model_dump(include=self.model_fields_set)
        if "order_date" in fields:
            order_date = fields.pop("order_date")
            if order_date is not None:
                fields["date"] = order_date
        return fields
