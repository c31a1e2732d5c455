from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from keystone.domain.store.entities import Order, Product


class ProductCreateDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str = Field("", max_length=4000)
    price_cents: int = Field(gt=0, validation_alias=AliasChoices("price_cents", "price"))
    image_url: str | None = Field(None, max_length=512)


class CheckoutItemDTO(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(1, ge=1, le=1000)


class CheckoutRequestDTO(BaseModel):
    items: list[CheckoutItemDTO] = Field(min_length=1)
    payment_token: str = Field(min_length=1, validation_alias=AliasChoices("payment_token", "token"))
    currency: str | None = Field(None, min_length=3, max_length=3)


class ProductDTO(BaseModel):
    id: int
    name: str
    description: str
    price_cents: int
    image_url: str | None

    @classmethod
    def from_entity(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price_cents=product.price_cents,
            image_url=product.image_url,
        )


class OrderLineDTO(BaseModel):
    product_id: int
    quantity: int
    unit_price_cents: int


class OrderDTO(BaseModel):
    id: int
    amount_cents: int
    currency: str
    charge_id: str
    status: str
    created_at: datetime
    lines: list[OrderLineDTO]

    @classmethod
    def from_entity(cls, order: Order) -> OrderDTO:
        return cls(
            id=order.id,
            amount_cents=order.amount_cents,
            currency=order.currency,
            charge_id=order.charge_id,
            status=order.status,
            created_at=order.created_at,
            lines=[
                OrderLineDTO(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price_cents=line.unit_price_cents,
                )
                for line in order.lines
            ],
        )
