# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Catalog and order records for the storefront."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from keystone.domain.exceptions import InvalidInputError


@dataclass(slots=True, frozen=True)
class Product:

    id: int
    name: str
    description: str
    price_cents: int
    image_url: str | None = None

    def __post_init__(self) -> None:
        if self.price_cents <= 0:
            raise InvalidInputError("price must be positive", field="price_cents")


@dataclass(slots=True, frozen=True)
class OrderLine:

    product_id: int
    quantity: int
    unit_price_cents: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise InvalidInputError("quantity must be at least 1", field="quantity")

    @property
    def subtotal_cents(self) -> int:
        return self.quantity * self.unit_price_cents


@dataclass(slots=True, frozen=True)
class Order:

    id: int
    account_id: int
    amount_cents: int
    currency: str
    charge_id: str
    status: str
    created_at: datetime
    lines: Sequence[OrderLine] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class Charge:
    """Result of a charge-creation call on the payment gateway."""

    id: str
    amount_cents: int
    currency: str
    status: str
    paid: bool
