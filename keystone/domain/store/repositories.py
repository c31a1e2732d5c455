# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Charge, Order, OrderLine, Product


class ProductRepository(Protocol):
    def add(
        self, name: str, description: str, price_cents: int, image_url: str | None
    ) -> Product: ...
    def get(self, product_id: int) -> Product | None: ...
    def get_many(self, product_ids: Sequence[int]) -> dict[int, Product]: ...
    def list_all(self) -> Sequence[Product]: ...
    def delete(self, product_id: int) -> bool: ...


class OrderRepository(Protocol):
    def add(
        self,
        account_id: int,
        *,
        amount_cents: int,
        currency: str,
        charge_id: str,
        status: str,
        lines: Sequence[OrderLine],
    ) -> Order: ...
    def list_for_account(self, account_id: int) -> Sequence[Order]: ...


class PaymentGateway(Protocol):
    def create_charge(
        self,
        *,
        amount_cents: int,
        currency: str,
        source_token: str,
        description: str,
        idempotency_key: str,
    ) -> Charge: ...
