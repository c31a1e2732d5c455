# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass

from keystone.domain.exceptions import InvalidInputError
from keystone.domain.store.entities import Order, OrderLine
from keystone.domain.store.exceptions import (
    OrderNotRecordedError,
    PaymentDeclinedError,
    ProductNotFoundError,
)
from keystone.domain.store.repositories import (
    OrderRepository,
    PaymentGateway,
    ProductRepository,
)
from keystone.shared.logging import logger


@dataclass(slots=True, frozen=True)
class CheckoutItem:
    product_id: int
    quantity: int


class CheckoutUseCase:
    """Price a cart from stored prices, charge it, then record the order."""

    def __init__(
        self,
        *,
        products: ProductRepository,
        orders: OrderRepository,
        payments: PaymentGateway,
        default_currency: str = "usd",
    ) -> None:
        self._products = products
        self._orders = orders
        self._payments = payments
        self._default_currency = default_currency

    def _price_lines(self, items: Sequence[CheckoutItem]) -> list[OrderLine]:
        if not items:
            raise InvalidInputError("cart is empty", field="items")

        quantities: dict[int, int] = {}
        for item in items:
            if item.quantity < 1:
                raise InvalidInputError("quantity must be at least 1", field="quantity")
            quantities[item.product_id] = quantities.get(item.product_id, 0) + item.quantity

        products = self._products.get_many(list(quantities))
        lines = []
        for product_id, quantity in quantities.items():
            product = products.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            lines.append(
                OrderLine(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price_cents=product.price_cents,
                )
            )
        return lines

    def execute(
        self,
        account_id: int,
        items: Sequence[CheckoutItem],
        payment_token: str,
        currency: str | None = None,
    ) -> Order:
        if not isinstance(payment_token, str) or not payment_token.strip():
            raise InvalidInputError("must be a non-empty string", field="payment_token")

        lines = self._price_lines(items)
        amount = sum(line.subtotal_cents for line in lines)
        currency = (currency or self._default_currency).lower()

        charge = self._payments.create_charge(
            amount_cents=amount,
            currency=currency,
            source_token=payment_token.strip(),
            description=f"Order for account {account_id}",
            idempotency_key=uuid.uuid4().hex,
        )
        if not charge.paid:
            logger.warning(
                f"store.checkout: charge not paid account_id={account_id} "
                f"charge_id={charge.id} status={charge.status}"
            )
            raise PaymentDeclinedError(charge.status)

        try:
            order = self._orders.add(
                account_id,
                amount_cents=amount,
                currency=currency,
                charge_id=charge.id,
                status=charge.status,
                lines=lines,
            )
        except Exception as exc:
            # Card already charged; the charge id is what reconciles it.
            logger.error(
                f"store.checkout: order not stored after charge account_id={account_id} "
                f"charge_id={charge.id} amount={amount} currency={currency} "
                f"error={type(exc).__name__}"
            )
            raise OrderNotRecordedError(charge.id) from exc
        logger.info(
            f"store.checkout: ok account_id={account_id} order_id={order.id} amount={amount}"
        )
        return order

    def list_orders(self, account_id: int) -> Sequence[Order]:
        return self._orders.list_for_account(account_id)
