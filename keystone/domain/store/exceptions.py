# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from keystone.domain.exceptions import NotFoundError
from keystone.shared.errors.base import DomainError


class ProductNotFoundError(NotFoundError):
    code = "product_not_found"

    def __init__(self, product_id: int) -> None:
        super().__init__(product_id=product_id)


class PaymentDeclinedError(DomainError):
    code = "payment_declined"
    status = HTTPStatus.PAYMENT_REQUIRED

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(context={"reason": reason} if reason else None)


class PaymentUnavailableError(DomainError):
    code = "payment_unavailable"
    status = HTTPStatus.SERVICE_UNAVAILABLE


class OrderNotRecordedError(DomainError):
    """The charge went through but the order row could not be stored."""

    code = "order_not_recorded"
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, charge_id: str) -> None:
        super().__init__(context={"charge_id": charge_id})
        self.charge_id = charge_id
