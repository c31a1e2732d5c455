# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Charge, Order, OrderLine, Product
from .exceptions import (
    OrderNotRecordedError,
    PaymentDeclinedError,
    PaymentUnavailableError,
    ProductNotFoundError,
)

__all__ = [
    "Charge",
    "Order",
    "OrderLine",
    "OrderNotRecordedError",
    "PaymentDeclinedError",
    "PaymentUnavailableError",
    "Product",
    "ProductNotFoundError",
]
