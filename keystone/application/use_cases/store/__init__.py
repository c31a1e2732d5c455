# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .catalog import Catalog
from .checkout import CheckoutItem, CheckoutUseCase

__all__ = ["Catalog", "CheckoutItem", "CheckoutUseCase"]
