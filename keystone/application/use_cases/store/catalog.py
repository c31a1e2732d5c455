# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from keystone.domain.accounts.exceptions import AdminRequiredError
from keystone.domain.accounts.repositories import AccountRepository
from keystone.domain.exceptions import InvalidInputError
from keystone.domain.projects.entities import NAME_MAX_LENGTH, clean_name
from keystone.domain.store.entities import Product
from keystone.domain.store.exceptions import ProductNotFoundError
from keystone.domain.store.repositories import ProductRepository
from keystone.shared.logging import logger


class Catalog:
    def __init__(self, *, products: ProductRepository, accounts: AccountRepository) -> None:
        self._products = products
        self._accounts = accounts

    def _require_admin(self, account_id: int) -> None:
        account = self._accounts.find_by_id(account_id)
        if account is None or not account.is_admin:
            raise AdminRequiredError()

    def list_products(self) -> Sequence[Product]:
        return self._products.list_all()

    def get_product(self, product_id: int) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    def create_product(
        self,
        account_id: int,
        *,
        name: str,
        price_cents: int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        self._require_admin(account_id)
        name = clean_name(name, field="name", max_length=NAME_MAX_LENGTH)
        if not isinstance(price_cents, int) or isinstance(price_cents, bool) or price_cents <= 0:
            raise InvalidInputError("price must be a positive integer", field="price_cents")
        product = self._products.add(name, (description or "").strip(), price_cents, image_url)
        logger.info(f"store.product: created product_id={product.id} by account_id={account_id}")
        return product

    def delete_product(self, account_id: int, product_id: int) -> None:
        self._require_admin(account_id)
        if not self._products.delete(product_id):
            raise ProductNotFoundError(product_id)
        logger.info(f"store.product: deleted product_id={product_id} by account_id={account_id}")
