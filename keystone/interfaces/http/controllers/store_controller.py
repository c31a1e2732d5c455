# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from keystone.application.use_cases.store.catalog import Catalog
from keystone.application.use_cases.store.checkout import CheckoutItem, CheckoutUseCase
from keystone.infrastructure.audit import AuditAction, audit_log
from keystone.interfaces.http.auth import (
    auth_required,
    current_account_id,
    live_account_required,
)
from keystone.interfaces.http.dto.store import (
    CheckoutRequestDTO,
    OrderDTO,
    ProductCreateDTO,
    ProductDTO,
)
from keystone.shared.errors.base import AppError

from ._common import client_ip, parse_body


class StoreController:
    def __init__(self, *, catalog: Catalog, checkout_use_case: CheckoutUseCase) -> None:
        self._catalog = catalog
        self._checkout = checkout_use_case

    def list_products(self):
        items = self._catalog.list_products()
        return jsonify({"items": [ProductDTO.from_entity(p).model_dump(mode="json") for p in items]})

    def get_product(self, product_id: int):
        product = self._catalog.get_product(product_id)
        return jsonify(ProductDTO.from_entity(product).model_dump(mode="json"))

    @auth_required
    def create_product(self):
        dto = parse_body(ProductCreateDTO)
        account_id = current_account_id()
        product = self._catalog.create_product(
            account_id,
            name=dto.name,
            price_cents=dto.price_cents,
            description=dto.description,
            image_url=dto.image_url,
        )
        audit_log(
            AuditAction.PRODUCT_CREATED,
            account_id=account_id,
            ip_address=client_ip(),
            details={"product_id": product.id},
        )
        return jsonify(ProductDTO.from_entity(product).model_dump(mode="json")), 201

    @auth_required
    def delete_product(self, product_id: int):
        account_id = current_account_id()
        self._catalog.delete_product(account_id, product_id)
        audit_log(
            AuditAction.PRODUCT_DELETED,
            account_id=account_id,
            ip_address=client_ip(),
            details={"product_id": product_id},
        )
        return jsonify({"ok": True})

    @live_account_required
    def checkout(self):
        dto = parse_body(CheckoutRequestDTO)
        account_id = current_account_id()
        items = [CheckoutItem(product_id=i.product_id, quantity=i.quantity) for i in dto.items]
        try:
            order = self._checkout.execute(account_id, items, dto.payment_token, dto.currency)
        except AppError as exc:
            audit_log(
                AuditAction.CHECKOUT_FAILED,
                account_id=account_id,
                ip_address=client_ip(),
                details={"error": exc.code},
                success=False,
            )
            raise
        audit_log(
            AuditAction.CHECKOUT_COMPLETED,
            account_id=account_id,
            ip_address=client_ip(),
            details={"order_id": order.id, "amount_cents": order.amount_cents},
        )
        return jsonify(OrderDTO.from_entity(order).model_dump(mode="json")), 201

    @auth_required
    def list_orders(self):
        orders = self._checkout.list_orders(current_account_id())
        return jsonify({"items": [OrderDTO.from_entity(o).model_dump(mode="json") for o in orders]})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("store", __name__, url_prefix="/api")
        bp.add_url_rule("/products", view_func=self.list_products, methods=["GET"])
        bp.add_url_rule("/products", view_func=self.create_product, methods=["POST"])
        bp.add_url_rule("/products/<int:product_id>", view_func=self.get_product, methods=["GET"])
        bp.add_url_rule(
            "/products/<int:product_id>", view_func=self.delete_product, methods=["DELETE"]
        )
        bp.add_url_rule("/checkout", view_func=self.checkout, methods=["POST"])
        bp.add_url_rule("/orders", view_func=self.list_orders, methods=["GET"])
        return bp
