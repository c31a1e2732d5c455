# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select

from keystone.domain.store.entities import Order as DomainOrder
from keystone.domain.store.entities import OrderLine as DomainOrderLine
from keystone.domain.store.entities import Product as DomainProduct
from keystone.domain.store.repositories import OrderRepository, ProductRepository
from keystone.infrastructure.db.models import Order, OrderLine, Product
from keystone.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope


def _product(row: Product) -> DomainProduct:
    return DomainProduct(
        id=row.id,
        name=row.name,
        description=row.description or "",
        price_cents=int(row.price_cents),
        image_url=row.image_url,
    )


class SqlAlchemyProductRepository(ProductRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(
        self, name: str, description: str, price_cents: int, image_url: str | None
    ) -> DomainProduct:
        with unit_of_work_scope(self._session_factory) as session:
            row = Product(
                name=name, description=description, price_cents=price_cents, image_url=image_url
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _product(row)

    def get(self, product_id: int) -> DomainProduct | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.get(Product, product_id)
            return _product(row) if row else None

    def get_many(self, product_ids: Sequence[int]) -> dict[int, DomainProduct]:
        if not product_ids:
            return {}
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = session.scalars(select(Product).where(Product.id.in_(product_ids))).all()
            return {row.id: _product(row) for row in rows}

    def list_all(self) -> Sequence[DomainProduct]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            rows = session.scalars(select(Product).order_by(Product.id.asc())).all()
            return [_product(row) for row in rows]

    def delete(self, product_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(delete(Product).where(Product.id == product_id))
            return bool(result.rowcount)


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(
        self,
        account_id: int,
        *,
        amount_cents: int,
        currency: str,
        charge_id: str,
        status: str,
        lines: Sequence[DomainOrderLine],
    ) -> DomainOrder:
        with unit_of_work_scope(self._session_factory) as session:
            row = Order(
                account_id=account_id,
                amount_cents=amount_cents,
                currency=currency,
                charge_id=charge_id,
                status=status,
            )
            session.add(row)
            session.flush()
            session.add_all(
                OrderLine(
                    order_id=row.id,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price_cents=line.unit_price_cents,
                )
                for line in lines
            )
            session.flush()
            session.refresh(row)
            return DomainOrder(
                id=row.id,
                account_id=row.account_id,
                amount_cents=row.amount_cents,
                currency=row.currency,
                charge_id=row.charge_id,
                status=row.status,
                created_at=row.created_at,
                lines=tuple(lines),
            )

    def list_for_account(self, account_id: int) -> Sequence[DomainOrder]:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            orders = session.scalars(
                select(Order).where(Order.account_id == account_id).order_by(Order.id.asc())
            ).all()
            order_ids = [order.id for order in orders]
            lines_by_order: dict[int, list[DomainOrderLine]] = {oid: [] for oid in order_ids}
            if order_ids:
                for line in session.scalars(
                    select(OrderLine)
                    .where(OrderLine.order_id.in_(order_ids))
                    .order_by(OrderLine.id.asc())
                ):
                    lines_by_order[line.order_id].append(
                        DomainOrderLine(
                            product_id=line.product_id,
                            quantity=line.quantity,
                            unit_price_cents=line.unit_price_cents,
                        )
                    )
            return [
                DomainOrder(
                    id=order.id,
                    account_id=order.account_id,
                    amount_cents=order.amount_cents,
                    currency=order.currency,
                    charge_id=order.charge_id,
                    status=order.status,
                    created_at=order.created_at,
                    lines=tuple(lines_by_order[order.id]),
                )
                for order in orders
            ]
