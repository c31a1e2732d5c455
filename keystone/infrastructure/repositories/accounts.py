# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from keystone.domain.accounts.entities import Account as DomainAccount
from keystone.domain.accounts.exceptions import DuplicateAccountError
from keystone.domain.accounts.repositories import AccountRepository
from keystone.infrastructure.db.models import Account
from keystone.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from keystone.shared.logging import logger


def _to_domain(row: Account) -> DomainAccount:
    return DomainAccount(
        id=row.id,
        handle=row.handle,
        contact=row.contact,
        secret_hash=row.secret_hash,
        created_at=row.created_at,
        is_admin=bool(row.is_admin),
    )


def _duplicate_field(exc: IntegrityError) -> str | None:
    detail = str(exc.orig).lower()
    for field in ("handle", "contact"):
        if field in detail:
            return field
    return None


class SqlAlchemyAccountRepository(AccountRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def create(self, handle: str, contact: str, secret_hash: str) -> DomainAccount:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = Account(handle=handle, contact=contact, secret_hash=secret_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                account = _to_domain(row)
        except IntegrityError as exc:
            field = _duplicate_field(exc)
            logger.info(f"accounts.repo: unique constraint rejected insert field={field}")
            raise DuplicateAccountError(field) from exc
        return account

    def _find_one(self, *criteria) -> DomainAccount | None:
        with unit_of_work_scope(self._session_factory, read_only=True) as session:
            row = session.scalars(select(Account).where(*criteria)).first()
            return _to_domain(row) if row else None

    def find_by_contact(self, contact: str) -> DomainAccount | None:
        return self._find_one(Account.contact == contact)

    def find_by_handle(self, handle: str) -> DomainAccount | None:
        return self._find_one(Account.handle == handle)

    def find_by_id(self, account_id: int) -> DomainAccount | None:
        return self._find_one(Account.id == account_id)

    def grant_admin(self, handle: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(Account).where(Account.handle == handle)).first()
            if row is None:
                return False
            row.is_admin = True
            return True
