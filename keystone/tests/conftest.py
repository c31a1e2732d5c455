from __future__ import annotations

import os
import tempfile
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime

_TMP_DIR = tempfile.mkdtemp(prefix="keystone-tests-")
os.environ["APP_ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'keystone.db')}"
os.environ["LOG_FILE"] = os.path.join(_TMP_DIR, "keystone.log")
os.environ["PASSWORD_HASH_SCHEME"] = "pbkdf2"
os.environ["PASSWORD_WORK_FACTOR"] = "1000"
os.environ.pop("TOKEN_MAX_AGE", None)
os.environ.pop("ADMIN_HANDLE", None)

import pytest  # noqa: E402

from keystone.application.services.password_hashing import WerkzeugPasswordHasher  # noqa: E402
from keystone.application.services.token_signing import ItsDangerousTokenSigner  # noqa: E402
from keystone.domain.accounts.entities import Account  # noqa: E402
from keystone.domain.accounts.exceptions import DuplicateAccountError  # noqa: E402
from keystone.domain.accounts.repositories import AccountRepository  # noqa: E402
from keystone.domain.projects.entities import Project, Task  # noqa: E402
from keystone.domain.projects.repositories import ProjectRepository, TaskRepository  # noqa: E402
from keystone.domain.store.entities import Charge, Order, OrderLine, Product  # noqa: E402
from keystone.domain.store.repositories import (  # noqa: E402
    OrderRepository,
    PaymentGateway,
    ProductRepository,
)

FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class InMemoryAccountRepository(AccountRepository):
    def __init__(self) -> None:
        self.accounts: dict[int, Account] = {}
        self._seq = 1

    def create(self, handle: str, contact: str, secret_hash: str) -> Account:
        for existing in self.accounts.values():
            if existing.handle == handle:
                raise DuplicateAccountError("handle")
            if existing.contact == contact:
                raise DuplicateAccountError("contact")
        account = Account(
            id=self._seq,
            handle=handle,
            contact=contact,
            secret_hash=secret_hash,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self.accounts[account.id] = account
        return account

    def find_by_contact(self, contact: str) -> Account | None:
        return next((a for a in self.accounts.values() if a.contact == contact), None)

    def find_by_handle(self, handle: str) -> Account | None:
        return next((a for a in self.accounts.values() if a.handle == handle), None)

    def find_by_id(self, account_id: int) -> Account | None:
        return self.accounts.get(account_id)

    def grant_admin(self, handle: str) -> bool:
        account = self.find_by_handle(handle)
        if account is None:
            return False
        self.accounts[account.id] = replace(account, is_admin=True)
        return True


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self) -> None:
        self.projects: dict[int, Project] = {}
        self._seq = 1

    def add(self, owner_id: int, name: str, description: str) -> Project:
        project = Project(
            id=self._seq,
            owner_id=owner_id,
            name=name,
            description=description,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self.projects[project.id] = project
        return project

    def get(self, project_id: int) -> Project | None:
        return self.projects.get(project_id)

    def list_for_owner(self, owner_id: int) -> Sequence[Project]:
        return [p for p in self.projects.values() if p.owner_id == owner_id]

    def update(self, project_id: int, *, name: str, description: str) -> Project:
        project = replace(self.projects[project_id], name=name, description=description)
        self.projects[project_id] = project
        return project

    def delete(self, project_id: int) -> None:
        self.projects.pop(project_id, None)


class InMemoryTaskRepository(TaskRepository):
    def __init__(self) -> None:
        self.tasks: dict[int, Task] = {}
        self._seq = 1

    def add(self, project_id: int, title: str) -> Task:
        task = Task(
            id=self._seq,
            project_id=project_id,
            title=title,
            done=False,
            created_at=datetime.now(UTC),
        )
        self._seq += 1
        self.tasks[task.id] = task
        return task

    def get(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def list_for_project(self, project_id: int) -> Sequence[Task]:
        return [t for t in self.tasks.values() if t.project_id == project_id]

    def update(self, task_id: int, *, title: str, done: bool) -> Task:
        task = replace(self.tasks[task_id], title=title, done=done)
        self.tasks[task_id] = task
        return task

    def delete(self, task_id: int) -> None:
        self.tasks.pop(task_id, None)


class InMemoryProductRepository(ProductRepository):
    def __init__(self) -> None:
        self.products: dict[int, Product] = {}
        self._seq = 1

    def add(
        self, name: str, description: str, price_cents: int, image_url: str | None
    ) -> Product:
        product = Product(
            id=self._seq,
            name=name,
            description=description,
            price_cents=price_cents,
            image_url=image_url,
        )
        self._seq += 1
        self.products[product.id] = product
        return product

    def get(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    def get_many(self, product_ids: Sequence[int]) -> dict[int, Product]:
        return {pid: self.products[pid] for pid in product_ids if pid in self.products}

    def list_all(self) -> Sequence[Product]:
        return list(self.products.values())

    def delete(self, product_id: int) -> bool:
        return self.products.pop(product_id, None) is not None


class InMemoryOrderRepository(OrderRepository):
    def __init__(self) -> None:
        self.orders: list[Order] = []

    def add(
        self,
        account_id: int,
        *,
        amount_cents: int,
        currency: str,
        charge_id: str,
        status: str,
        lines: Sequence[OrderLine],
    ) -> Order:
        order = Order(
            id=len(self.orders) + 1,
            account_id=account_id,
            amount_cents=amount_cents,
            currency=currency,
            charge_id=charge_id,
            status=status,
            created_at=datetime.now(UTC),
            lines=tuple(lines),
        )
        self.orders.append(order)
        return order

    def list_for_account(self, account_id: int) -> Sequence[Order]:
        return [o for o in self.orders if o.account_id == account_id]


class FakePaymentGateway(PaymentGateway):
    def __init__(self, *, paid: bool = True) -> None:
        self.paid = paid
        self.calls: list[dict] = []

    def create_charge(
        self,
        *,
        amount_cents: int,
        currency: str,
        source_token: str,
        description: str,
        idempotency_key: str,
    ) -> Charge:
        self.calls.append(
            {
                "amount_cents": amount_cents,
                "currency": currency,
                "source_token": source_token,
                "idempotency_key": idempotency_key,
            }
        )
        return Charge(
            id=f"ch_{len(self.calls)}",
            amount_cents=amount_cents,
            currency=currency,
            status="succeeded" if self.paid else "failed",
            paid=self.paid,
        )


@pytest.fixture()
def accounts() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture()
def signer() -> ItsDangerousTokenSigner:
    return ItsDangerousTokenSigner("unit-test-secret")


@pytest.fixture()
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()
