from __future__ import annotations

import pytest
from flask import Flask

from keystone.app import create_app
from keystone.container import Container
from keystone.infrastructure.db import ENGINE, Base, SessionLocal
from keystone.domain.accounts import DuplicateAccountError
from keystone.infrastructure.db.models import Account, AuditLog, Order, Project
from keystone.infrastructure.repositories.accounts import SqlAlchemyAccountRepository
from keystone.shared.config import AppConfig

from conftest import FakePaymentGateway

ALICE = {"handle": "alice", "contact": "alice@example.com", "secret": "S3cret!"}


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)


def _app(gateway: FakePaymentGateway | None = None, **config: object) -> Flask:
    container = Container(
        AppConfig(**config) if config else None,
        payment_gateway=gateway or FakePaymentGateway(),
    )
    return create_app(container)


def _login(client, contact: str, secret: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"contact": contact, "secret": secret})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


def _register(client, handle: str, contact: str, secret: str = "S3cret!") -> int:
    response = client.post(
        "/api/auth/register", json={"handle": handle, "contact": contact, "secret": secret}
    )
    assert response.status_code == 201
    return response.get_json()["account"]["id"]


def test_register_login_verify_flow() -> None:
    app = _app()

    with app.test_client() as client:
        register = client.post("/api/auth/register", json=ALICE)
        assert register.status_code == 201
        alice_id = register.get_json()["account"]["id"]

        duplicate = client.post(
            "/api/auth/register",
            json={"handle": "alice2", "contact": "alice@example.com", "secret": "S3cret!"},
        )
        assert duplicate.status_code == 409
        assert duplicate.get_json()["error"] == "duplicate_account"

        wrong = client.post(
            "/api/auth/login", json={"contact": "alice@example.com", "secret": "wrong"}
        )
        unknown = client.post(
            "/api/auth/login", json={"contact": "nobody@example.com", "secret": "S3cret!"}
        )
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.get_json() == unknown.get_json() == {"error": "invalid_credentials"}

        headers = _login(client, "alice@example.com", "S3cret!")
        me = client.get("/api/auth/me", headers=headers)
        assert me.status_code == 200
        assert me.get_json()["account"] == {"id": alice_id, "handle": "alice", "is_admin": False}
        assert client.get_cookie("auth_token")

        logout = client.delete("/api/auth/logout")
        assert logout.status_code == 200
        assert client.get_cookie("auth_token") is None
        assert client.get("/api/auth/me").status_code == 401

    session = SessionLocal()
    try:
        assert session.query(Account).count() == 1
        stored = session.query(Account).one()
        assert stored.secret_hash != "S3cret!"
        assert session.query(AuditLog).filter(AuditLog.action == "login_failed").count() == 2
    finally:
        session.close()


def test_token_for_other_account_is_rejected() -> None:
    app = _app()

    with app.test_client() as client:
        _register(client, "alice", "alice@example.com")
        _register(client, "bob", "bob@example.com")
        alice_token = _login(client, "alice@example.com", "S3cret!")["Authorization"][7:]
        bob_token = _login(client, "bob@example.com", "S3cret!")["Authorization"][7:]
        client.delete_cookie("auth_token")

        forged = bob_token.split(".", 1)[0] + "." + alice_token.split(".", 1)[1]
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"


def test_projects_are_private_to_their_owner() -> None:
    app = _app()

    with app.test_client() as client:
        _register(client, "alice", "alice@example.com")
        _register(client, "bob", "bob@example.com")
        alice = _login(client, "alice@example.com", "S3cret!")
        bob = _login(client, "bob@example.com", "S3cret!")
        client.delete_cookie("auth_token")

        created = client.post("/api/projects", json={"name": "Launch"}, headers=alice)
        assert created.status_code == 201
        project_id = created.get_json()["id"]

        task = client.post(
            f"/api/projects/{project_id}/tasks", json={"title": "Write docs"}, headers=alice
        )
        assert task.status_code == 201
        task_id = task.get_json()["id"]

        done = client.patch(f"/api/tasks/{task_id}", json={"done": True}, headers=alice)
        assert done.get_json()["done"] is True

        assert client.get(f"/api/projects/{project_id}", headers=bob).status_code == 404
        assert client.get("/api/projects", headers=bob).get_json() == {"items": []}
        assert client.get("/api/projects", headers={}).status_code == 401

        empty = client.post("/api/projects", json={"name": ""}, headers=alice)
        assert empty.status_code == 422

        deleted = client.delete(f"/api/projects/{project_id}", headers=alice)
        assert deleted.status_code == 200
        assert client.get(f"/api/projects/{project_id}", headers=alice).status_code == 404


def test_store_admin_catalog_and_checkout() -> None:
    gateway = FakePaymentGateway()
    first = _app(gateway)
    with first.test_client() as client:
        _register(client, "admin", "admin@example.com")
        shopper_id = _register(client, "shopper", "shopper@example.com")

    app = _app(gateway, ADMIN_HANDLE="admin")

    with app.test_client() as client:
        admin = _login(client, "admin@example.com", "S3cret!")
        shopper = _login(client, "shopper@example.com", "S3cret!")
        client.delete_cookie("auth_token")

        forbidden = client.post(
            "/api/products", json={"name": "Mug", "price_cents": 1200}, headers=shopper
        )
        assert forbidden.status_code == 403

        created = client.post(
            "/api/products", json={"name": "Mug", "price_cents": 1200}, headers=admin
        )
        assert created.status_code == 201
        product_id = created.get_json()["id"]

        listing = client.get("/api/products")
        assert [p["id"] for p in listing.get_json()["items"]] == [product_id]

        checkout = client.post(
            "/api/checkout",
            json={"items": [{"product_id": product_id, "quantity": 2}], "payment_token": "tok_visa"},
            headers=shopper,
        )
        assert checkout.status_code == 201
        order = checkout.get_json()
        assert order["amount_cents"] == 2400
        assert order["lines"] == [
            {"product_id": product_id, "quantity": 2, "unit_price_cents": 1200}
        ]
        assert gateway.calls[0]["amount_cents"] == 2400

        orders = client.get("/api/orders", headers=shopper).get_json()["items"]
        assert [o["id"] for o in orders] == [order["id"]]

        missing = client.post(
            "/api/checkout",
            json={"items": [{"product_id": 999}], "payment_token": "tok_visa"},
            headers=shopper,
        )
        assert missing.status_code == 404

    session = SessionLocal()
    try:
        assert session.query(Order).filter(Order.account_id == shopper_id).count() == 1
    finally:
        session.close()


def test_declined_checkout_returns_402() -> None:
    app = _app(FakePaymentGateway(paid=False), ADMIN_HANDLE="admin")

    with app.test_client() as client:
        _register(client, "admin", "admin@example.com")
    app = _app(FakePaymentGateway(paid=False), ADMIN_HANDLE="admin")

    with app.test_client() as client:
        admin = _login(client, "admin@example.com", "S3cret!")
        product = client.post(
            "/api/products", json={"name": "Mug", "price": 1200}, headers=admin
        ).get_json()

        declined = client.post(
            "/api/checkout",
            json={"items": [{"product_id": product["id"]}], "token": "tok_declined"},
            headers=admin,
        )

    assert declined.status_code == 402
    assert declined.get_json()["error"] == "payment_declined"
    session = SessionLocal()
    try:
        assert session.query(Order).count() == 0
    finally:
        session.close()


def test_health_and_security_headers() -> None:
    app = _app()

    with app.test_client() as client:
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"] == "req-123"


def test_token_for_missing_account_cannot_write() -> None:
    gateway = FakePaymentGateway()
    container = Container(AppConfig(ADMIN_HANDLE="admin"), payment_gateway=gateway)
    app = create_app(container)

    with app.test_client() as client:
        _register(client, "admin", "admin@example.com")
    app = create_app(Container(AppConfig(ADMIN_HANDLE="admin"), payment_gateway=gateway))

    with app.test_client() as client:
        admin = _login(client, "admin@example.com", "S3cret!")
        client.delete_cookie("auth_token")
        product = client.post(
            "/api/products", json={"name": "Mug", "price_cents": 1200}, headers=admin
        ).get_json()

        stale = {"Authorization": f"Bearer {container.token_signer.sign(999)}"}
        project = client.post("/api/projects", json={"name": "Launch"}, headers=stale)
        checkout = client.post(
            "/api/checkout",
            json={"items": [{"product_id": product["id"]}], "payment_token": "tok_visa"},
            headers=stale,
        )

    assert project.status_code == 401
    assert project.get_json()["error"] == "invalid_token"
    assert checkout.status_code == 401
    assert checkout.get_json()["error"] == "invalid_token"
    assert gateway.calls == []

    session = SessionLocal()
    try:
        assert session.query(Project).count() == 0
        assert session.query(Order).count() == 0
    finally:
        session.close()


@pytest.mark.parametrize(
    ("handle", "contact", "field"),
    [
        ("alice2", "alice@example.com", "contact"),
        ("alice", "alice2@example.com", "handle"),
    ],
)
def test_store_unique_constraints_reject_second_account(
    handle: str, contact: str, field: str
) -> None:
    accounts = SqlAlchemyAccountRepository(SessionLocal)
    accounts.create("alice", "alice@example.com", "pbkdf2:sha256:1000$salt$hash")

    with pytest.raises(DuplicateAccountError) as excinfo:
        accounts.create(handle, contact, "pbkdf2:sha256:1000$salt$other")

    assert excinfo.value.field == field
    session = SessionLocal()
    try:
        assert session.query(Account).count() == 1
    finally:
        session.close()
