from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from keystone.application.use_cases.accounts.login_account import LoginAccountUseCase
from keystone.application.use_cases.accounts.register_account import RegisterAccountUseCase
from keystone.application.use_cases.accounts.verify_token import VerifyTokenUseCase
from keystone.domain.accounts import (
    Account,
    AccountProfile,
    DuplicateAccountError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    LoginResult,
    TokenClaims,
)
from keystone.interfaces.http.auth import install_token_verifier
from keystone.interfaces.http.controllers.auth_controller import AuthController
from keystone.shared.middleware.error_handler import configure_error_handling


class StubVerifier:
    def execute(self, token: str, *, require_live: bool = False) -> TokenClaims:
        if token == "expired":
            raise ExpiredTokenError()
        if token != "good-token":
            raise InvalidTokenError()
        return TokenClaims(account_id=1, issued_at=datetime.now(UTC))

    def current_account(self, claims: TokenClaims) -> Account:
        return Account(
            id=claims.account_id,
            handle="alice",
            contact="alice@example.com",
            secret_hash="pbkdf2:sha256:1000$salt$hash",
            created_at=datetime.now(UTC),
        )


def _build_app(
    *,
    register: object | None = None,
    login: object | None = None,
) -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    verifier = cast(VerifyTokenUseCase, StubVerifier())
    install_token_verifier(app, verifier)
    controller = AuthController(
        register_use_case=cast(RegisterAccountUseCase, register or MagicMock()),
        login_use_case=cast(LoginAccountUseCase, login or MagicMock()),
        verify_use_case=verifier,
    )
    app.register_blueprint(controller.as_blueprint())
    return app


def test_register_endpoint_returns_public_profile() -> None:
    register_called: dict[str, tuple[str, str, str]] = {}

    class StubRegister:
        def execute(self, handle: str, contact: str, secret: str) -> AccountProfile:
            register_called["args"] = (handle, contact, secret)
            return AccountProfile(id=1, handle=handle)

    app = _build_app(register=StubRegister())

    with app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"handle": "alice", "contact": "alice@example.com", "secret": "S3cret!"},
        )

    assert response.status_code == 201
    assert register_called["args"] == ("alice", "alice@example.com", "S3cret!")
    assert response.get_json() == {"account": {"id": 1, "handle": "alice", "is_admin": False}}
    assert "Set-Cookie" not in response.headers


def test_register_accepts_username_email_password_aliases() -> None:
    register = MagicMock()
    register.execute.return_value = AccountProfile(id=3, handle="bob")
    app = _build_app(register=register)

    with app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"username": "bob", "email": "bob@example.com", "password": "S3cret!"},
        )

    assert response.status_code == 201
    register.execute.assert_called_once_with("bob", "bob@example.com", "S3cret!")


def test_register_duplicate_returns_409() -> None:
    class StubRegister:
        def execute(self, handle: str, contact: str, secret: str) -> AccountProfile:
            raise DuplicateAccountError("contact")

    app = _build_app(register=StubRegister())

    with app.test_client() as client:
        response = client.post(
            "/api/auth/register",
            json={"handle": "alice", "contact": "alice@example.com", "secret": "S3cret!"},
        )

    assert response.status_code == 409
    assert response.get_json() == {"error": "duplicate_account", "context": {"field": "contact"}}


def test_login_invalid_payload_returns_422() -> None:
    app = _build_app()

    with app.test_client() as client:
        response = client.post("/api/auth/login", json={"contact": "alice@example.com"})

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "invalid_input"


def test_login_sets_http_only_cookie_and_returns_token() -> None:
    class StubLogin:
        def execute(self, contact: str, secret: str) -> LoginResult:
            return LoginResult(token="good-token", account=AccountProfile(id=1, handle="alice"))

    app = _build_app(login=StubLogin())

    with app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"contact": "alice@example.com", "secret": "S3cret!"}
        )

    assert response.status_code == 200
    assert response.get_json()["token"] == "good-token"
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("auth_token=good-token")
    assert "HttpOnly" in cookie


def test_login_failure_is_uniform_401() -> None:
    class StubLogin:
        def execute(self, contact: str, secret: str) -> LoginResult:
            raise InvalidCredentialsError()

    app = _build_app(login=StubLogin())

    with app.test_client() as client:
        response = client.post(
            "/api/auth/login", json={"contact": "alice@example.com", "secret": "wrong"}
        )

    assert response.status_code == 401
    assert response.get_json() == {"error": "invalid_credentials"}


@pytest.mark.parametrize(
    ("headers", "status", "error"),
    [
        ({}, 401, "unauthorized"),
        ({"Authorization": "Bearer forged"}, 401, "invalid_token"),
        ({"Authorization": "Bearer expired"}, 401, "expired_token"),
        ({"Authorization": "Bearer good-token"}, 200, None),
    ],
)
def test_me_requires_valid_bearer_token(
    headers: dict[str, str], status: int, error: str | None
) -> None:
    app = _build_app()

    with app.test_client() as client:
        response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == status
    payload = response.get_json()
    if error is None:
        assert payload == {"account": {"id": 1, "handle": "alice", "is_admin": False}}
    else:
        assert payload["error"] == error


def test_me_accepts_cookie_token() -> None:
    app = _build_app()

    with app.test_client() as client:
        client.set_cookie("auth_token", "good-token")
        response = client.get("/api/auth/me")

    assert response.status_code == 200


def test_logout_clears_cookie() -> None:
    app = _build_app()

    with app.test_client() as client:
        response = client.delete("/api/auth/logout")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    assert response.headers["Set-Cookie"].startswith("auth_token=;")
