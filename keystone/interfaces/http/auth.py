# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token guard for Flask views."""

from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, request

from keystone.application.use_cases.accounts.verify_token import VerifyTokenUseCase
from keystone.domain.accounts.entities import TokenClaims
from keystone.domain.accounts.exceptions import AuthenticationRequiredError
from keystone.shared.errors.base import AppError
from keystone.shared.logging import bind_account, logger

AUTH_COOKIE = "auth_token"
_EXTENSION_KEY = "keystone.verify_token"


def install_token_verifier(app: Flask, verifier: VerifyTokenUseCase) -> None:
    app.extensions[_EXTENSION_KEY] = verifier


def token_verifier() -> VerifyTokenUseCase:
    return current_app.extensions[_EXTENSION_KEY]


def presented_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth[:7].lower() == "bearer ":
        token = auth[7:].strip()
        if token:
            return token
    return request.cookies.get(AUTH_COOKIE, "")


def current_account_id() -> int:
    return int(g.account_id)


def current_claims() -> TokenClaims:
    return g.token_claims


def _guard(f, *, require_live: bool):
    @wraps(f)
    def inner(*a, **kw):
        token = presented_token()
        if not token:
            logger.warning(
                f"No Authorization header/cookie on {request.method} {request.path} "
                f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
            )
            raise AuthenticationRequiredError()

        try:
            claims = token_verifier().execute(token, require_live=require_live)
        except AppError as exc:
            logger.warning(f"Auth failed ({exc.code}) on {request.method} {request.path}")
            raise

        g.token_claims = claims
        g.account_id = claims.account_id
        bind_account(claims.account_id)
        logger.debug(f"Auth OK: account={claims.account_id} {request.method} {request.path}")
        return f(*a, **kw)

    return inner


def auth_required(f):
    return _guard(f, require_live=False)


def live_account_required(f):
    """Like :func:`auth_required`, but the token must name a stored account.

    Use it on views that write rows owned by the caller.
    """
    return _guard(f, require_live=True)
