# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from keystone.shared.errors.base import DomainError


class DuplicateAccountError(DomainError):
    code = "duplicate_account"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str | None = None) -> None:
        super().__init__(context={"field": field} if field else None)
        self.field = field


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED


class ExpiredTokenError(DomainError):
    code = "expired_token"
    status = HTTPStatus.UNAUTHORIZED


class AdminRequiredError(DomainError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN


class AuthenticationRequiredError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
