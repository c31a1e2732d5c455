# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Account, AccountProfile, LoginResult, TokenClaims
from .exceptions import (
    AdminRequiredError,
    AuthenticationRequiredError,
    DuplicateAccountError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
)

__all__ = [
    "Account",
    "AccountProfile",
    "AdminRequiredError",
    "AuthenticationRequiredError",
    "DuplicateAccountError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "LoginResult",
    "TokenClaims",
]
