# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    handle: str
    contact: str
    secret_hash: str
    created_at: datetime
    is_admin: bool = False

    def __repr__(self) -> str:
        return f"Account(id={self.id}, handle={self.handle!r})"


@dataclass(slots=True, frozen=True)
class AccountProfile:
    """Public view of an account; never carries the stored secret."""

    id: int
    handle: str
    is_admin: bool = False

    @classmethod
    def from_account(cls, account: Account) -> AccountProfile:
        return cls(id=account.id, handle=account.handle, is_admin=account.is_admin)


@dataclass(slots=True, frozen=True)
class TokenClaims:

    account_id: int
    issued_at: datetime


@dataclass(slots=True, frozen=True)
class LoginResult:

    token: str
    account: AccountProfile
