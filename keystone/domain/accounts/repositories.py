# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Account, TokenClaims


class AccountRepository(Protocol):
    def create(self, handle: str, contact: str, secret_hash: str) -> Account: ...
    def find_by_contact(self, contact: str) -> Account | None: ...
    def find_by_handle(self, handle: str) -> Account | None: ...
    def find_by_id(self, account_id: int) -> Account | None: ...
    def grant_admin(self, handle: str) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
    def verify_dummy(self, password: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, account_id: int) -> str: ...
    def unsign(self, token: str) -> TokenClaims: ...
