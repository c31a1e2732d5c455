# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from keystone.domain.accounts.entities import AccountProfile
from keystone.domain.accounts.exceptions import DuplicateAccountError
from keystone.domain.accounts.repositories import AccountRepository, PasswordHasher
from keystone.domain.accounts.validation import (
    validate_contact,
    validate_handle,
    validate_secret,
)
from keystone.shared.logging import logger


class RegisterAccountUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        password_hasher: PasswordHasher,
        contact_case_insensitive: bool = False,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._contact_case_insensitive = contact_case_insensitive

    def execute(self, handle: str, contact: str, secret: str) -> AccountProfile:
        handle = validate_handle(handle)
        contact = validate_contact(contact, case_insensitive=self._contact_case_insensitive)
        secret = validate_secret(secret)

        if self._accounts.find_by_handle(handle) is not None:
            raise DuplicateAccountError("handle")
        if self._accounts.find_by_contact(contact) is not None:
            raise DuplicateAccountError("contact")

        hashed = self._password_hasher.hash(secret)
        # The store's unique constraints decide races between the checks above and here.
        account = self._accounts.create(handle, contact, hashed)
        logger.info(f"accounts.register: created account_id={account.id}")
        return AccountProfile.from_account(account)
