# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from keystone.domain.accounts.entities import AccountProfile, LoginResult
from keystone.domain.accounts.exceptions import InvalidCredentialsError
from keystone.domain.accounts.repositories import (
    AccountRepository,
    PasswordHasher,
    TokenSigner,
)
from keystone.shared.logging import logger


class LoginAccountUseCase:
    def __init__(
        self,
        *,
        accounts: AccountRepository,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        contact_case_insensitive: bool = False,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._token_signer = token_signer
        self._contact_case_insensitive = contact_case_insensitive

    def execute(self, contact: str, secret: str) -> LoginResult:
        if not isinstance(contact, str) or not isinstance(secret, str) or not secret:
            raise InvalidCredentialsError()

        contact = contact.strip()
        if self._contact_case_insensitive:
            contact = contact.lower()

        account = self._accounts.find_by_contact(contact) if contact else None
        if account is None:
            # Unknown contact costs one hash check too.
            self._password_hasher.verify_dummy(secret)
            logger.info("accounts.login: rejected (unknown contact)")
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(secret, account.secret_hash):
            logger.info(f"accounts.login: rejected (bad secret) account_id={account.id}")
            raise InvalidCredentialsError()

        token = self._token_signer.sign(account.id)
        logger.info(f"accounts.login: ok account_id={account.id}")
        return LoginResult(token=token, account=AccountProfile.from_account(account))
