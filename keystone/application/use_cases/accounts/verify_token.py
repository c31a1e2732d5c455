# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from keystone.domain.accounts.entities import Account, TokenClaims
from keystone.domain.accounts.exceptions import InvalidTokenError
from keystone.domain.accounts.repositories import AccountRepository, TokenSigner
from keystone.shared.logging import logger


class VerifyTokenUseCase:
    """Classify a presented bearer token.

    Verification is pure: only the signature, payload shape and age are
    checked. Pass ``require_live=True`` (or call :meth:`current_account`) when
    the caller needs the stored account as well.
    """

    def __init__(self, *, accounts: AccountRepository, token_signer: TokenSigner) -> None:
        self._accounts = accounts
        self._token_signer = token_signer

    def execute(self, token: str, *, require_live: bool = False) -> TokenClaims:
        claims = self._token_signer.unsign(token)
        if require_live:
            self.current_account(claims)
        return claims

    def current_account(self, claims: TokenClaims) -> Account:
        account = self._accounts.find_by_id(claims.account_id)
        if account is None:
            logger.warning(f"accounts.verify: token for missing account_id={claims.account_id}")
            raise InvalidTokenError()
        return account
