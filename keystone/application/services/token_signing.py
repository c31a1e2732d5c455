# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless session tokens signed with the process-wide secret key."""

from __future__ import annotations

from datetime import UTC

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from keystone.domain.accounts.entities import TokenClaims
from keystone.domain.accounts.exceptions import ExpiredTokenError, InvalidTokenError
from keystone.domain.accounts.repositories import TokenSigner

DEFAULT_SALT = "keystone.session"


class ItsDangerousTokenSigner(TokenSigner):
    """Token = base64(payload) . timestamp . HMAC signature.

    The payload is ``{"sub": <account id>}``; the timestamp is the issuance
    time and is covered by the signature, as is the payload.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        salt: str = DEFAULT_SALT,
        max_age: int | None = None,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=salt)
        self._max_age = max_age

    @property
    def max_age(self) -> int | None:
        return self._max_age

    def sign(self, account_id: int) -> str:
        return str(self._serializer.dumps({"sub": int(account_id)}))

    def unsign(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError()
        try:
            payload, issued_at = self._serializer.loads(
                token, max_age=self._max_age, return_timestamp=True
            )
        except SignatureExpired as exc:
            raise ExpiredTokenError() from exc
        except BadData as exc:
            raise InvalidTokenError() from exc

        account_id = payload.get("sub") if isinstance(payload, dict) else None
        if not isinstance(account_id, int) or isinstance(account_id, bool) or account_id <= 0:
            raise InvalidTokenError()

        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=UTC)
        return TokenClaims(account_id=account_id, issued_at=issued_at)

