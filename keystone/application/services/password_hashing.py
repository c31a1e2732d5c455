"""Password hashing strategies."""

from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from keystone.domain.accounts.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted hashes via werkzeug.

    ``method`` carries the work factor, e.g. ``scrypt:32768:8:1`` or
    ``pbkdf2:sha256:600000``. Verification reads the parameters back from
    the stored hash, so raising the work factor only affects new hashes.
    """

    def __init__(self, method: str = "scrypt:32768:8:1", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length
        # Unknown contacts verify against this; built eagerly so every such login costs one check.
        self._dummy_hash = self.hash(secrets.token_urlsafe(32))

    @property
    def method(self) -> str:
        return self._method

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method, salt_length=self._salt_length))

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return bool(check_password_hash(hashed, password))

    def verify_dummy(self, password: str) -> bool:
        """Spend the same work as a real check; always fails."""
        self.verify(password, self._dummy_hash)
        return False
