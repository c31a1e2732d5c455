# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Field rules shared by registration and login."""

from __future__ import annotations

import re

from keystone.domain.exceptions import InvalidInputError

HANDLE_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]{2,63}$")
CONTACT_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
CONTACT_MAX_LENGTH = 254
SECRET_MIN_LENGTH = 6
SECRET_MAX_LENGTH = 128


def _require(value: object, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("must be a non-empty string", field=field)
    return value


def validate_handle(handle: object) -> str:
    handle = _require(handle, "handle").strip()
    if not HANDLE_RE.match(handle):
        raise InvalidInputError(
            "must be 3-64 letters, digits, '_', '.' or '-' and start with a letter or digit",
            field="handle",
        )
    return handle


def validate_contact(contact: object, *, case_insensitive: bool = False) -> str:
    contact = _require(contact, "contact").strip()
    if len(contact) > CONTACT_MAX_LENGTH or not CONTACT_RE.match(contact):
        raise InvalidInputError("must be an e-mail address", field="contact")
    return contact.lower() if case_insensitive else contact


def validate_secret(secret: object) -> str:
    # Never stripped: whitespace is part of the secret.
    secret = _require(secret, "secret")
    if not SECRET_MIN_LENGTH <= len(secret) <= SECRET_MAX_LENGTH:
        raise InvalidInputError(
            f"must be {SECRET_MIN_LENGTH}-{SECRET_MAX_LENGTH} characters",
            field="secret",
        )
    return secret
