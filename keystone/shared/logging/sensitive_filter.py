# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrub credentials out of log messages before they reach any sink."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # key=value style secrets: password=..., secret: ..., api_key="..."
    (
        re.compile(
            r"((?:password|passwd|secret|secret[_-]?key|api[_-]?key)\s*[:=]\s*['\"]?)[^'\"\s,}]{6,}",
            re.IGNORECASE,
        ),
        rf"\1{REDACTED}",
    ),
    # Authorization headers and bearer credentials
    (re.compile(r"(bearer\s+)[\w\-.]{16,}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)(?!bearer\s)[^'\"\s]{10,}", re.IGNORECASE), rf"\1{REDACTED}"),
    # auth_token cookie or token=... fields
    (re.compile(r"((?:auth_)?token\s*[:=]\s*['\"]?)[\w\-.]{16,}", re.IGNORECASE), rf"\1{REDACTED}"),
    # Signed session tokens: base64 payload . timestamp . signature
    (re.compile(r"\beyJ[\w\-]+\.[\w\-]{4,}\.[\w\-]{16,}"), REDACTED),
    # werkzeug password hashes: method$salt$hexdigest
    (re.compile(r"\b(scrypt|pbkdf2):[^\s'\"$]+\$[^\s'\"$]+\$[0-9a-f]+"), rf"\1:{REDACTED}"),
    # Payment gateway keys
    (re.compile(r"\b(sk|rk)_(live|test)_[A-Za-z0-9]{8,}"), rf"\1_\2_{REDACTED}"),
    # Credentials embedded in database URLs
    (
        re.compile(r"\b(postgres(?:ql)?|mysql|mariadb)(\+\w+)?://([^:/@\s]+):[^@\s]+@"),
        rf"\1\2://\3:{REDACTED}@",
    ),
    # Contact addresses keep only their domain
    (re.compile(r"\b[A-Za-z0-9._%+\-]+@([A-Za-z0-9.\-]+\.[A-Za-z]{2,})\b"), r"***@\1"),
    # Card numbers
    (re.compile(r"\b\d{4}[- ]?\d{4}[- ]?\d{4}[- ]?\d{4}\b"), "****-****-****-****"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> None:
    """loguru patcher: rewrites ``record["message"]`` in place."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
