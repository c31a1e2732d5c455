# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from keystone.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    REGISTER_REJECTED = "register_rejected"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    PRODUCT_CREATED = "product_created"
    PRODUCT_DELETED = "product_deleted"
    CHECKOUT_COMPLETED = "checkout_completed"
    CHECKOUT_FAILED = "checkout_failed"


_SENSITIVE_KEYS = {"password", "secret", "token", "contact", "key", "source"}


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    sanitized = {}
    for key, value in details.items():
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value
    return sanitized


def audit_log(
    action: AuditAction,
    account_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    safe_details = _sanitize_details(details) if details else {}

    message = (
        f"AUDIT: {action.value} | account_id={account_id} | ip={ip_address} | success={success}"
    )
    if safe_details:
        message += f" | details={safe_details}"

    if success:
        logger.info(message)
    else:
        logger.warning(message)

    _store_audit_log(
        timestamp=datetime.now(UTC),
        action=action.value,
        account_id=account_id,
        ip_address=ip_address,
        success=success,
        details=safe_details,
    )


def _store_audit_log(
    *,
    timestamp: datetime,
    action: str,
    account_id: int | None,
    ip_address: str | None,
    success: bool,
    details: dict[str, Any],
) -> None:
    from keystone.infrastructure.db.models import AuditLog
    from keystone.infrastructure.db.session import session_scope

    try:
        with session_scope() as session:
            session.add(
                AuditLog(
                    timestamp=timestamp,
                    action=action,
                    account_id=account_id,
                    ip_address=ip_address,
                    success=success,
                    details_json=json.dumps(details, default=str)[:2048] if details else None,
                )
            )
    except SQLAlchemyError as exc:
        # The audited request has already succeeded or failed on its own terms.
        logger.warning(f"audit: failed to store entry action={action}: {type(exc).__name__}")


__all__ = ["AuditAction", "audit_log"]
