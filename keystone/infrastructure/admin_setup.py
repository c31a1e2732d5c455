# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from keystone.domain.accounts.repositories import AccountRepository
from keystone.shared.logging import logger


def setup_admin_account(accounts: AccountRepository, handle: str | None) -> bool:
    """Grant admin rights to ``handle`` if it names an existing account."""
    if not handle:
        logger.info("admin_setup: no ADMIN_HANDLE configured, skipping")
        return False

    if accounts.grant_admin(handle):
        logger.info(f"admin_setup: granted admin privileges to '{handle}'")
        return True

    logger.warning(
        f"admin_setup: ADMIN_HANDLE '{handle}' does not match any account yet; "
        "register it and restart"
    )
    return False
