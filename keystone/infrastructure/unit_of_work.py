# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction scopes for the SQLAlchemy repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from keystone.shared.logging import logger

SessionFactory = Callable[[], Session]


@contextmanager
def unit_of_work_scope(factory: SessionFactory, *, read_only: bool = False) -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error.

    With ``read_only=True`` the transaction is always rolled back, so lookups
    never flush stray changes.
    """
    session = factory()
    try:
        yield session
        if read_only:
            session.rollback()
        else:
            session.commit()
    except Exception as exc:
        logger.debug(f"uow: rollback after {type(exc).__name__}")
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["SessionFactory", "unit_of_work_scope"]
