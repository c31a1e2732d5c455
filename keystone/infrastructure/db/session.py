# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker

from keystone.infrastructure.unit_of_work import unit_of_work_scope
from keystone.shared.config import load_config
from keystone.shared.config.settings import DatabaseConfig
from keystone.shared.logging import logger


class Base(DeclarativeBase):
    pass


def build_engine(config: DatabaseConfig) -> Engine:
    """Engine for ``DATABASE_URL``; SQLite gets thread sharing and enforced foreign keys."""
    if not config.url.startswith("sqlite"):
        return create_engine(
            config.url,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
        )

    engine = create_engine(
        config.url,
        connect_args={"check_same_thread": False, "timeout": int(config.pool_timeout)},
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


ENGINE: Engine = build_engine(load_config().database)

SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, expire_on_commit=False)
)


@contextmanager
def session_scope() -> Iterator[Session]:
    """Thread-local session for work outside a repository (audit rows)."""
    try:
        with unit_of_work_scope(SessionLocal) as session:
            yield session
    finally:
        SessionLocal.remove()


def init_db() -> None:
    from keystone.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=ENGINE)
    logger.info(f"db: schema ensured on {ENGINE.url.render_as_string(hide_password=True)}")
