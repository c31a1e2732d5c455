# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .accounts import SqlAlchemyAccountRepository
from .projects import SqlAlchemyProjectRepository, SqlAlchemyTaskRepository
from .store import SqlAlchemyOrderRepository, SqlAlchemyProductRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTaskRepository",
]
