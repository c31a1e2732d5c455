# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Project-management records owned by an account."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from keystone.domain.exceptions import InvalidInputError

NAME_MAX_LENGTH = 128
TITLE_MAX_LENGTH = 256


def clean_name(value: object, *, field: str, max_length: int) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("must be a non-empty string", field=field)
    value = value.strip()
    if len(value) > max_length:
        raise InvalidInputError(f"must be at most {max_length} characters", field=field)
    return value


@dataclass(slots=True, frozen=True)
class Project:

    id: int
    owner_id: int
    name: str
    description: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Task:

    id: int
    project_id: int
    title: str
    done: bool
    created_at: datetime
