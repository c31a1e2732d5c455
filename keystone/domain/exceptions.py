# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from keystone.shared.errors.base import DomainError, ValidationError


class InvalidInputError(ValidationError):
    """A required field is missing or malformed."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        context: dict[str, str] = {"reason": message}
        if field:
            context["field"] = field
        super().__init__(context=context)
        self.field = field
        self.message = message

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, **context: int | str) -> None:
        super().__init__(context=context or None)
