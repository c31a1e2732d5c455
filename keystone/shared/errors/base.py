# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    """Error carrying a stable machine-readable ``code`` and its HTTP status.

    ``context`` holds extra, non-sensitive detail for the client, such as the
    offending field name. It is rendered under ``"context"`` by :meth:`to_dict`.
    """

    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def is_client_error(self) -> bool:
        return self.status < HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    """Base for account, project and store errors.

    Subclasses declare ``code`` and ``status`` as class attributes and only
    pass ``context`` when raising.
    """

    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(code=cls.code, status=cls.status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "invalid_input",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )
