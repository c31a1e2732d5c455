# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Request-body validation failures rendered like domain ``invalid_input`` errors."""

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("items", 0, "quantity") -> "items[0].quantity"
    name = ""
    for part in loc:
        if isinstance(part, int):
            name += f"[{part}]"
        elif part is not None:
            name = f"{name}.{part}" if name else str(part)
    return name or "body"


def request_error_context(exc: PydanticValidationError) -> dict[str, Any]:
    """Context with the same ``field``/``reason`` keys ``InvalidInputError`` uses.

    The first failing field is reported at the top level; every failing field
    is listed under ``fields``.
    """
    problems = [(_field_name(tuple(err.get("loc", ()))), err.get("msg", "invalid")) for err in exc.errors()]
    if not problems:
        return {"reason": "invalid request body"}

    field, reason = problems[0]
    return {
        "field": field,
        "reason": reason,
        "fields": sorted({name for name, _ in problems}),
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=request_error_context(exc)) from exc


__all__ = ["raise_validation_error", "request_error_context"]
