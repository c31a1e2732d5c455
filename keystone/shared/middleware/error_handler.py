# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from pydantic import ValidationError as PydanticValidationError

from keystone.shared.errors import register_error_handler
from keystone.shared.errors.base import ValidationError
from keystone.shared.errors.http import handle_app_error
from keystone.shared.errors.validation import request_error_context


def configure_error_handling(app: Flask) -> None:
    register_error_handler(app)

    # DTO parsing that escaped parse_body() still answers 422, not 500.
    @app.errorhandler(PydanticValidationError)
    def _handle_request_validation(exc: PydanticValidationError):
        return handle_app_error(ValidationError(context=request_error_context(exc)))
