# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from keystone.shared.config import load_config
from keystone.shared.logging import get_correlation_id, logger

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask) -> None:
    """Render every error leaving a view as ``{"error": <code>, ...}`` JSON."""
    debug_mode = load_config().debug_logging

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        # Client errors are routine; only server-side ones warn.
        log = logger.info if exc.is_client_error else logger.warning
        log(
            f"{request.method} {request.path} -> {exc.code} ({int(exc.status)}) "
            f"account={getattr(g, 'account_id', None)}"
        )
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        if not request.path.startswith("/api/"):
            return exc
        code = (exc.name or "http_error").lower().replace(" ", "_")
        return jsonify({"error": code}), exc.code or HTTPStatus.INTERNAL_SERVER_ERROR

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        message = (
            f"Unhandled {type(exc).__name__} on {request.method} {request.path} "
            f"account={getattr(g, 'account_id', None)}"
        )
        if debug_mode:
            logger.exception(message)
        else:
            logger.error(message)
        body = {"error": "internal_error", "request_id": get_correlation_id()}
        return jsonify(body), HTTPStatus.INTERNAL_SERVER_ERROR
