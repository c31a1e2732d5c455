# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import re
import secrets
import time

from flask import Flask, Response, g, request

from keystone.shared.config import load_config
from keystone.shared.logging import clear_request_context, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_RE = re.compile(r"^[\w\-.]{1,64}$")
_CREDENTIAL_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_QUIET_PATHS = frozenset({"/api/health"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _incoming_request_id() -> str:
    # Client-supplied ids are echoed back, so only accept short plain tokens.
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _REQUEST_ID_RE.match(supplied):
        return supplied
    return secrets.token_urlsafe(8)


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _header_summary() -> dict[str, str]:
    return {
        key: _fingerprint(value) if key.lower() in _CREDENTIAL_HEADERS else value
        for key, value in request.headers.items()
    }


def configure_request_logging(app: Flask) -> None:
    debug_mode = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        g.correlation_id = _incoming_request_id()
        g.request_start_time = time.perf_counter()
        set_correlation_id(g.correlation_id)

        if request.path in _QUIET_PATHS:
            return
        if debug_mode:
            logger.info(
                f"--> {request.method} {request.path} from {_client_ip()} "
                f"args={sorted(request.args)} headers={_header_summary()} "
                f"body_size={request.content_length or 0}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} from {_client_ip()}")

    @app.after_request
    def _finish(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, getattr(g, "correlation_id", "-"))
        if request.path in _QUIET_PATHS:
            return response

        elapsed_ms = (time.perf_counter() - g.get("request_start_time", time.perf_counter())) * 1000
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms account={g.get('account_id')}"
        )
        return response

    @app.teardown_request
    def _teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted: {type(exc).__name__} on {request.method} {request.path}")
        clear_request_context()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
