# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, jsonify
from flask_cors import CORS

from keystone.container import Container
from keystone.infrastructure.admin_setup import setup_admin_account
from keystone.infrastructure.db import init_db
from keystone.interfaces.http.auth import install_token_verifier
from keystone.shared.logging import logger, setup_logging
from keystone.shared.middleware import configure_error_handling, configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or Container()
    config = container.config

    setup_logging(debug_mode=config.debug_logging)
    init_db()
    setup_admin_account(container.account_repository, config.admin_handle)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key, JSON_SORT_KEYS=False)

    configure_error_handling(app)
    configure_request_logging(app)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    install_token_verifier(app, container.verify_token_use_case)
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.projects_controller.as_blueprint())
    app.register_blueprint(container.store_controller.as_blueprint())

    @app.get("/api/health")
    def _health():
        return jsonify({"status": "ok"})

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cross-Origin-Opener-Policy", "same-origin")
        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
