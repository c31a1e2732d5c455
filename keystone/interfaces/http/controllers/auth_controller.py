# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from keystone.application.use_cases.accounts.login_account import LoginAccountUseCase
from keystone.application.use_cases.accounts.register_account import RegisterAccountUseCase
from keystone.application.use_cases.accounts.verify_token import VerifyTokenUseCase
from keystone.domain.accounts.entities import AccountProfile
from keystone.infrastructure.audit import AuditAction, audit_log
from keystone.interfaces.http.auth import AUTH_COOKIE, auth_required, current_claims
from keystone.interfaces.http.dto.auth import (
    AccountDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    RegisterRequestDTO,
)
from keystone.shared.config import load_config
from keystone.shared.errors.base import AppError
from keystone.shared.errors.validation import raise_validation_error
from keystone.shared.logging import logger

from ._common import client_ip

REMEMBER_ME_MAX_AGE = 60 * 60 * 24 * 7


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterAccountUseCase,
        login_use_case: LoginAccountUseCase,
        verify_use_case: VerifyTokenUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._verify_use_case = verify_use_case

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            profile = self._register_use_case.execute(dto.handle, dto.contact, dto.secret)
        except AppError as exc:
            audit_log(
                AuditAction.REGISTER_REJECTED,
                ip_address=client_ip(),
                details={"handle": dto.handle, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            account_id=profile.id,
            ip_address=client_ip(),
            details={"handle": profile.handle},
        )
        logger.info(f"auth.register: ok account_id={profile.id}")
        return jsonify({"account": AccountDTO.from_profile(profile).model_dump(mode="json")}), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()

        try:
            result = self._login_use_case.execute(dto.contact, dto.secret)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            account_id=result.account.id,
            ip_address=ip_address,
            details={"remember_me": dto.remember_me},
        )

        payload = LoginResponseDTO(
            token=result.token, account=AccountDTO.from_profile(result.account)
        )
        response = jsonify(payload.model_dump(mode="json"))

        config = load_config()
        max_age = config.auth.token_max_age
        if max_age is None and dto.remember_me:
            max_age = REMEMBER_ME_MAX_AGE
        response.set_cookie(
            AUTH_COOKIE,
            result.token,
            httponly=True,
            samesite=config.security.cookie_samesite,
            secure=config.security.cookie_secure,
            max_age=max_age,
        )
        logger.info(
            f"auth.login: ok account_id={result.account.id} remember_me={dto.remember_me}"
        )
        return response, 200

    def logout(self) -> tuple[Response, int]:
        # Tokens are stateless; logging out only drops the client's copy.
        audit_log(AuditAction.LOGOUT, ip_address=client_ip())
        response = jsonify({"ok": True})
        response.delete_cookie(AUTH_COOKIE)
        return response, 200

    @auth_required
    def me(self) -> tuple[Response, int]:
        account = self._verify_use_case.current_account(current_claims())
        profile = AccountProfile.from_account(account)
        return jsonify({"account": AccountDTO.from_profile(profile).model_dump(mode="json")}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["DELETE", "POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
