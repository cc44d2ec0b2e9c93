# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from cloudtraffic.application.use_cases.users.login_user import LoginUserUseCase
from cloudtraffic.application.use_cases.users.register_user import RegisterUserUseCase
from cloudtraffic.infrastructure.audit import AuditAction, audit_log
from cloudtraffic.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    RegisterSuccessDTO,
    TokenDTO,
)
from cloudtraffic.interfaces.http.request_context import get_client_ip
from cloudtraffic.shared.errors.base import AppError
from cloudtraffic.shared.errors.validation import raise_validation_error
from cloudtraffic.shared.logging import logger
from cloudtraffic.shared.middleware.rate_limit import InMemoryRateLimiter, rate_limit


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        limiter: InMemoryRateLimiter | None = None,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._limiter = limiter

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.email, dto.password)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=get_client_ip(),
            details={"username": dto.username},
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(RegisterSuccessDTO().model_dump()), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = get_client_ip()

        try:
            token = self._login_use_case.execute(dto.email, dto.password, ip_address)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                user_id=None,
                ip_address=ip_address,
                details={"error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=token.user_id,
            ip_address=ip_address,
            success=True,
        )
        payload = TokenDTO(
            token=token.token, user_id=token.user_id, expires_at=token.expires_at
        ).model_dump(by_alias=True, mode="json")
        logger.info(f"auth.login: ok user_id={token.user_id}")
        return jsonify(payload), 200

    def as_blueprint(self, name: str = "auth") -> Blueprint:
        limited = rate_limit(self._limiter)
        bp = Blueprint(name, __name__)
        bp.add_url_rule("/register", view_func=limited(self.register), methods=["POST"])
        bp.add_url_rule("/login", view_func=limited(self.login), methods=["POST"])
        return bp
