# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from cloudtraffic.application.use_cases.credits.earn_credit import EarnCreditUseCase
from cloudtraffic.application.use_cases.credits.get_balance import GetBalanceUseCase
from cloudtraffic.application.use_cases.credits.spend_credit import SpendCreditUseCase
from cloudtraffic.domain.users.exceptions import InsufficientBalanceError, UserMismatchError
from cloudtraffic.domain.users.repositories import TokenIssuer
from cloudtraffic.infrastructure.audit import AuditAction, audit_log
from cloudtraffic.interfaces.http.dto.credits import CreditRequestDTO, CreditsDTO
from cloudtraffic.interfaces.http.request_context import get_bearer_token, get_client_ip
from cloudtraffic.shared.errors.base import ValidationError as AppValidationError
from cloudtraffic.shared.errors.validation import raise_validation_error
from cloudtraffic.shared.errors.validation_types import ValidationErrorType


class CreditsController:
    def __init__(
        self,
        *,
        earn_use_case: EarnCreditUseCase,
        spend_use_case: SpendCreditUseCase,
        balance_use_case: GetBalanceUseCase,
        tokens: TokenIssuer,
    ) -> None:
        self._earn_use_case = earn_use_case
        self._spend_use_case = spend_use_case
        self._balance_use_case = balance_use_case
        self._tokens = tokens

    def _resolve_user_id(self, claimed: str | None) -> str:
        """Pick the acting user from the bearer token and/or the request's ``userId``.

        A presented token must verify, and must match ``userId`` when both are given.
        """

        token = get_bearer_token()
        if token:
            subject = self._tokens.verify(token)
            if claimed and claimed != subject:
                raise UserMismatchError()
            g.user_id = subject
            return subject

        if not claimed:
            raise AppValidationError(
                ValidationErrorType.MISSING_FIELDS,
                message="userId is required",
                context={"rule": ValidationErrorType.MISSING_FIELDS, "fields": ["userId"]},
            )
        g.user_id = claimed
        return claimed

    def _body_user_id(self) -> str | None:
        try:
            dto = CreditRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)
        return dto.user_id

    def _apply(
        self, operation: Callable[[str], int], action: AuditAction
    ) -> tuple[Response, int]:
        user_id = self._resolve_user_id(self._body_user_id())
        balance = operation(user_id)
        audit_log(action, user_id=user_id, ip_address=get_client_ip(), details={"credits": balance})
        return jsonify(CreditsDTO(credits=balance).model_dump()), 200

    def earn(self) -> tuple[Response, int]:
        return self._apply(self._earn_use_case.execute, AuditAction.CREDITS_EARNED)

    def spend(self) -> tuple[Response, int]:
        try:
            return self._apply(self._spend_use_case.execute, AuditAction.CREDITS_SPENT)
        except InsufficientBalanceError:
            audit_log(
                AuditAction.CREDITS_SPEND_REJECTED,
                user_id=getattr(g, "user_id", None),
                ip_address=get_client_ip(),
                success=False,
            )
            raise

    def balance(self) -> tuple[Response, int]:
        user_id = self._resolve_user_id(request.args.get("userId") or None)
        credits = self._balance_use_case.execute(user_id)
        return jsonify(CreditsDTO(credits=credits).model_dump()), 200

    def as_blueprint(self, name: str = "credits") -> Blueprint:
        bp = Blueprint(name, __name__)
        bp.add_url_rule("/earn", view_func=self.earn, methods=["POST"])
        bp.add_url_rule("/spend", view_func=self.spend, methods=["POST"])
        bp.add_url_rule("/balance", view_func=self.balance, methods=["GET"])
        return bp
