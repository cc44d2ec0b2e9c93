# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from cloudtraffic.application.use_cases.traffic.generate_traffic import GenerateTrafficUseCase
from cloudtraffic.infrastructure.audit import AuditAction, audit_log
from cloudtraffic.interfaces.http.dto.traffic import TrafficResultDTO
from cloudtraffic.interfaces.http.request_context import get_client_ip
from cloudtraffic.shared.errors.base import AppError
from cloudtraffic.utils.asyncio_utils import run_async


class TrafficController:
    def __init__(self, *, generate_use_case: GenerateTrafficUseCase) -> None:
        self._generate_use_case = generate_use_case

    def generate(self) -> tuple[Response, int]:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        platform = payload.get("platform")
        blog_url = payload.get("blogUrl")

        try:
            result = run_async(self._generate_use_case.execute(platform, blog_url))
        except AppError as exc:
            audit_log(
                AuditAction.TRAFFIC_FAILED,
                ip_address=get_client_ip(),
                details={"platform": platform, "error": exc.code},
                success=False,
            )
            body = TrafficResultDTO(success=False, message=exc.message or exc.code).model_dump()
            if exc.status < HTTPStatus.INTERNAL_SERVER_ERROR:
                body["error"] = exc.code
            return jsonify(body), int(exc.status)

        audit_log(
            AuditAction.TRAFFIC_GENERATED,
            ip_address=get_client_ip(),
            details={"platform": result.platform.value, "log_id": result.log_entry.id},
        )
        return jsonify(TrafficResultDTO(success=True, message=result.message).model_dump()), 200

    def as_blueprint(self, name: str = "traffic") -> Blueprint:
        bp = Blueprint(name, __name__)
        bp.add_url_rule("/generate-traffic", view_func=self.generate, methods=["POST"])
        return bp
