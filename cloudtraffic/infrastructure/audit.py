# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail for account and ledger events, written to the application log."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from cloudtraffic.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    CREDITS_EARNED = "credits_earned"
    CREDITS_SPENT = "credits_spent"
    CREDITS_SPEND_REJECTED = "credits_spend_rejected"
    TRAFFIC_GENERATED = "traffic_generated"
    TRAFFIC_FAILED = "traffic_failed"


_MASKED_KEY_PARTS = ("password", "token", "secret", "hash")


def _mask(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "***" if any(part in key.lower() for part in _MASKED_KEY_PARTS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    user_id: str | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> None:
    fields = [f"AUDIT: {action.value}", f"user_id={user_id}", f"ip={ip_address}", f"success={success}"]
    if details:
        fields.append(f"details={_mask(details)}")
    logger.log("INFO" if success else "WARNING", " | ".join(fields))


__all__ = ["AuditAction", "audit_log"]
