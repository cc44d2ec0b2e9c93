# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_INSECURE_SECRETS = frozenset({"", "dev", "development", "test", "changeme"})


class _EnvSettings(BaseSettings):
    """Each section reads its own variables from the process env and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @staticmethod
    def _flag(value: str | bool) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)


class DatabaseConfig(_EnvSettings):
    url: str = Field("sqlite:///cloudtraffic.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    # Also used as the SQLite busy timeout.
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")


class TokenConfig(_EnvSettings):
    secret: str = Field("dev", alias="JWT_SECRET")
    algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    expires_in: int = Field(3600, ge=1, alias="JWT_EXPIRES_IN")


class ResilienceConfig(_EnvSettings):
    simulation_timeout: float = Field(15.0, gt=0, alias="SIMULATION_TIMEOUT")
    max_retries: int = Field(0, ge=0, alias="RESILIENCE_RETRIES")
    backoff_base: float = Field(0.5, gt=0, alias="RESILIENCE_BACKOFF_BASE")
    backoff_cap: float = Field(8.0, gt=0, alias="RESILIENCE_BACKOFF_CAP")
    circuit_fail_threshold: int = Field(5, ge=1, alias="RESILIENCE_CIRCUIT_THRESHOLD")
    circuit_reset_timeout: float = Field(60.0, gt=0, alias="RESILIENCE_CIRCUIT_RESET")


class SecurityConfig(_EnvSettings):
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")
    # Reverse-proxy hops whose X-Forwarded-For is trusted; 0 uses the socket peer
    trusted_proxies: int = Field(0, ge=0, alias="TRUSTED_PROXIES")

    # Sliding-window limits keyed on client IP
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_requests: int = Field(100, ge=1, alias="RL_LIMIT")
    rate_limit_window: float = Field(900.0, gt=0, alias="RL_WINDOW")
    auth_rate_limit_requests: int = Field(10, ge=1, alias="RL_AUTH_LIMIT")
    auth_rate_limit_window: float = Field(60.0, gt=0, alias="RL_AUTH_WINDOW")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return cls._flag(value)


class AppConfig(_EnvSettings):
    app_env: str = Field("development", alias="APP_ENV")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(5000, ge=1, le=65535, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    token: TokenConfig = Field(default_factory=TokenConfig)
    resilience: ResilienceConfig = Field(default_factory=ResilienceConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug(cls, value: str | bool) -> bool:
        return cls._flag(value)

    @model_validator(mode="after")
    def _check_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.token.secret.strip().lower() in _INSECURE_SECRETS:
            print(
                "\n❌ Refusing to start: JWT_SECRET is unset or a development value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = [
            message
            for failed, message in (
                ("*" in self.security.allowed_origins, "CORS allows any origin (*)"),
                (not self.security.enable_hsts, "HSTS is disabled"),
                (not self.security.enable_rate_limit, "rate limiting is disabled"),
            )
            if failed
        ]
        for message in warnings:
            print(f"⚠️  production: {message}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ResilienceConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
]
