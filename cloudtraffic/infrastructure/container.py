# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from cloudtraffic.application.interfaces import SimulatorRegistry
from cloudtraffic.application.services.password_hashing import WerkzeugPasswordHasher
from cloudtraffic.application.services.tokens import JwtTokenIssuer
from cloudtraffic.application.use_cases.credits.earn_credit import EarnCreditUseCase
from cloudtraffic.application.use_cases.credits.get_balance import GetBalanceUseCase
from cloudtraffic.application.use_cases.credits.spend_credit import SpendCreditUseCase
from cloudtraffic.application.use_cases.traffic.generate_traffic import GenerateTrafficUseCase
from cloudtraffic.application.use_cases.users.login_user import LoginUserUseCase
from cloudtraffic.application.use_cases.users.register_user import RegisterUserUseCase
from cloudtraffic.infrastructure.auth.login_attempts import LoginAttemptsTracker
from cloudtraffic.infrastructure.db import create_db_engine, create_session_factory, init_db
from cloudtraffic.infrastructure.repositories.traffic.sqlalchemy_traffic_log_repository import (
    SqlAlchemyTrafficLogRepository,
)
from cloudtraffic.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from cloudtraffic.infrastructure.resilience import RetryPolicy
from cloudtraffic.infrastructure.simulators import default_simulators
from cloudtraffic.interfaces.http.controllers.auth_controller import AuthController
from cloudtraffic.interfaces.http.controllers.credits_controller import CreditsController
from cloudtraffic.interfaces.http.controllers.misc_controller import MiscController
from cloudtraffic.interfaces.http.controllers.traffic_controller import TrafficController
from cloudtraffic.shared.config import AppConfig
from cloudtraffic.shared.middleware.rate_limit import InMemoryRateLimiter


class Container:
    """Builds every service once per app from an explicit config."""

    def __init__(
        self,
        config: AppConfig,
        *,
        simulators: SimulatorRegistry | None = None,
    ) -> None:
        self.config = config
        self._simulators = simulators

    # Storage

    @cached_property
    def engine(self) -> Engine:
        engine = create_db_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def traffic_log_repository(self) -> SqlAlchemyTrafficLogRepository:
        return SqlAlchemyTrafficLogRepository(self.session_factory)

    # Security

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_issuer(self) -> JwtTokenIssuer:
        return JwtTokenIssuer(
            secret=self.config.token.secret,
            algorithm=self.config.token.algorithm,
            expires_in=self.config.token.expires_in,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        return LoginAttemptsTracker()

    @cached_property
    def global_rate_limiter(self) -> InMemoryRateLimiter | None:
        security = self.config.security
        if not security.enable_rate_limit:
            return None
        return InMemoryRateLimiter(security.rate_limit_requests, security.rate_limit_window)

    @cached_property
    def auth_rate_limiter(self) -> InMemoryRateLimiter | None:
        security = self.config.security
        if not security.enable_rate_limit:
            return None
        return InMemoryRateLimiter(
            security.auth_rate_limit_requests, security.auth_rate_limit_window
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_issuer,
            password_hasher=self.password_hasher,
            attempts=self.login_attempts,
        )

    @cached_property
    def earn_credit_use_case(self) -> EarnCreditUseCase:
        return EarnCreditUseCase(users=self.user_repository)

    @cached_property
    def spend_credit_use_case(self) -> SpendCreditUseCase:
        return SpendCreditUseCase(users=self.user_repository)

    @cached_property
    def get_balance_use_case(self) -> GetBalanceUseCase:
        return GetBalanceUseCase(users=self.user_repository)

    @cached_property
    def generate_traffic_use_case(self) -> GenerateTrafficUseCase:
        resilience = self.config.resilience
        return GenerateTrafficUseCase(
            simulators=self._simulators or default_simulators(),
            logs=self.traffic_log_repository,
            timeout=resilience.simulation_timeout,
            retry_policy=RetryPolicy(
                max_retries=resilience.max_retries,
                backoff_base=resilience.backoff_base,
                backoff_cap=resilience.backoff_cap,
            ),
            failure_threshold=resilience.circuit_fail_threshold,
            reset_timeout=resilience.circuit_reset_timeout,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            limiter=self.auth_rate_limiter,
        )

    @cached_property
    def credits_controller(self) -> CreditsController:
        return CreditsController(
            earn_use_case=self.earn_credit_use_case,
            spend_use_case=self.spend_credit_use_case,
            balance_use_case=self.get_balance_use_case,
            tokens=self.token_issuer,
        )

    @cached_property
    def traffic_controller(self) -> TrafficController:
        return TrafficController(generate_use_case=self.generate_traffic_use_case)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
