# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from keystone.application.services.password_hashing import WerkzeugPasswordHasher
from keystone.application.services.token_signing import ItsDangerousTokenSigner
from keystone.application.use_cases.accounts.login_account import LoginAccountUseCase
from keystone.application.use_cases.accounts.register_account import RegisterAccountUseCase
from keystone.application.use_cases.accounts.verify_token import VerifyTokenUseCase
from keystone.application.use_cases.projects.workspace import ProjectWorkspace
from keystone.application.use_cases.store.catalog import Catalog
from keystone.application.use_cases.store.checkout import CheckoutUseCase
from keystone.domain.store.repositories import PaymentGateway
from keystone.infrastructure.db import SessionLocal
from keystone.infrastructure.payments import HttpPaymentGateway
from keystone.infrastructure.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTaskRepository,
)
from keystone.interfaces.http.controllers import (
    AuthController,
    ProjectsController,
    StoreController,
)
from keystone.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        payment_gateway: PaymentGateway | None = None,
    ) -> None:
        self.config = config or load_config()
        self._payment_gateway = payment_gateway

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(
            method=self.config.auth.hash_method(),
            salt_length=self.config.auth.salt_length,
        )

    @cached_property
    def token_signer(self) -> ItsDangerousTokenSigner:
        return ItsDangerousTokenSigner(
            self.config.secret_key,
            salt=self.config.auth.token_salt,
            max_age=self.config.auth.token_max_age,
        )

    @cached_property
    def account_repository(self) -> SqlAlchemyAccountRepository:
        return SqlAlchemyAccountRepository(SessionLocal)

    @cached_property
    def project_repository(self) -> SqlAlchemyProjectRepository:
        return SqlAlchemyProjectRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(SessionLocal)

    @cached_property
    def product_repository(self) -> SqlAlchemyProductRepository:
        return SqlAlchemyProductRepository(SessionLocal)

    @cached_property
    def order_repository(self) -> SqlAlchemyOrderRepository:
        return SqlAlchemyOrderRepository(SessionLocal)

    @cached_property
    def payment_gateway(self) -> PaymentGateway:
        return self._payment_gateway or HttpPaymentGateway(self.config.payment)

    @cached_property
    def register_account_use_case(self) -> RegisterAccountUseCase:
        return RegisterAccountUseCase(
            accounts=self.account_repository,
            password_hasher=self.password_hasher,
            contact_case_insensitive=self.config.auth.contact_case_insensitive,
        )

    @cached_property
    def login_account_use_case(self) -> LoginAccountUseCase:
        return LoginAccountUseCase(
            accounts=self.account_repository,
            password_hasher=self.password_hasher,
            token_signer=self.token_signer,
            contact_case_insensitive=self.config.auth.contact_case_insensitive,
        )

    @cached_property
    def verify_token_use_case(self) -> VerifyTokenUseCase:
        return VerifyTokenUseCase(accounts=self.account_repository, token_signer=self.token_signer)

    @cached_property
    def project_workspace(self) -> ProjectWorkspace:
        return ProjectWorkspace(projects=self.project_repository, tasks=self.task_repository)

    @cached_property
    def catalog(self) -> Catalog:
        return Catalog(products=self.product_repository, accounts=self.account_repository)

    @cached_property
    def checkout_use_case(self) -> CheckoutUseCase:
        return CheckoutUseCase(
            products=self.product_repository,
            orders=self.order_repository,
            payments=self.payment_gateway,
            default_currency=self.config.payment.currency,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_account_use_case,
            login_use_case=self.login_account_use_case,
            verify_use_case=self.verify_token_use_case,
        )

    @cached_property
    def projects_controller(self) -> ProjectsController:
        return ProjectsController(workspace=self.project_workspace)

    @cached_property
    def store_controller(self) -> StoreController:
        return StoreController(catalog=self.catalog, checkout_use_case=self.checkout_use_case)
