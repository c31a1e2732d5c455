# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///keystone.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")


class AuthConfig(BaseSettings):
    # scrypt: cost is 2**work_factor; pbkdf2: work_factor is the iteration count
    hash_scheme: Literal["scrypt", "pbkdf2"] = Field("scrypt", alias="PASSWORD_HASH_SCHEME")
    work_factor: int = Field(15, ge=1, alias="PASSWORD_WORK_FACTOR")
    salt_length: int = Field(16, ge=8, alias="PASSWORD_SALT_LENGTH")
    # None disables expiry
    token_max_age: int | None = Field(None, ge=1, alias="TOKEN_MAX_AGE")
    token_salt: str = Field("keystone.session", alias="TOKEN_SALT")
    contact_case_insensitive: bool = Field(False, alias="CONTACT_CASE_INSENSITIVE")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")

    @field_validator("contact_case_insensitive", mode="before")
    @classmethod
    def _parse_flag(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @field_validator("token_max_age", mode="before")
    @classmethod
    def _parse_max_age(cls, value: str | int | None) -> int | None:
        if isinstance(value, str) and value.strip().lower() in ("", "0", "none", "off"):
            return None
        return value  # type: ignore[return-value]

    @model_validator(mode="after")
    def _check_work_factor(self) -> "AuthConfig":
        if self.hash_scheme == "scrypt" and not 10 <= self.work_factor <= 20:
            raise ValueError("scrypt work factor must be between 10 and 20")
        if self.hash_scheme == "pbkdf2" and self.work_factor < 1000:
            raise ValueError("pbkdf2 work factor must be at least 1000 iterations")
        return self

    def hash_method(self) -> str:
        if self.hash_scheme == "pbkdf2":
            return f"pbkdf2:sha256:{self.work_factor}"
        return f"scrypt:{2 ** self.work_factor}:8:1"


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class PaymentConfig(BaseSettings):
    api_url: str = Field("https://api.stripe.com", alias="PAYMENT_API_URL")
    api_key: str = Field("", alias="PAYMENT_API_KEY")
    currency: str = Field("usd", alias="PAYMENT_CURRENCY")
    timeout: float = Field(15.0, ge=0.1, alias="PAYMENT_TIMEOUT")
    max_retries: int = Field(2, ge=0, alias="PAYMENT_RETRIES")
    backoff_base: float = Field(0.5, ge=0.0, alias="PAYMENT_BACKOFF_BASE")
    backoff_cap: float = Field(4.0, ge=0.1, alias="PAYMENT_BACKOFF_CAP")
    circuit_fail_threshold: int = Field(5, ge=1, alias="PAYMENT_CIRCUIT_THRESHOLD")
    circuit_reset_timeout: float = Field(60.0, ge=1.0, alias="PAYMENT_CIRCUIT_RESET")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    admin_handle: str | None = Field(None, alias="ADMIN_HANDLE")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    payment: PaymentConfig = Field(default_factory=PaymentConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", "") or len(self.secret_key) < 32:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY signs every session token and must be a strong random value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if self.auth.token_max_age is None:
            warnings.append("⚠️  Session tokens never expire (TOKEN_MAX_AGE unset)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "PaymentConfig",
    "SecurityConfig",
    "load_config",
]
