from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.academy.core.security.validators import validate_timezone

_PLACEHOLDER_SECRET = "change-this-to-a-secure-random-string"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Academy Onboarding"
    app_env: Literal["development", "testing", "production"] = "development"
    debug: bool = False  # Console log rendering instead of JSON
    enable_openapi: bool = True

    # Privacy
    log_user_emails: bool = False  # Keep off in production (GDPR)

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_ssl_mode: Literal["disable", "prefer", "require", "verify-ca", "verify-full"] = (
        "prefer"
    )

    # Identity provider - access tokens are issued elsewhere, we only verify them
    identity_jwt_secret: str
    identity_jwt_algorithm: str = "HS256"
    identity_jwt_audience: str | None = "authenticated"
    approver_role: str = "platform_admin"

    # Onboarding
    default_timezone: str = "Asia/Seoul"
    approval_page_size: int = Field(default=50, ge=1, le=100)

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # When set, /metrics requires X-Metrics-Key

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def uses_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @field_validator("database_url")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Accept plain postgres URLs as most hosting providers hand them out."""
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v.removeprefix(prefix)
        return v

    @field_validator("identity_jwt_secret")
    @classmethod
    def validate_identity_jwt_secret(cls, v: str) -> str:
        if v == _PLACEHOLDER_SECRET:
            raise ValueError(
                "IDENTITY_JWT_SECRET is still the placeholder. "
                "Set it to the JWT signing secret of the identity provider."
            )
        if len(v) < 32:
            raise ValueError("IDENTITY_JWT_SECRET must be at least 32 characters")
        return v

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, v: str) -> str:
        return validate_timezone(v)

    @field_validator("cors_origins")
    @classmethod
    def reject_wildcard_origin(cls, v: list[str]) -> list[str]:
        # allow_credentials=True is incompatible with a wildcard origin
        if "*" in v:
            raise ValueError("CORS_ORIGINS cannot contain '*'; list the allowed origins")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
