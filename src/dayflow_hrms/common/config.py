"""DayFlow HRMS configuration via pydantic-settings."""

import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_DEFAULTS = {
    "jwt_access_secret": "insecure-access-secret-change-me",
    "jwt_refresh_secret": "insecure-refresh-secret-change-me",
}


class DayflowSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DAYFLOW_")

    environment: str = "development"
    log_level: str = "INFO"

    # Token signing. Access and refresh tokens must use different secrets.
    jwt_access_secret: str = "insecure-access-secret-change-me"
    jwt_refresh_secret: str = "insecure-refresh-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 15
    refresh_token_days: int = 7

    # Credentials
    password_hash_time_cost: int = 3  # argon2 iterations
    password_hash_memory_cost: int = 65536  # KiB
    temp_password_length: int = 10

    # Identifiers
    tenant_code_length: int = 2
    # When set, every login id uses this prefix instead of the tenant's code.
    login_id_prefix: str = ""

    # Database
    db_url: str = "sqlite+aiosqlite:///./data/dayflow.db"
    store_timeout: float = 10.0  # seconds

    # API
    api_title: str = "DayFlow HRMS"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:5173"]

    @property
    def access_token_seconds(self) -> int:
        return self.access_token_minutes * 60

    @property
    def refresh_token_seconds(self) -> int:
        return self.refresh_token_days * 86400

    def validate_for_production(self) -> None:
        """Raise on fatal misconfiguration, warn on insecure defaults in development."""
        if not self.jwt_access_secret or not self.jwt_refresh_secret:
            raise RuntimeError(
                "DAYFLOW_JWT_ACCESS_SECRET and DAYFLOW_JWT_REFRESH_SECRET must both be set"
            )
        if self.jwt_access_secret == self.jwt_refresh_secret:
            raise RuntimeError(
                "DAYFLOW_JWT_ACCESS_SECRET and DAYFLOW_JWT_REFRESH_SECRET must differ"
            )
        if self.login_id_prefix and len(self.login_id_prefix) != self.tenant_code_length:
            raise RuntimeError(
                f"DAYFLOW_LOGIN_ID_PREFIX must be exactly {self.tenant_code_length} characters, "
                f"got {self.login_id_prefix!r}"
            )

        insecure_fields = [
            field
            for field, default in _INSECURE_DEFAULTS.items()
            if getattr(self, field) == default
        ]

        if self.environment != "development" and insecure_fields:
            env_vars = ", ".join(f"DAYFLOW_{f.upper()}" for f in insecure_fields)
            raise RuntimeError(
                f"Insecure default values detected in '{self.environment}' environment. "
                f"Set these environment variables to secure values: {env_vars}. "
                "Generate secrets with: dayflow generate-secrets"
            )

        if insecure_fields:
            warnings.warn(
                "Using insecure default signing secrets — set DAYFLOW_JWT_ACCESS_SECRET "
                "and DAYFLOW_JWT_REFRESH_SECRET for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> DayflowSettings:
    settings = DayflowSettings()
    settings.validate_for_production()
    return settings
