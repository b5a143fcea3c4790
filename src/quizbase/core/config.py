"""Application settings.

Every setting can be given as a ``QUIZBASE_<NAME>`` environment variable or
in a ``.env`` file in the working directory. Settings are read once, at
first use of ``get_settings()``, and validated as a whole.
"""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production-use-openssl-rand-hex-32"

Environment = Literal["development", "production", "testing"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """QuizBase configuration."""

    model_config = SettingsConfigDict(
        env_prefix="QUIZBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "QuizBase"
    app_version: str = "0.1.0"
    environment: Environment = "development"
    debug: bool = Field(
        default=False,
        description="Expose the text of unexpected errors in 500 responses",
    )
    api_prefix: str = "/api/v1"

    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = Field(default=1, ge=1)

    database_url: str = "sqlite+aiosqlite:///./qb_data/quizbase.db"
    db_echo: bool = False
    # Pool options; ignored for SQLite
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600

    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="HMAC key signing session and password reset tokens",
    )
    token_expire_minutes: int = Field(
        default=60,
        gt=0,
        description="Lifetime of every signed token (session and password reset)",
    )

    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"])

    log_level: LogLevel = "INFO"
    log_format: Literal["json", "console"] = "json"

    smtp_host: str | None = Field(
        default=None,
        description="SMTP server host. Emails are logged to the console when unset.",
    )
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = Field(default=True, description="Upgrade with STARTTLS")
    smtp_use_ssl: bool = Field(default=False, description="Connect over implicit TLS")
    smtp_timeout: int = 10
    smtp_validate_certs: bool = Field(
        default=True, description="Verify the SMTP server certificate when using TLS"
    )
    mail_from_email: str = "no-reply@quizbase.local"
    mail_from_name: str = "QuizBase"
    mail_preview_base_url: str = Field(
        default="https://ethereal.email",
        description="Web UI of the test mailbox used to build preview links",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Accept ``"https://a.example, https://b.example"``, a JSON array or a list."""
        if isinstance(v, str) and v.lstrip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode="after")
    def check_deployment(self) -> "Settings":
        if self.is_production and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("QUIZBASE_SECRET_KEY must be set in production.")
        if self.is_production and not self.smtp_host:
            raise ValueError("QUIZBASE_SMTP_HOST must be set in production.")
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers; use 1 or a PostgreSQL database_url."
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first call."""
    return Settings()
