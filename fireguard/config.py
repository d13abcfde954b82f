"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./fireguard.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to decide which calendar day 'today' is",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    smtp_host: str | None = Field(default=None, description="SMTP server hostname")
    smtp_port: int | None = Field(default=None, description="SMTP server port", gt=0)
    smtp_user: str | None = Field(default=None, description="SMTP login user")
    smtp_pass: str | None = Field(default=None, description="SMTP login password")
    smtp_from: str | None = Field(
        default=None, description="Address that appears as the sender of reminders"
    )
    smtp_use_tls: bool = Field(
        default=True, description="Issue STARTTLS on non implicit-TLS ports"
    )
    smtp_timeout_seconds: float = Field(
        default=15.0, description="Socket timeout for a single SMTP delivery", gt=0
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used instead of SMTP when provided",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of SendGrid messages",
        min_length=3,
    )
    sendgrid_timeout_seconds: float = Field(
        default=15.0, description="HTTP timeout for a single SendGrid request", gt=0
    )

    vapid_public_key: str | None = Field(
        default=None, description="Application server key handed to browsers"
    )
    vapid_private_key: str | None = Field(
        default=None, description="Private key used to sign VAPID claims"
    )
    vapid_subject: str = Field(
        default="mailto:noreply@example.com",
        description="Contact URI placed in the VAPID 'sub' claim",
    )
    push_timeout_seconds: float = Field(
        default=10.0, description="HTTP timeout for a single push delivery", gt=0
    )
    push_ttl_seconds: int = Field(
        default=86400, description="How long the push service keeps undelivered messages", ge=0
    )
    max_concurrent_deliveries: int = Field(
        default=10, description="Upper bound of blocking sends running in parallel", gt=0
    )

    frontend_url: str = Field(
        default="http://localhost:5173",
        description="Dashboard URL linked from reminder emails",
    )
    scheduler_enabled: bool = Field(
        default=True, description="Register the daily reminder jobs on startup"
    )
    inspection_reminder_cron: str = Field(
        default="0 9 * * *", description="Crontab expression for the inspection check"
    )
    maintenance_reminder_cron: str = Field(
        default="30 9 * * *", description="Crontab expression for the maintenance check"
    )
    inspection_reminder_days: list[int] = Field(
        default_factory=lambda: [30, 14, 7, 1],
        description="Days before an inspection deadline on which reminders are sent",
    )
    maintenance_reminder_days: list[int] = Field(
        default_factory=lambda: [60, 30, 14, 7],
        description="Days before a maintenance deadline on which reminders are sent",
    )
    privileged_roles: list[str] = Field(
        default_factory=lambda: ["admin", "manager"],
        description="User roles that receive reminders and may trigger them manually",
    )

    @field_validator("inspection_reminder_days", "maintenance_reminder_days")
    @classmethod
    def _validate_reminder_days(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("At least one reminder day offset is required")
        if any(day <= 0 for day in value):
            raise ValueError("Reminder day offsets must be positive integers")
        return sorted(set(value), reverse=True)

    @field_validator("inspection_reminder_cron", "maintenance_reminder_cron")
    @classmethod
    def _validate_crontab(cls, value: str) -> str:
        if len(value.split()) != 5:
            raise ValueError("Crontab expressions must have exactly five fields")
        return value.strip()

    @field_validator("privileged_roles")
    @classmethod
    def _normalize_roles(cls, value: list[str]) -> list[str]:
        return [role.strip().lower() for role in value if role and role.strip()]

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable SendGrid"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
