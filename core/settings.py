"""
Application settings and configuration management using Pydantic Settings.
"""
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATALOG_FILE = Path(__file__).resolve().parent.parent / "services" / "data" / "catalog.json"


class CatalogBackend(str, Enum):
    """Where menus and menu items are read from."""

    MEMORY = "memory"
    DATABASE = "database"


class MailBackend(str, Enum):
    """Outbound mail transport."""

    SMTP = "smtp"
    CONSOLE = "console"


class ConfirmationDelivery(str, Enum):
    """How the confirmation document reaches the recipients."""

    INLINE = "inline"          # full document as the HTML body
    ATTACHMENT = "attachment"  # short body plus a PDF attachment


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    app_name: str = Field(default="Scenic Inn Booking API", description="Application name")
    app_env: str = Field(default="development", description="Environment (development, staging, production)")
    app_version: str = Field(default="1.0.0", description="Version reported by the health endpoint")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    api_prefix: str = Field(default="/api", description="Prefix for all API routes")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3002, ge=1, le=65535, description="API port")
    api_reload: bool = Field(default=False, description="Enable auto-reload")

    # CORS Settings
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080,http://localhost:8081,null",
        description="Allowed CORS origins (comma-separated)"
    )
    cors_allow_credentials: bool = Field(default=True, description="Allow credentials in CORS")

    # Venue Configuration
    venue_name: str = Field(default="The Scenic Inn", description="Venue name used in documents and subjects")
    venue_email: str = Field(default="restaurant@thescenicinn.com", description="Venue copy of every confirmation")
    venue_timezone: str = Field(default="Europe/London", description="Timezone bookings are made in")
    booking_lead_time_hours: float = Field(default=24, ge=0, description="Minimum hours between submission and booking")

    # Catalog Configuration
    catalog_backend: CatalogBackend = Field(default=CatalogBackend.MEMORY, description="Menu catalog source")
    catalog_file: Path = Field(default=DEFAULT_CATALOG_FILE, description="JSON file with menus and items")
    database_url: str = Field(default="sqlite:///./scenic_inn.db", description="Database connection URL")
    database_echo: bool = Field(default=False, description="Log all SQL statements")

    # Mail Configuration
    mail_backend: MailBackend = Field(default=MailBackend.SMTP, description="Mail transport")
    smtp_host: str = Field(default="smtp.gmail.com", description="SMTP server host")
    smtp_port: int = Field(default=587, ge=1, le=65535, description="SMTP server port")
    smtp_username: str = Field(default="", description="SMTP username")
    smtp_password: str = Field(default="", description="SMTP password")
    smtp_start_tls: bool = Field(default=True, description="Upgrade the connection with STARTTLS")
    smtp_use_tls: bool = Field(default=False, description="Connect with implicit TLS")
    smtp_timeout_seconds: float = Field(default=30.0, gt=0, description="SMTP timeout")
    mail_from: Optional[str] = Field(default=None, description="Sender address (defaults to smtp_username)")

    # Confirmation Delivery
    confirmation_delivery: ConfirmationDelivery = Field(
        default=ConfirmationDelivery.INLINE,
        description="Inline HTML body or PDF attachment"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(f"log_level must be one of {allowed_levels}")
        return v_upper

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(f"app_env must be one of {allowed_envs}")
        return v_lower

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string to list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def sender_address(self) -> str:
        """Address confirmations are sent from."""
        return self.mail_from or self.smtp_username or self.venue_email


# Global settings instance
settings = Settings()
