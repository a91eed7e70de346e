"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file

Every fixed knob of the two proxies (limits, windows, generation parameters,
safety thresholds, truncation sizes) lives here so it is validated once at
startup instead of being scattered across handlers.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log destination: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        10_000_000,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(5, description="Number of rotated files to keep", ge=0)
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class GeminiSettings(BaseSettings):
    """Upstream generation API (Gemini) configuration.

    The API key is optional at startup: the chat endpoint answers 503 while it
    is missing, the rest of the service keeps working.
    """

    api_key: str | None = Field(
        None,
        description="Gemini API key (GEMINI_API_KEY)",
    )
    model: str = Field(
        "gemini-2.5-flash",
        description="Model identifier used for generateContent",
    )
    base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API",
    )
    timeout_seconds: float = Field(
        45.0,
        description="Request timeout in seconds",
        gt=0,
    )
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    top_p: float = Field(0.9, ge=0.0, le=1.0)
    top_k: int = Field(40, ge=1)
    max_output_tokens: int = Field(2048, ge=1)
    safety_threshold: str = Field(
        "BLOCK_MEDIUM_AND_ABOVE",
        description="Threshold applied to every harm category",
    )
    history_limit: int = Field(
        20,
        description="Only the most recent N transcript messages are forwarded",
        ge=1,
    )
    max_message_chars: int = Field(
        1000,
        description="Per-message character cap applied before forwarding",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        case_sensitive=False,
    )


class ResendSettings(BaseSettings):
    """Upstream email-delivery API (Resend) configuration."""

    api_key: str | None = Field(
        None,
        description="Resend API key (RESEND_API_KEY)",
    )
    base_url: str = Field(
        "https://api.resend.com",
        description="Base URL of the Resend REST API",
    )
    from_address: str = Field(
        "Portfolio Contact <onboarding@resend.dev>",
        description="Sender shown on contact notifications",
    )
    timeout_seconds: float = Field(15.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="RESEND_",
        case_sensitive=False,
    )


class ContactSettings(BaseSettings):
    """Contact form delivery and truncation limits."""

    email: str | None = Field(
        None,
        description="Override recipient for contact messages (CONTACT_EMAIL)",
    )
    default_recipient: str = Field(
        "chamindumadhushan2000@gmail.com",
        description="Site owner's address used when no override is configured",
    )
    max_name_chars: int = Field(100, ge=1)
    max_email_chars: int = Field(254, ge=1)
    max_message_chars: int = Field(5000, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="CONTACT_",
        case_sensitive=False,
    )

    @property
    def recipient(self) -> str:
        return self.email or self.default_recipient


class RateLimitSettings(BaseSettings):
    """Per-endpoint fixed-window rate limits keyed by client IP."""

    enabled: bool = Field(True, description="Enable per-IP rate limiting")
    chat_requests: int = Field(
        20,
        description="Maximum chat requests per window",
        ge=1,
    )
    chat_window_seconds: float = Field(60.0, gt=0)
    contact_requests: int = Field(
        5,
        description="Maximum contact submissions per window",
        ge=1,
    )
    contact_window_seconds: float = Field(60.0, gt=0)
    max_keys: int = Field(
        10_000,
        description="Upper bound on tracked caller keys (LRU eviction beyond it)",
        ge=1,
    )
    sweep_interval_seconds: float = Field(
        60.0,
        description="Minimum seconds between sweeps of expired keys below capacity",
        gt=0,
    )
    include_headers: bool = Field(
        False,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    cors_origins: str | None = Field(
        None,
        description="Comma-separated list of origins allowed to call the API",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


def _build_log_settings() -> LogSettings:
    return LogSettings()


def _build_gemini_settings() -> GeminiSettings:
    return GeminiSettings()


def _build_resend_settings() -> ResendSettings:
    return ResendSettings()


def _build_contact_settings() -> ContactSettings:
    return ContactSettings()


def _build_rate_limit_settings() -> RateLimitSettings:
    return RateLimitSettings()


def _build_app_settings() -> AppSettings:
    return AppSettings()


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if any value is out of range.
    """

    app_env: str = APP_ENV
    log: LogSettings = Field(default_factory=_build_log_settings)
    gemini: GeminiSettings = Field(default_factory=_build_gemini_settings)
    resend: ResendSettings = Field(default_factory=_build_resend_settings)
    contact: ContactSettings = Field(default_factory=_build_contact_settings)
    rate_limit: RateLimitSettings = Field(default_factory=_build_rate_limit_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
