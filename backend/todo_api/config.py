"""
Todo API - Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, middleware, and the todo service.
When:  Loaded once at module import time; validated before app starts.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments should set SENTRY_DSN and turn off
    ENABLE_DIAGNOSTIC_ROUTES.

    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # PORT matches the variable most hosting platforms inject
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

    # What: Deployment name reported alongside errors (development, staging, production)
    environment: str = Field(default="development")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Error Reporting ───────────────────────────────────────────────────
    # What: Sentry project DSN. Empty means errors are only written to the log.
    sentry_dsn: str = Field(
        default="",
        description="Sentry DSN for request and error reporting",
    )
    # 0.0 = breadcrumbs and errors only, no performance traces
    sentry_traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # What: Opt-in per-IP sliding window rate limit
    rate_limit_enabled: bool = Field(default=False)
    rate_limit_requests: int = Field(default=1000, ge=10, le=100_000)
    rate_limit_window: int = Field(default=3600, ge=1, le=86400)  # seconds

    # ── Todos ─────────────────────────────────────────────────────────────
    todo_text_max_length: int = Field(default=500, ge=1, le=10_000)

    # What: Mounts GET /fail, which raises on purpose to exercise error reporting
    enable_diagnostic_routes: bool = Field(default=True)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_for_production(self) -> None:
        """
        What:  Checks settings that only matter once real users hit the service.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises a single ValueError.
        """
        if self.environment.lower() != "production":
            return
        errors = []
        if not self.sentry_dsn:
            errors.append("SENTRY_DSN is not set; unhandled errors will only be logged.")
        if self.enable_diagnostic_routes:
            errors.append(
                "ENABLE_DIAGNOSTIC_ROUTES is on; GET /fail is reachable by anyone."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
