"""Settings for handlerkit.

``HandlerKitSettings`` holds the knobs shared by adapters, the default
delegate, and the FastAPI binding. All values can be overridden via
environment variables prefixed with ``HANDLERKIT_`` or a ``.env`` file.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** Type-checked at startup, not runtime
    - **Environment-driven:** Reads from env vars and .env files
    - **Sensible defaults:** Works out of the box for development

Examples:
    >>> from handlerkit.core.settings import HandlerKitSettings
    >>> HandlerKitSettings(validate_output=False).validate_output
    False

Tags:
    settings, configuration, pydantic, environment, handlerkit

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HandlerKitSettings(BaseSettings):
    """Settings shared across handlerkit components.

    Order of precedence (highest → lowest):
        1. Environment variables (``HANDLERKIT_LOG_LEVEL``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="HANDLERKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    service_name: str = Field(default="handlerkit", description="Service name stamped on every log line")
    log_level: str = Field(default="INFO", description="Structlog log level")
    json_logs: bool | None = Field(
        default=None,
        description="True for JSON logs, False for console, None to auto-detect from the TTY",
    )

    # ── Operations ───────────────────────────────────────────────
    validate_output: bool = Field(
        default=True,
        description="Validate operation outputs before they are handed to the dispatcher",
    )

    # ── API ──────────────────────────────────────────────────────
    api_prefix: str = Field(default="/operations", description="URL prefix for operation routes")
    api_title: str = Field(default="handlerkit", description="OpenAPI title")


@lru_cache
def get_settings() -> HandlerKitSettings:
    """Return the process-wide settings (cached; ``cache_clear()`` in tests)."""
    return HandlerKitSettings()
