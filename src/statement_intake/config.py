"""Application configuration via environment variables with STATEMENT_ prefix."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.locale import DEFAULT_LOCALE, SupportedLocale


class Settings(BaseSettings):
    """Statement intake service configuration.

    All settings are read from environment variables prefixed with
    ``STATEMENT_``. API keys are wrapped in ``SecretStr`` so they are never
    accidentally logged or serialised.
    """

    model_config = SettingsConfigDict(env_prefix="STATEMENT_")

    # ── OpenAI (direct, or Azure OpenAI when an endpoint is set) ─────────
    openai_api_key: SecretStr = SecretStr("")
    azure_openai_endpoint: str = ""
    azure_openai_api_version: str = "2024-06-01"

    # ── Extraction ─────────────────────────────────────────────────────────
    extraction_model: str = "gpt-4o"
    llm_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    llm_timeout: int = 120
    llm_max_tokens: int = 8192
    dpi: int = 150
    max_pages: int = Field(default=20, ge=1)
    use_vision: bool = True  # off: send only the PDF text layer

    # ── Display ────────────────────────────────────────────────────────────
    default_locale: SupportedLocale = DEFAULT_LOCALE

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool = True

    # ── API ─────────────────────────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
