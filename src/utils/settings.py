"""
Pipeline Settings

Configuration is read from the process environment and a local .env
file. Tunables use the SKILLSCOUT_ prefix (``SKILLSCOUT_TOPIC_THROTTLE_MS``).

Credential lookup order: GOOGLE_API_KEY, GEMINI_API_KEY, API_KEY.
"""

import logging

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS: tuple[str, ...] = ("GOOGLE_API_KEY", "GEMINI_API_KEY", "API_KEY")


class PipelineSettings(BaseSettings):
    """Runtime configuration for the planner, curator and controller."""

    model_config = SettingsConfigDict(
        env_prefix="SKILLSCOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_key: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices(*API_KEY_ENV_VARS),
    )
    planner_model: str = "gemini-2.5-flash"
    curator_model: str = "gemini-2.5-flash"

    # Backoff-retry wrapper
    retry_attempts: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=2000, ge=0)

    # Fixed throttle between curator calls (external service rate ceiling)
    topic_throttle_ms: int = Field(default=6000, ge=0)

    max_resources: int = Field(default=5, ge=1, le=5)

    # Request application/json from the grounded curator call
    curator_json_mode: bool = True

    # LangGraph step budget; each topic costs two steps
    graph_recursion_limit: int = Field(default=1000, ge=10)

    @classmethod
    def from_env(cls, env_file: str | None = ".env") -> "PipelineSettings":
        """Build settings from the environment, warning when no key is set."""
        settings = cls(_env_file=env_file)
        if not settings.api_key:
            logger.warning(
                "GOOGLE_API_KEY not set. "
                "Gemini API calls will fail with an authentication error."
            )
        return settings
