"""centralized configuration management using pydantic settings.

this module provides type-safe, validated configuration for the agent
coordinator. configuration is loaded from environment variables, an optional
.env file, and an optional config.yaml file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "config.yaml"


class Settings(BaseSettings):
    """main settings class for the agent coordinator.

    configuration is loaded from environment variables. a .env file in the
    working directory is also loaded if present.

    attributes:
        anthropic_api_key: api key for anthropic (claude)
        openai_api_key: api key for openai
        together_api_key: api key for together ai
        google_api_key: api key for google (gemini)
        llm_provider: explicit provider selection (auto-detected if not set)
        llm_model: model to use (provider default if not set)
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        step_timeout: seconds an agent call may take before the step fails
        oracle_timeout: seconds an inference call may take before it fails
        max_step_retries: extra attempts for a step whose agent call raised;
            a step that exceeded step_timeout is never retried
        retry_initial_delay: first backoff delay between step retries
        confidence_cap: upper bound on a synthesized answer's confidence
        optimize_workflows: ask the oracle to reorder planned workflows
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore extra env vars
        populate_by_name=True,
    )

    # api keys for llm providers
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    together_api_key: str | None = None
    google_api_key: str | None = None
    gemini_api_key: str | None = None  # alias for google

    # llm configuration
    llm_provider: str | None = Field(default=None, alias="LLM_PROVIDER")
    llm_model: str | None = Field(default=None, alias="LLM_MODEL")

    log_level: str = Field(default="WARNING", alias="AGENT_COORDINATOR_LOG_LEVEL")

    # coordinator configuration
    step_timeout: float | None = Field(default=None, gt=0)
    oracle_timeout: float | None = Field(default=None, gt=0)
    max_step_retries: int = Field(default=0, ge=0, le=10)
    retry_initial_delay: float = Field(default=1.0, ge=0)
    confidence_cap: float = Field(default=0.95, ge=0.0, le=1.0)
    optimize_workflows: bool = False

    # oracle sampling per coordination phase
    analysis_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    analysis_max_tokens: int = Field(default=500, gt=0)
    structure_temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    structure_max_tokens: int = Field(default=1500, gt=0)
    optimization_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    optimization_max_tokens: int = Field(default=1000, gt=0)
    synthesis_temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    synthesis_max_tokens: int = Field(default=2000, gt=0)

    def get_google_api_key(self) -> str | None:
        """get google api key, checking both GOOGLE_API_KEY and GEMINI_API_KEY."""
        return self.google_api_key or self.gemini_api_key

    def detect_provider(self) -> str | None:
        """auto-detect provider based on available api keys.

        returns:
            provider name or None if no keys are set
        """
        if self.llm_provider:
            return self.llm_provider

        if self.anthropic_api_key:
            return "anthropic"
        if self.openai_api_key:
            return "openai"
        if self.together_api_key:
            return "together"
        if self.get_google_api_key():
            return "google"

        return None

    def get_api_key_for_provider(self, provider: str) -> str | None:
        """get the api key for a specific provider.

        args:
            provider: provider name (anthropic, openai, together, google)

        returns:
            api key or None if not set
        """
        key_map = {
            "anthropic": self.anthropic_api_key,
            "openai": self.openai_api_key,
            "together": self.together_api_key,
            "google": self.get_google_api_key(),
        }
        return key_map.get(provider)

    def with_overrides(self, overrides: dict[str, Any] | None) -> "Settings":
        """return a copy with coordinator overrides applied (e.g. from config.yaml).

        unknown keys are ignored; values are validated like environment input.
        """
        if not overrides:
            return self
        known = {k: v for k, v in overrides.items() if k in type(self).model_fields}
        merged = {**self.model_dump(), **known}
        return type(self).model_validate(merged)


@lru_cache
def get_settings() -> Settings:
    """get the singleton settings instance.

    uses lru_cache to ensure only one instance is created.
    call get_settings.cache_clear() to reload settings if needed.

    returns:
        the settings instance
    """
    return Settings()


def load_yaml_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """load configuration from a yaml file if it exists.

    expected sections: ``llm`` (provider, model), ``coordinator`` (settings
    overrides) and ``agents`` (list of specialist names to enable).

    returns:
        the parsed mapping, or an empty dict when the file is missing
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return data
