"""Tests for settings and yaml configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from agent_coordinator.config import Settings, get_settings, load_yaml_config


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, settings):
        """Test coordinator defaults."""
        assert settings.step_timeout is None
        assert settings.oracle_timeout is None
        assert settings.max_step_retries == 0
        assert settings.confidence_cap == 0.95
        assert settings.optimize_workflows is False
        assert settings.analysis_temperature == 0.3
        assert settings.synthesis_max_tokens == 2000

    def test_reads_environment(self):
        """Test values and aliases are read from environment variables."""
        env = {"LLM_PROVIDER": "together", "STEP_TIMEOUT": "12.5", "MAX_STEP_RETRIES": "2"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)
        assert settings.llm_provider == "together"
        assert settings.step_timeout == 12.5
        assert settings.max_step_retries == 2

    def test_rejects_invalid_values(self, make_settings):
        """Test validation of coordinator values."""
        with pytest.raises(ValidationError):
            make_settings(confidence_cap=1.5)
        with pytest.raises(ValidationError):
            make_settings(step_timeout=0)

    def test_detect_provider_order(self, make_settings):
        """Test auto-detection prefers explicit provider, then key order."""
        assert make_settings().detect_provider() is None
        assert make_settings(openai_api_key="o", together_api_key="t").detect_provider() == "openai"
        assert make_settings(gemini_api_key="g").detect_provider() == "google"
        assert make_settings(llm_provider="together", anthropic_api_key="a").detect_provider() == "together"

    def test_api_key_for_provider(self, make_settings):
        """Test provider key lookup, including the gemini alias."""
        settings = make_settings(anthropic_api_key="a", gemini_api_key="g")
        assert settings.get_api_key_for_provider("anthropic") == "a"
        assert settings.get_api_key_for_provider("google") == "g"
        assert settings.get_api_key_for_provider("openai") is None
        assert settings.get_api_key_for_provider("unknown") is None


class TestWithOverrides:
    """Tests for Settings.with_overrides."""

    def test_applies_known_keys(self, settings):
        """Test overrides produce a new validated copy."""
        updated = settings.with_overrides({"step_timeout": 30, "optimize_workflows": True})
        assert updated.step_timeout == 30
        assert updated.optimize_workflows is True
        assert settings.step_timeout is None

    def test_ignores_unknown_keys(self, settings):
        """Test keys that are not settings are ignored."""
        updated = settings.with_overrides({"not_a_setting": 1})
        assert not hasattr(updated, "not_a_setting")

    def test_empty_overrides_return_same(self, settings):
        """Test no overrides returns the same object."""
        assert settings.with_overrides(None) is settings
        assert settings.with_overrides({}) is settings

    def test_invalid_override(self, settings):
        """Test overrides are validated."""
        with pytest.raises(ValidationError):
            settings.with_overrides({"max_step_retries": -1})


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_cached(self):
        """Test get_settings returns one shared instance until cleared."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestLoadYamlConfig:
    """Tests for load_yaml_config."""

    def test_missing_file(self, tmp_path):
        """Test a missing file yields an empty config."""
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_reads_sections(self, tmp_path):
        """Test sections are returned as parsed."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "llm:\n  provider: openai\ncoordinator:\n  step_timeout: 10\nagents: [security]\n"
        )
        config = load_yaml_config(path)
        assert config["llm"]["provider"] == "openai"
        assert config["coordinator"]["step_timeout"] == 10
        assert config["agents"] == ["security"]

    def test_empty_file(self, tmp_path):
        """Test an empty file yields an empty config."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_yaml_config(path)
