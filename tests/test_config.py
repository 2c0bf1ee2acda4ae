"""Tests for configuration management."""

import os
import pytest
from unittest.mock import patch

from sales_crm.config import AppConfig, LLMConfig, Settings


def test_llm_config_defaults():
    """Test LLM configuration with defaults."""
    with patch.dict(os.environ, {}, clear=True):
        config = LLMConfig(_env_file=None)
        assert config.provider is None
        assert config.gemini_model == "gemini-2.5-flash"
        assert config.request_timeout == 60.0
        assert config.temperature == 0.2


def test_llm_config_reads_vendor_key_names():
    """Test API keys are read from the provider's usual variable names."""
    with patch.dict(os.environ, {
        "GEMINI_API_KEY": "gemini-test",
        "ANTHROPIC_API_KEY": "anthropic-test",
        "CRM_LLM_PROVIDER": "Claude",
    }, clear=True):
        config = LLMConfig(_env_file=None)
        assert config.gemini_api_key == "gemini-test"
        assert config.anthropic_api_key == "anthropic-test"
        assert config.provider == "claude"


def test_llm_config_invalid_provider():
    """Test unsupported provider name."""
    with patch.dict(os.environ, {"CRM_LLM_PROVIDER": "openai"}, clear=True):
        with pytest.raises(ValueError, match="provider must be one of"):
            LLMConfig(_env_file=None)


def test_llm_config_invalid_timeout():
    """Test non-positive request timeout."""
    with patch.dict(os.environ, {"CRM_LLM_REQUEST_TIMEOUT": "0"}, clear=True):
        with pytest.raises(ValueError, match="request_timeout must be positive"):
            LLMConfig(_env_file=None)


def test_app_config_defaults():
    """Test app configuration with defaults."""
    with patch.dict(os.environ, {}, clear=True):
        config = AppConfig(_env_file=None)
        assert config.name == "sales-crm"
        assert config.version == "0.1.0"
        assert config.log_level == "INFO"
        assert config.default_language == "en"
        assert config.session_file.name == "session.json"
        assert config.locales_dir is None


def test_app_config_log_level_normalized():
    """Test log level is upper-cased."""
    with patch.dict(os.environ, {"CRM_LOG_LEVEL": "debug"}, clear=True):
        assert AppConfig(_env_file=None).log_level == "DEBUG"


def test_app_config_invalid_language():
    """Test unsupported default language."""
    with patch.dict(os.environ, {"CRM_DEFAULT_LANGUAGE": "fr"}, clear=True):
        with pytest.raises(ValueError, match="default_language must be one of"):
            AppConfig(_env_file=None)


def test_settings_load():
    """Test combined settings."""
    with patch.dict(os.environ, {"CRM_DEFAULT_LANGUAGE": "hi", "GEMINI_API_KEY": "g"}, clear=True):
        settings = Settings.load()
        assert settings.app.default_language == "hi"
        assert settings.llm.gemini_api_key == "g"
