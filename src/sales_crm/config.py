"""Configuration management for the sales CRM core."""

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SUPPORTED_PROVIDERS = ("gemini", "claude")
SUPPORTED_LANGUAGES = ("en", "hi")


class LLMConfig(BaseSettings):
    """Generative-text provider settings."""

    model_config = SettingsConfigDict(
        env_prefix="CRM_LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: Optional[str] = None
    gemini_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("GEMINI_API_KEY", "CRM_LLM_GEMINI_API_KEY")
    )
    anthropic_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("ANTHROPIC_API_KEY", "CRM_LLM_ANTHROPIC_API_KEY")
    )
    gemini_model: str = "gemini-2.5-flash"
    claude_model: str = "claude-3-5-sonnet-20241022"
    request_timeout: float = 60.0
    temperature: float = 0.2

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v):
        """Only providers with an implementation are accepted."""
        if v is None:
            return v
        v = v.lower()
        if v not in SUPPORTED_PROVIDERS:
            raise ValueError(f"provider must be one of {', '.join(SUPPORTED_PROVIDERS)}")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        return v


class AppConfig(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CRM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = "sales-crm"
    version: str = "0.1.0"
    log_level: str = "INFO"
    default_language: str = "en"
    session_file: Path = Path.home() / ".sales_crm" / "session.json"
    locales_dir: Optional[Path] = None  # defaults to the bundled dictionaries

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v):
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"default_language must be one of {', '.join(SUPPORTED_LANGUAGES)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    app: AppConfig = Field(default_factory=AppConfig)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment."""
        return cls()
