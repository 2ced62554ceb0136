"""
calcapp Configuration Management
Centralized settings with environment variable support
"""
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AISettings(BaseSettings):
    """Natural-language backend configuration"""
    openai_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("CALC_OPENAI_API_KEY", "OPENAI_API_KEY")
    )
    anthropic_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("CALC_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY")
    )
    model: str = "gpt-3.5-turbo"
    anthropic_model: str = "claude-3-haiku-20240307"
    temperature: float = 0.0
    max_tokens: int = 256

    model_config = SettingsConfigDict(env_prefix="CALC_AI_", populate_by_name=True)


class CurrencySettings(BaseSettings):
    """Exchange-rate backend configuration"""
    enabled: bool = True
    rates_url: str = "https://api.exchangerate-api.com/v4/latest"
    timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="CALC_CURRENCY_")


class SystemSettings(BaseSettings):
    """Process-level configuration"""
    log_level: str = "INFO"
    max_history: int = 100

    model_config = SettingsConfigDict(env_prefix="CALC_")


class UISettings(BaseSettings):
    """Shell configuration"""
    scientific_mode: bool = False
    show_equation: bool = True

    model_config = SettingsConfigDict(env_prefix="CALC_UI_")


class Settings:
    """Combined settings container"""

    def __init__(self):
        self.ai = AISettings()
        self.currency = CurrencySettings()
        self.system = SystemSettings()
        self.ui = UISettings()

    def is_ai_configured(self) -> bool:
        """Check if any completion backend is configured"""
        return bool(self.ai.openai_api_key or self.ai.anthropic_api_key)

    def get_active_ai_provider(self) -> Optional[str]:
        """Get the active completion backend name"""
        if self.ai.openai_api_key:
            return "openai"
        if self.ai.anthropic_api_key:
            return "anthropic"
        return None


# Global settings instance
settings = Settings()
