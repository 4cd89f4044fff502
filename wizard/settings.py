"""
Wizard Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WizardSettings(BaseSettings):
    """
    Wizard configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)

    Command-line flags override all of the above.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="WIZARD_",  # All Wizard env vars must start with WIZARD_
    )

    # Execution
    debug: bool = Field(
        default=False,
        description="Echo the commands run by task actions (env: WIZARD_DEBUG)",
    )

    playbook: Path = Field(
        default=Path("playbook.py"),
        description="Path to the playbook file declaring the tasks (env: WIZARD_PLAYBOOK)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: WIZARD_LOG_LEVEL)",
    )


# Global settings instance
_settings: WizardSettings | None = None


def get_settings() -> WizardSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        WizardSettings instance
    """
    global _settings
    if _settings is None:
        _settings = WizardSettings()
    return _settings


def reload_settings() -> WizardSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh WizardSettings instance
    """
    global _settings
    _settings = WizardSettings()
    return _settings
