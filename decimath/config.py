"""
Library configuration module.
Loads environment variables and provides library-wide settings.
"""
from pathlib import Path

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

# Get project root (one level up from this file)
PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables or .env file.
    (Note: Environment variables take precedence over .env file)
    """
    # Arithmetic
    DECIMAL_PRECISION: int = Field(9, ge=0)  # Fractional digits kept by truncating operations

    # Base conversion
    GMP_SUPPORT: bool = True  # Delegate base conversion to gmpy2 for bases <= 62

    # Logging
    LOG_LEVEL: str = "INFO"  # Default level of configure_logging()

    model_config = ConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        case_sensitive=True,
        env_file_encoding='utf-8',
        extra='ignore'
        )


def get_settings() -> Settings:
    """
    Get settings instance.

    Returns:
        Settings: Library settings
    """
    return Settings()
