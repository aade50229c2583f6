"""Application configuration."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Environment variables will be loaded and validated using Pydantic.
    """

    app_name: str = "geonorm"
    version: str = "0.1.0"

    # LocationIQ Settings
    LOCATIONIQ_API_KEY: str | None = None
    LOCATIONIQ_BASE_URL: str = "https://api.locationiq.com/v1"
    LOCATIONIQ_TIMEOUT: float = Field(default=10.0, gt=0)
    LOCATIONIQ_USER_AGENT: str = "geonorm/0.1.0"
    LOCATIONIQ_DEFAULT_LIMIT: int = Field(default=5, ge=1)
    LOCATIONIQ_REVERSE_ZOOM: int = Field(default=18, ge=0, le=18)

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",  # Allow extra fields in environment
    )

    @field_validator("LOCATIONIQ_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so endpoint paths can be appended."""
        return value.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Validate the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


# Create settings instance
settings = Settings()
