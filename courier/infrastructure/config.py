"""Courier configuration with environment variable support."""

from functools import lru_cache

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_CREDENTIAL_MARKERS = ("dev-", "unsafe")


class Settings(BaseSettings):
    """Courier settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="courier", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Postmark
    postmark_server_token: str = Field(
        default="dev-postmark-token-UNSAFE",
        alias="POSTMARK_SERVER_TOKEN",
        validate_default=True,
        description="Postmark server API token - MUST be set in production",
    )
    postmark_api_url: str = Field(default="https://api.postmarkapp.com", alias="POSTMARK_API_URL")

    # SparkPost
    sparkpost_api_key: str = Field(
        default="dev-sparkpost-key-UNSAFE",
        alias="SPARKPOST_API_KEY",
        validate_default=True,
        description="SparkPost API key - MUST be set in production",
    )
    sparkpost_api_url: str = Field(
        default="https://api.sparkpost.com/api/v1", alias="SPARKPOST_API_URL"
    )

    # HTTP
    provider_timeout: float = Field(
        default=10.0,
        alias="PROVIDER_TIMEOUT",
        description="Timeout in seconds for provider API calls",
    )

    @field_validator("postmark_api_url", "sparkpost_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate provider URLs are http(s) and strip trailing slashes."""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Provider API URL must use http:// or https://: {v}")
        return v.rstrip("/")

    @field_validator("provider_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("PROVIDER_TIMEOUT must be positive")
        return v

    @field_validator("postmark_server_token", "sparkpost_api_key")
    @classmethod
    def validate_credentials(cls, v: str, info: ValidationInfo) -> str:
        """Reject development credentials in production."""
        app_env = info.data.get("app_env", "development")
        if app_env.lower() == "production" and any(
            marker in v.lower() for marker in DEV_CREDENTIAL_MARKERS
        ):
            raise ValueError(
                f"{info.field_name.upper()} must be set to a real credential in production. "
                "Default development credential is not allowed."
            )
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
