"""
Provisioning configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Provisioning settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = Field(default="mongodb://mongodb:27017")
    db_name: str = Field(default="sharespace")
    server_selection_timeout_ms: int = Field(default=5000)

    # Application principal
    app_username: str = Field(default="sharespace_app")
    app_password: str = Field(default="sharespace_password")  # CHANGE_ME in production

    # Fail instead of reconciling when a resource already exists
    strict: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
