"""Configuration utilities for the Dexcom Share client."""

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dexcom_share.endpoints import Endpoints, Region, endpoints_for

# Public application id used by the Dexcom Share mobile apps
DEFAULT_APPLICATION_ID = "d89443d2-327c-4a6f-89e5-496bbb0317db"


class Settings(BaseSettings):
    """Client settings loaded from ``DEXCOM_*`` environment variables or ``.env``."""

    # Account credentials
    username: Optional[str] = Field(None, description="Dexcom Share account name")
    password: Optional[SecretStr] = Field(None, description="Dexcom Share password")
    application_id: str = Field(DEFAULT_APPLICATION_ID, description="Share application id")

    # Service configuration
    region: Region = Field(Region.US, description="Share hosting region (us, ous)")
    request_timeout_seconds: float = Field(30.0, description="HTTP request timeout in seconds")
    log_level: str = Field("INFO", description="Logging level")

    @field_validator("region", mode="before")
    @classmethod
    def normalize_region(cls, v: Any) -> Any:
        """
        Accept region names in any case.

        Args:
            v: Raw region value

        Returns:
            Region or the untouched value for pydantic to reject
        """
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("request_timeout_seconds")
    @classmethod
    def check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @property
    def endpoints(self) -> Endpoints:
        return endpoints_for(self.region)

    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None and bool(self.password.get_secret_value())

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DEXCOM_",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Create and cache settings instance.

    Returns:
        Settings: Client settings
    """
    return Settings()
