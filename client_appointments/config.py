from functools import lru_cache

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = Field(default="Client Appointments")
    booking_service_base_url: AnyHttpUrl | None = Field(
        default=None
    )
    booking_service_timeout: float = Field(
        default=10.0
    )
    booking_service_token: str | None = Field(
        default=None
    )
    use_mock_data: bool = Field(
        default=True
    )
    page_size: int = Field(
        default=10, ge=1
    )
    catalog_retry_attempts: int = Field(
        default=0, ge=0
    )
    catalog_retry_backoff: float = Field(
        default=0.5, ge=0.0
    )
    booking_creation_path: str = Field(
        default="/booking"
    )

    model_config = SettingsConfigDict(
        env_prefix="CLIENT_APPOINTMENTS_", case_sensitive=False
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
