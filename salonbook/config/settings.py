"""
Application settings and configuration
"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Basic app settings
    DEBUG: bool = Field(default=False)
    APP_NAME: str = Field(default="Salon Booking API")

    # Server settings
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Tokens are issued by the hosted auth service; we only verify them
    JWT_SECRET_KEY: str = Field(
        default="change-this-jwt-secret-in-production-use-long-random-string"
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_AUDIENCE: str = Field(default="authenticated")

    # Database settings
    DATABASE_URL: str = Field(default="sqlite:///./salonbook.db")
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_STATEMENT_TIMEOUT_SECONDS: int = Field(default=5)

    # Scheduling settings
    DEFAULT_TIMEZONE: str = Field(default="Europe/Bratislava")
    SLOT_GRANULARITY_MINUTES: int = Field(default=30, gt=0)
    BOOKING_WINDOW_DAYS: int = Field(default=60, gt=0)

    # Public booking form protection
    PUBLIC_RATE_LIMIT_PER_MINUTE: int = Field(default=30)

    # Notifications
    NOTIFICATIONS_ENABLED: bool = Field(default=False)

    EMAIL_HOST: str = "smtp.gmail.com"
    EMAIL_PORT: int = 587
    EMAIL_USE_TLS: bool = True
    EMAIL_USERNAME: str = ""
    EMAIL_PASSWORD: str = ""
    EMAIL_FROM_ADDRESS: str = "rezervacie@example.com"
    EMAIL_FROM_NAME: str = "Salon Booking"

    TWILIO_ACCOUNT_SID: str = Field(default="")
    TWILIO_AUTH_TOKEN: str = Field(default="")
    TWILIO_FROM_NUMBER: str = Field(default="")

    # Monitoring settings
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Convenience accessor for settings
settings = get_settings()
