"""
Application configuration using Pydantic Settings
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from recurrence_picker.domain.recurrence import DEFAULT_DATE_CAP, LeapDayPolicy


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Recurrence engine
    RECURRENCE_DATE_CAP: int = DEFAULT_DATE_CAP
    RECURRENCE_LEAP_DAY_POLICY: LeapDayPolicy = LeapDayPolicy.ROLLOVER

    # Application
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Игнорировать дополнительные поля из переменных окружения
    )

    def get_date_cap(self) -> int:
        """
        Safety cap, never below 1
        """
        return max(self.RECURRENCE_DATE_CAP, 1)


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
