from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MoodcatSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    store_path: Path = Field(default=Path("moodcat.json"))
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)
    log_level: str = Field(default="info")
    locale: str = Field(default="en")
    # calendar module numbering, 6 = Sunday
    first_weekday: int = Field(default=6, ge=0, le=6)
    positive_moods: list[int] = Field(default_factory=lambda: [2, 3])
    save_attempts: int = Field(default=2, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="MOODCAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> MoodcatSettings:
    """Return cached application settings."""
    return MoodcatSettings()
