from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MOOD_JOURNAL_",
        env_file=".env",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Mood Journal"
    LOG_LEVEL: str = "INFO"

    # Journal service
    BACKEND_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT: float = 30.0

    # Session
    VERIFY_ON_RESUME: bool = True
    # One JSON file per browser lives here
    STORAGE_DIR: Path = Path.home() / ".mood_journal" / "clients"

    # Journal
    MIN_ENTRY_LENGTH: int = 20
    PREVIEW_LIMIT: int = 5

    # UI
    DEFAULT_THEME: str = "light"


settings = Settings()
