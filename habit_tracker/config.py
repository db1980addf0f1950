from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    PROJECT_NAME: str = "Habit Tracker"
    API_VERSION: str = "1.0.0"
    ENV: str = "dev"

    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'habits.db'}"

    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3005
    FRONTEND_URL: str = "http://localhost:3005"

    LOG_LEVEL: str = "INFO"
    # IANA name, e.g. "Europe/London"; unset means the server's local day
    TIMEZONE: Optional[str] = None

    HISTORY_DEFAULT_LIMIT: int = 30
    HISTORY_MAX_LIMIT: int = 90

    PUBLIC_DIR: Path = BASE_DIR / "public"
    GUIDE_DIR: Path = BASE_DIR / "guide"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
