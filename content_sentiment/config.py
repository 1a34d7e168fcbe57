"""Centralised settings object – importable from anywhere."""
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]

# Auto-load .env from repo root
load_dotenv(BASE_DIR / ".env")


class _Settings(BaseSettings):
    # === Database ====================================================
    DATABASE_URL: str = ""
    ALLOW_SQLITE_FALLBACK: bool = True
    SQLITE_PATH: str = "data/database/content_sentiment.db"

    # === Sentiment ===================================================
    SENTIMENT_BATCH_SIZE: int = 10

    # === Application =================================================
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


@lru_cache
def settings() -> _Settings:
    return _Settings()


def get_database_url() -> str:
    """
    Get database URL with automatic fallback to SQLite if no server database is configured.
    """
    config = settings()

    if config.DATABASE_URL:
        return config.DATABASE_URL

    if config.ALLOW_SQLITE_FALLBACK:
        db_path = Path(config.SQLITE_PATH)
        if not db_path.is_absolute():
            db_path = BASE_DIR / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{db_path}"

    raise ValueError("No database configuration found. Set DATABASE_URL or enable ALLOW_SQLITE_FALLBACK.")
