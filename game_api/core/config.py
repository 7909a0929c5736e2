"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Game Progress API"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None  # also log to this file when set

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/gamedb.db"

    # bcrypt work factor for stored passwords
    bcrypt_rounds: int = 10

    # CORS: the game client calls from any origin
    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()


# Project root (parent of game_api/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
