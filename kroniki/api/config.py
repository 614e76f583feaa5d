"""
Engine API settings, read from the environment or a `.env` file.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Server, CORS, catalog and logging settings."""

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    # Enables uvicorn auto-reload in run.py
    DEBUG: bool = False

    CORS_ORIGINS: List[str] = ["*"]

    # Path to an alternative game_data.json; the bundled catalog when unset
    GAME_DATA_PATH: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
