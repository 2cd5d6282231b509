# pushframe/deps.py
import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# ====================================
# SETTINGS
# ====================================

class Settings(BaseSettings):
    # .env first, then real environment variables
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PUSH_LOG_LEVEL: str = "INFO"
    # slowapi limit string for the encode endpoints
    PUSH_RATE_LIMIT: str = "120/minute"
    # sound used when a request does not name one
    PUSH_DEFAULT_SOUND: Optional[str] = None

# Dependency: settings singleton

def get_settings() -> Settings:
    return Settings()

# ====================================
# LOGGING
# ====================================

def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    settings = settings or get_settings()
    logger = logging.getLogger("pushframe")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.PUSH_LOG_LEVEL.upper(), logging.INFO))
    return logger
