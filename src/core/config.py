"""
Configuration loaded from environment variables (a `.env` file is picked up if present).
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _optional_int(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    return int(value)


class Config:
    """Backend configuration."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./plakoto.db")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Game settings
    GAME_LOG_LIMIT: int = int(os.getenv("GAME_LOG_LIMIT", "20"))
    DICE_SEED: int | None = _optional_int(os.getenv("DICE_SEED"))


settings = Config()


def configure_logging(level: str | None = None) -> None:
    """Set up the root logger once, at application start."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper()),
        format=LOG_FORMAT,
    )
