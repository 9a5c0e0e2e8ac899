"""Package configuration using environment variables."""
import logging
import os
from functools import lru_cache
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Generator settings loaded from environment variables."""

    # Generation defaults
    DEFAULT_SEED: int = int(os.getenv("DUNGEONGEN_DEFAULT_SEED", "42"))
    DEFAULT_SIZE: str = os.getenv("DUNGEONGEN_DEFAULT_SIZE", "medium")

    # Renderer hand-off
    GRID_SIZE: int = int(os.getenv("DUNGEONGEN_GRID_SIZE", "20"))  # Pixels per cell

    # Feature decoration
    NOISE_SCALE: float = float(os.getenv("DUNGEONGEN_NOISE_SCALE", "0.1"))

    # Logging
    LOG_LEVEL: str = os.getenv("DUNGEONGEN_LOG_LEVEL", "WARNING").upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the package logger."""
    level_name = (level or get_settings().LOG_LEVEL).upper()
    logging.getLogger("dungeongen").setLevel(getattr(logging, level_name, logging.WARNING))
