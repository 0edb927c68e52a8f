import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List

from ventcalc.core.environment import get_env_bool, get_env_int, get_env_list, load_environment

DEFAULT_ORIGINS = ["http://localhost:3000"]


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment"""
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))


def get_settings() -> Settings:
    """Read settings from .env files and the process environment"""
    load_environment()
    return Settings(
        debug=get_env_bool("DEBUG", False),
        host=os.getenv("HOST", "0.0.0.0"),
        port=get_env_int("PORT", 8000),
        allowed_origins=get_env_list("ALLOWED_ORIGINS", default=list(DEFAULT_ORIGINS)),
    )


# Logging configuration
def setup_logging(debug: bool = False, stream=None):
    """Configure application logging"""
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(stream or sys.stdout),
        ]
    )

    logger = logging.getLogger('ventcalc')
    logger.setLevel(log_level)

    # Suppress noisy third-party loggers
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)

    return logger
