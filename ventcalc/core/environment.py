"""Environment loading for the VentCalc API server.

.env is read first and .env.local overrides it; both override variables
already set by the host.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from ventcalc.services.error_types import ConfigurationError

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def load_environment(env_dir: Optional[Union[str, Path]] = None) -> None:
    """Load .env then .env.local from env_dir (default: working directory)"""
    env_dir = Path.cwd() if env_dir is None else Path(env_dir)

    loaded = []
    for env_file in (env_dir / ".env", env_dir / ".env.local"):
        if env_file.exists():
            load_dotenv(env_file, override=True)
            loaded.append(env_file.name)

    if loaded:
        logger.info(f"Environment loaded from: {', '.join(loaded)}")


def get_env_bool(key: str, default: bool = False) -> bool:
    # Unrecognized values fall back to the default
    value = os.getenv(key, "").strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return default


def get_env_int(key: str, default: int = 0) -> int:
    """Raises ConfigurationError when the variable is set but not an integer"""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid integer value for {key}: {value!r}") from e


def get_env_list(key: str, default: Optional[List[str]] = None) -> List[str]:
    """Comma-separated list, e.g. ALLOWED_ORIGINS"""
    value = os.getenv(key, "")
    if not value.strip():
        return list(default or [])
    return [item.strip() for item in value.split(",") if item.strip()]
