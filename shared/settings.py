from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


def load_env_file(env_path: str = ".env") -> bool:
    """Load variables from a .env file into the environment if it exists."""
    if Path(env_path).exists():
        load_dotenv(env_path)
        logger.debug("Loaded environment from %s", env_path)
        return True
    return False


def coerce_type(value: Any, target_type: type) -> Any:
    if isinstance(value, target_type):
        return value
    try:
        if target_type is bool:
            return str(value).lower() in ("1", "true", "yes", "on")
        return target_type(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Cannot convert {value!r} to {target_type.__name__}") from exc


def apply_env_overrides(target: Dict[str, Any], defaults: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    """Override every key of defaults from PREFIX_KEY environment variables."""
    for key, default_value in defaults.items():
        env_key = f"{prefix}_{key.upper()}"
        value = os.getenv(env_key, default_value)
        target[key] = coerce_type(value, type(default_value))
    return target


def validate_port(name: str, port: int, allow_ephemeral: bool = False) -> None:
    low = 0 if allow_ephemeral else 1
    if not (low <= int(port) <= 65535):
        raise ConfigError(f"{name} must be between {low} and 65535")


__all__ = ["ConfigError", "load_env_file", "coerce_type", "apply_env_overrides", "validate_port"]
