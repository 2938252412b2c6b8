from __future__ import annotations

import logging
from typing import Any, Dict

from shared.protocol.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_REQUEST, ENCODING
from shared.settings import ConfigError, apply_env_overrides, load_env_file, validate_port

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_host": DEFAULT_HOST,
    "server_port": DEFAULT_PORT,
    "reconnect_backoff": 1.0,
    "max_reconnect_backoff": 30.0,
    "max_reconnect_retries": 0,
    "request_timeout": 10.0,
    "request_text": DEFAULT_REQUEST.decode(ENCODING),
    "log_level": "INFO",
}

CLIENT_CONFIG: Dict[str, Any] = DEFAULT_CONFIG.copy()


def load_config(env_path: str = ".env") -> Dict[str, Any]:
    """Load client configuration from env file/environment variables."""
    load_env_file(env_path)
    apply_env_overrides(CLIENT_CONFIG, DEFAULT_CONFIG, "CLIENT")
    _validate_config()
    logging.getLogger().setLevel(CLIENT_CONFIG["log_level"])
    return CLIENT_CONFIG


def _validate_config() -> None:
    validate_port("server_port", CLIENT_CONFIG["server_port"])
    if CLIENT_CONFIG["max_reconnect_retries"] < 0:
        raise ConfigError("max_reconnect_retries must not be negative")
    if CLIENT_CONFIG["reconnect_backoff"] < 0:
        raise ConfigError("reconnect_backoff must not be negative")
    if CLIENT_CONFIG["request_timeout"] < 0:
        raise ConfigError("request_timeout must not be negative")


def get(key: str, default: Any = None) -> Any:
    return CLIENT_CONFIG.get(key, default)


__all__ = ["CLIENT_CONFIG", "DEFAULT_CONFIG", "ConfigError", "get", "load_config"]
