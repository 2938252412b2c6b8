from __future__ import annotations

from typing import Any, Dict

from shared.protocol.constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_REPLY, ENCODING, MAX_MSG
from shared.settings import ConfigError, apply_env_overrides, load_env_file, validate_port

RESPONDERS = ("fixed", "echo")

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    "host": DEFAULT_HOST,
    "port": DEFAULT_PORT,
    "backlog": 128,
    "max_connections": 1,
    "responder": "fixed",
    "reply_text": DEFAULT_REPLY.decode(ENCODING),
    "log_level": "INFO",
}

SERVER_CONFIG = DEFAULT_SERVER_CONFIG.copy()


def load_server_config(env_path: str = ".env") -> Dict[str, Any]:
    load_env_file(env_path)
    apply_env_overrides(SERVER_CONFIG, DEFAULT_SERVER_CONFIG, "SERVER")
    _validate_config()
    return SERVER_CONFIG


def _validate_config() -> None:
    validate_port("port", SERVER_CONFIG["port"], allow_ephemeral=True)
    if SERVER_CONFIG["max_connections"] <= 0:
        raise ConfigError("max_connections must be positive")
    if SERVER_CONFIG["backlog"] <= 0:
        raise ConfigError("backlog must be positive")
    if SERVER_CONFIG["responder"] not in RESPONDERS:
        raise ConfigError(f"responder must be one of {', '.join(RESPONDERS)}")
    if len(SERVER_CONFIG["reply_text"].encode(ENCODING)) > MAX_MSG:
        raise ConfigError(f"reply_text must encode to at most {MAX_MSG} bytes")


__all__ = ["SERVER_CONFIG", "DEFAULT_SERVER_CONFIG", "RESPONDERS", "load_server_config"]
