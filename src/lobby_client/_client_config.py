# Area: Shared
"""
lobby_client._client_config — Client Configuration
===================================================

Loading, environment overrides and validation for the client config dict.

Precedence (lowest first):
    1. JSON config file (optional)
    2. .env file in the working directory (via python-dotenv)
    3. Process environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger("lobby_client.config")

# Required config keys
REQUIRED_CONFIG_KEYS = [
    "base_url",
]

DEFAULT_CONFIG: Dict[str, Any] = {
    "timeout_seconds": None,
    "log_file": "lobby_client.log",
    "log_level": "INFO",
}

# Environment variable -> config key
ENV_MAPPINGS = {
    "LOBBY_BASE_URL": "base_url",
    "LOBBY_TIMEOUT_SECONDS": "timeout_seconds",
    "LOBBY_LOG_FILE": "log_file",
    "LOBBY_LOG_LEVEL": "log_level",
    "LOBBY_NICKNAME": "nickname",
}


def load_config(config_path: Optional[str] = None, dotenv_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the config dict from file, .env and environment.

    Args:
        config_path: Optional path to a JSON config file
        dotenv_path: Optional explicit .env path (default: search from cwd)

    Returns:
        Config dict (not yet validated)
    """
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config.update(json.load(f))
        else:
            logger.warning(f"Config file not found: {path}")

    # .env never overrides variables already set in the process
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            value: Any = os.environ[env_key]
            if config_key == "timeout_seconds" and not value:
                value = None
            config[config_key] = value

    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate required configuration keys and normalize timeout_seconds.

    A timeout given as text (environment, .env or a quoted JSON value)
    is converted to float in place.

    Args:
        config: Configuration dict

    Raises:
        ValueError: If required keys are missing or a value is invalid
    """
    missing = [k for k in REQUIRED_CONFIG_KEYS if not config.get(k)]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    timeout = config.get("timeout_seconds")
    if timeout is None:
        return
    if isinstance(timeout, bool):
        raise ValueError(f"timeout_seconds must be a number, got {timeout!r}")
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        raise ValueError(f"timeout_seconds must be a number, got {timeout!r}") from None
    if not 0 < timeout < float("inf"):
        raise ValueError(f"timeout_seconds must be positive and finite, got {timeout}")
    config["timeout_seconds"] = timeout


def resolve_log_level(config: Dict[str, Any]) -> int:
    """Map the configured level name to a logging constant (default INFO)."""
    name = str(config.get("log_level") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
