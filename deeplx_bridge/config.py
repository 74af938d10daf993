import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from deeplx_bridge.logger import get_logger

logger = get_logger(__name__)

# Working directory (where the server is launched from)
WORKING_DIR = Path.cwd()

# Environment variables from .env override the config file
load_dotenv(WORKING_DIR / ".env")

CONFIG_DIR = WORKING_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

DEFAULT_PORT = 6119

# Default configuration template
DEFAULT_CONFIG = {
    "host": "0.0.0.0",
    "port": DEFAULT_PORT,
    "alternatives": True,       # Return alternative translations to HTTP clients
    "cors_origin": None,        # None disables CORS headers, "*" allows any origin
    "dl_session": None,         # Default session cookie forwarded to the remote service
    "timeout": {
        "connect": 10.0,
        "write": 30.0,
        "read": 30.0,
        "pool": 10.0,
    },
    "log_mode": "info",
}

# Environment variable -> config key
ENV_OVERRIDES = {
    "HOST": "host",
    "PORT": "port",
    "ALTERNATIVE": "alternatives",
    "CORS_ORIGIN": "cors_origin",
    "DL_SESSION": "dl_session",
    "DEEPLX_TIMEOUT": "timeout",
    "LOG_MODE": "log_mode",
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret booleans coming from env vars, JSON or CLI flags."""
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return default


def validate_port(value: Any) -> int:
    """
    Validate a TCP port number.

    Out-of-range or non-integer values fall back to DEFAULT_PORT with a warning.
    """
    try:
        port = int(value)
    except (TypeError, ValueError):
        port = -1
    if isinstance(value, float) and not value.is_integer():
        port = -1
    if 0 <= port <= 65535:
        return port
    logger.warning(f"Port should be >= 0 and < 65536, got {value!r}. Using default value instead: {DEFAULT_PORT}")
    return DEFAULT_PORT


def normalize_cors_origin(value: Any) -> Optional[str]:
    """
    Normalize the CORS origin setting.

    True means any origin, False/empty disables CORS, strings pass through.
    """
    if value is None or value is False:
        return None
    if value is True:
        return "*"
    if isinstance(value, str):
        text = value.strip()
        if not text or text.lower() in _FALSE_VALUES:
            return None
        if text.lower() in _TRUE_VALUES:
            return "*"
        return text
    logger.error(f"ParamTypeError: '{value}', origin should be Boolean or String, e.g. '*' or true")
    return None


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        if key == "alternatives":
            config[key] = parse_bool(value, default=True)
        elif key == "timeout":
            try:
                config[key] = float(value)
            except ValueError:
                logger.warning(f"Ignoring invalid {env_name}={value!r}")
        else:
            config[key] = value
        logger.debug(f"Config '{key}' overridden from {env_name}")


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration: defaults, then config.json, then environment."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    path = config_file or CONFIG_FILE

    if path.exists():
        try:
            with open(path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            if isinstance(file_config, dict):
                config.update(file_config)
                logger.debug(f"Configuration loaded from {path}")
            else:
                logger.warning(f"Ignoring {path}: expected a JSON object")
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file {path}: {e}")
            logger.warning("Using default configuration")

    _apply_env_overrides(config)

    config["port"] = validate_port(config.get("port"))
    config["alternatives"] = parse_bool(config.get("alternatives"), default=True)
    config["cors_origin"] = normalize_cors_origin(config.get("cors_origin"))
    return config
