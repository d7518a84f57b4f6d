from __future__ import annotations

import logging
import os
from pathlib import Path
import tomllib

_CONFIG_CACHE: dict | None = None

DEFAULT_ROLE = "visitor"
DEFAULT_LOG_LEVEL = "WARNING"


def config_path() -> Path:
    override = os.environ.get("BADGEDESK_CONFIG_PATH")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base).expanduser() if base else (Path.home() / ".config")
    return root / "badgedesk" / "config.toml"


def load_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ValueError(f"Invalid config file: {path}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file structure: {path}")
    return data


def get_config() -> dict:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE


def reset_config_cache() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def get_config_value(*keys: str, default: object | None = None) -> object | None:
    current: object = get_config()
    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def default_role() -> str:
    value = get_config_value("person", "default_role")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_ROLE


def _known_level(name: str) -> bool:
    return isinstance(logging.getLevelName(name), int)


def log_level() -> str:
    """Resolve the log level: env var, then `[logging] level`, then WARNING.

    Unknown level names are skipped. A broken config file still raises ValueError.
    """
    env_value = (os.environ.get("BADGEDESK_LOG_LEVEL") or "").strip().upper()
    if env_value and _known_level(env_value):
        return env_value
    value = get_config_value("logging", "level")
    if isinstance(value, str) and _known_level(value.strip().upper()):
        return value.strip().upper()
    return DEFAULT_LOG_LEVEL
