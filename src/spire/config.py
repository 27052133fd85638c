"""Configuration helpers: per-user paths, timing options and logging setup."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

_DEFAULT_AUTO_ADVANCE_DELAY_MS = 1000
_DEFAULT_SUMMARY_DELAY_MS = 2000

DEFAULT_CONFIG: Dict[str, int] = {
    "auto_advance_delay_ms": _DEFAULT_AUTO_ADVANCE_DELAY_MS,
    "summary_delay_ms": _DEFAULT_SUMMARY_DELAY_MS,
}

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def debug_enabled() -> bool:
    """Return True when SPIRE_DEBUG=1 is set."""
    return os.environ.get("SPIRE_DEBUG") == "1"


def configure_logging(level: int | None = None) -> None:
    """Install a basic root handler. DEBUG when SPIRE_DEBUG=1, else INFO."""
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format=_LOG_FORMAT)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "EternalSpire"
        return Path.home() / "EternalSpire"
    return Path.home() / ".config" / "eternal_spire"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_profiles_path() -> Path:
    """Return the per-user profile store file."""
    return get_user_data_dir() / "profiles.json"


def _normalize_delay(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return default
    return value


def _normalize(raw: Dict[str, object]) -> Dict[str, int]:
    return {key: _normalize_delay(raw.get(key), default) for key, default in DEFAULT_CONFIG.items()}


def load_config(path: Path | None = None) -> Dict[str, int]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return dict(DEFAULT_CONFIG)
    except (OSError, ValueError):
        return dict(DEFAULT_CONFIG)
    if not isinstance(raw, dict):
        return dict(DEFAULT_CONFIG)
    return _normalize(raw)


def save_config(config: Dict[str, int], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = _normalize(dict(config))
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
