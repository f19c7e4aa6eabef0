"""
Config: cache directory, ToC budget/threshold and HTTP timeout.

Read from .llms_fetch.json (env LLMS_FETCH_CONFIG, else cwd and its parents), with
LLMS_FETCH_* env vars taking precedence. Relative cache_dir is resolved against the
config file's directory (cwd when there is no file).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from llms_fetch.models import DEFAULT_FULL_CONTENT_THRESHOLD, DEFAULT_TOC_BUDGET, TocConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".llms_fetch.json"
DEFAULT_CACHE_DIR = ".llms-fetch-mcp"
DEFAULT_TIMEOUT = 30

CONFIG_KEYS = ("cache_dir", "toc_budget", "full_content_threshold", "timeout")

# env var -> config key
ENV_OVERRIDES = {
    "LLMS_FETCH_CACHE_DIR": "cache_dir",
    "LLMS_FETCH_TOC_BUDGET": "toc_budget",
    "LLMS_FETCH_TOC_THRESHOLD": "full_content_threshold",
    "LLMS_FETCH_TIMEOUT": "timeout",
}
INT_KEYS = {"toc_budget", "full_content_threshold", "timeout"}


def _default_config() -> Dict[str, Any]:
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "toc_budget": DEFAULT_TOC_BUDGET,
        "full_content_threshold": DEFAULT_FULL_CONTENT_THRESHOLD,
        "timeout": DEFAULT_TIMEOUT,
    }


def get_config_path() -> Path:
    """Path of the config file in use, or where one would be created (cwd)."""
    found = _find_config_file()
    if found is not None:
        return found
    env_path = os.environ.get("LLMS_FETCH_CONFIG")
    if env_path:
        return Path(env_path).resolve()
    return (Path.cwd() / CONFIG_FILENAME).resolve()


def _find_config_file() -> Path | None:
    """Return path to an existing config file, or None."""
    env_path = os.environ.get("LLMS_FETCH_CONFIG")
    if env_path:
        p = Path(env_path).resolve()
        return p if p.exists() else None
    for d in [Path.cwd(), *Path.cwd().parents]:
        cf = (d / CONFIG_FILENAME).resolve()
        if cf.exists():
            return cf
    return None


def _apply_env(data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, key in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        if key in INT_KEYS:
            try:
                data[key] = int(raw)
            except ValueError:
                log.warning("Ignoring %s=%r: not an integer", env_name, raw)
                continue
        else:
            data[key] = raw
        data.setdefault("_env", []).append(env_name)
    return data


def _load_file() -> Dict[str, Any]:
    """Defaults plus values from the config file, without env overrides."""
    data = _default_config()
    path = _find_config_file()
    if path is None:
        data["_config_file"] = str(get_config_path())
        data["_no_file"] = True
        return data
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Could not read %s: %s", path, e)
        data["_config_file"] = str(path)
        data["_load_error"] = True
        return data
    if isinstance(stored, dict):
        for key in CONFIG_KEYS:
            if key in stored:
                data[key] = stored[key]
    data["_config_file"] = str(path)
    data["_no_file"] = False
    return data


def load_config() -> Dict[str, Any]:
    """Load config from file (or defaults) and apply env overrides."""
    return _apply_env(_load_file())


def save_config(data: Dict[str, Any]) -> Path:
    """Save config to its file. Only known keys are written, never the _-prefixed bookkeeping entries."""
    path = data.get("_config_file")
    path = Path(path) if path else get_config_path()
    to_save = {key: data[key] for key in CONFIG_KEYS if key in data}
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_save, f, indent=2)
    return path


def set_value(key: str, value: str) -> Dict[str, Any]:
    """Set one key in the config file. Integer keys must be >= 0. Env overrides are not written. Saves config."""
    if key not in CONFIG_KEYS:
        return {"ok": False, "error": f"Unknown key '{key}'. Known keys: {', '.join(CONFIG_KEYS)}."}
    parsed: Any = value
    if key in INT_KEYS:
        try:
            parsed = int(value)
        except ValueError:
            return {"ok": False, "error": f"{key} must be an integer, got {value!r}."}
        if parsed < 0:
            return {"ok": False, "error": f"{key} must be >= 0, got {parsed}."}
    data = _load_file()
    data[key] = parsed
    path = save_config(data)
    return {"ok": True, "path": str(path), "key": key, "value": parsed}


def _config_base_path(data: Dict[str, Any]) -> Path:
    """Directory to resolve relative paths from (config file dir or cwd)."""
    cf = data.get("_config_file")
    if cf and not data.get("_no_file") and Path(cf).exists():
        return Path(cf).parent
    return Path.cwd()


def get_cache_dir(data: Optional[Dict[str, Any]] = None) -> Path:
    """Absolute cache directory."""
    data = data if data is not None else load_config()
    raw = Path(data.get("cache_dir") or DEFAULT_CACHE_DIR)
    if raw.is_absolute():
        return raw
    return (_config_base_path(data) / raw).resolve()


def get_toc_config(data: Optional[Dict[str, Any]] = None) -> TocConfig:
    data = data if data is not None else load_config()
    return TocConfig(
        toc_budget=data.get("toc_budget", DEFAULT_TOC_BUDGET),
        full_content_threshold=data.get("full_content_threshold", DEFAULT_FULL_CONTENT_THRESHOLD),
    )


def get_timeout(data: Optional[Dict[str, Any]] = None) -> float:
    data = data if data is not None else load_config()
    return float(data.get("timeout") or DEFAULT_TIMEOUT)
