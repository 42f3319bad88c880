"""
Optional config file support for Shell AI.

Reads ~/.config/shell-ai/config.toml if it exists.
Missing config or invalid values fall back to defaults.
"""

import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

CONFIG_PATH = Path.home() / ".config" / "shell-ai" / "config.toml"

DEFAULTS: Dict[str, Any] = {
    "provider": "groq",
    "model": None,  # None means use provider default
    "max_tokens": 200,
    "temperature": 0.1,
    "history_enabled": True,
    "page_size": 10,
    "local_denylist": True,
    "debug": False,
}

VALID_PROVIDERS = {"groq", "cerebras"}

_config: Dict[str, Any] = {}
_loaded = False


def _validate_int(value: Any, key: str, minimum: int = 1) -> int | None:
    """Validate an integer config value. Returns None if invalid."""
    if isinstance(value, bool):
        print(f"shell-ai: config '{key}' must be an integer, ignoring", file=sys.stderr)
        return None
    try:
        val = int(value)
        if val < minimum:
            print(f"shell-ai: config '{key}' must be >= {minimum}, ignoring", file=sys.stderr)
            return None
        return val
    except (TypeError, ValueError):
        print(f"shell-ai: config '{key}' must be an integer, ignoring", file=sys.stderr)
        return None


def _validate_temperature(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        print("shell-ai: config 'temperature' must be a number, ignoring", file=sys.stderr)
        return None
    if not 0 <= value <= 2:
        print("shell-ai: config 'temperature' must be between 0 and 2, ignoring", file=sys.stderr)
        return None
    return float(value)


def _read_bool(section: Dict[str, Any], name: str, key: str) -> None:
    value = section.get(name)
    if value is None:
        return
    if isinstance(value, bool):
        _config[key] = value
    else:
        print(f"shell-ai: config '{name}' must be true or false, ignoring", file=sys.stderr)


def load_config() -> Dict[str, Any]:
    """
    Load config from TOML file, merging with defaults.

    Returns a dict with keys: provider, model, max_tokens, temperature,
    history_enabled, page_size, local_denylist, debug.
    """
    global _config, _loaded

    if _loaded:
        return _config

    _config = dict(DEFAULTS)
    _loaded = True

    if not CONFIG_PATH.exists():
        logger.debug("No config file at %s, using defaults", CONFIG_PATH)
        return _config

    try:
        with open(CONFIG_PATH, "rb") as f:
            data = tomllib.load(f)
    except Exception as e:
        print(f"shell-ai: error reading config: {e}", file=sys.stderr)
        return _config

    # [provider] section
    provider_section = data.get("provider", {})
    if isinstance(provider_section, dict):
        primary = provider_section.get("primary")
        if primary is not None:
            if primary in VALID_PROVIDERS:
                _config["provider"] = primary
            else:
                print(f"shell-ai: unknown provider '{primary}', ignoring", file=sys.stderr)

        model = provider_section.get("model")
        if model is not None:
            if isinstance(model, str) and model.strip():
                _config["model"] = model.strip()
            else:
                print("shell-ai: config 'model' must be a non-empty string, ignoring", file=sys.stderr)

    # [generation] section
    generation_section = data.get("generation", {})
    if isinstance(generation_section, dict):
        max_tokens = generation_section.get("max_tokens")
        if max_tokens is not None:
            val = _validate_int(max_tokens, "max_tokens", minimum=16)
            if val is not None:
                _config["max_tokens"] = val

        temperature = generation_section.get("temperature")
        if temperature is not None:
            temp = _validate_temperature(temperature)
            if temp is not None:
                _config["temperature"] = temp

    # [history] section
    history_section = data.get("history", {})
    if isinstance(history_section, dict):
        _read_bool(history_section, "enabled", "history_enabled")

        page_size = history_section.get("page_size")
        if page_size is not None:
            val = _validate_int(page_size, "page_size")
            if val is not None:
                _config["page_size"] = val

    # [safety] section
    safety_section = data.get("safety", {})
    if isinstance(safety_section, dict):
        _read_bool(safety_section, "local_denylist", "local_denylist")

    # [debug] section
    debug_section = data.get("debug", {})
    if isinstance(debug_section, dict):
        enabled = debug_section.get("enabled")
        if isinstance(enabled, bool):
            _config["debug"] = enabled

    logger.debug("Loaded config: %s", _config)
    return _config


def get(key: str) -> Any:
    """Get a config value by key."""
    cfg = load_config()
    return cfg.get(key, DEFAULTS.get(key))


def reset():
    """Reset loaded config (for testing)."""
    global _config, _loaded
    _config = {}
    _loaded = False
