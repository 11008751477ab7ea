"""Configuration management for the budget analytics engine.

This module centralizes the thresholds and labels used by the analytics
helpers.  Defaults live in JSON files under ``settings/`` so they can be
tuned without code changes, and ``BUDGET_ANALYTICS_CONFIG`` may point to a
JSON file whose values override the shipped defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

# Settings directory - shipped alongside this module
SETTINGS_DIR = Path(__file__).parent / "settings"

CONFIG_OVERRIDE_ENV = "BUDGET_ANALYTICS_CONFIG"


def load_config(config_name: str) -> Dict[str, Any]:
    """Load a settings file by name.

    Args:
        config_name: Name of the settings file (without .json extension)

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        json.JSONDecodeError: If the settings file is invalid JSON

    Example:
        >>> config = load_config('analytics')
        >>> config['labels']['uncategorized']
        'Uncategorized'
    """
    config_path = SETTINGS_DIR / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def get_analytics_config() -> Dict[str, Any]:
    """Get the analytics settings with any environment override applied.

    The override file only needs the keys it changes; nested sections are
    merged into the defaults.  An unreadable override is ignored.
    """
    config = load_config('analytics')
    override_path = os.getenv(CONFIG_OVERRIDE_ENV)
    if not override_path:
        return config

    target = Path(override_path)
    try:
        with target.open('r', encoding='utf-8') as handle:
            overrides = json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring analytics config override %s: %s", target, exc)
        return config
    if not isinstance(overrides, dict):
        logger.warning("Ignoring analytics config override %s: expected a JSON object", target)
        return config
    return _merge(config, overrides)


def get_config_value(*keys: str, default: Any = None) -> Any:
    """Get a nested analytics setting by key path.

    Example:
        >>> get_config_value('cadence', 'fallback')
        'biweekly'
    """
    value: Any = get_analytics_config()
    try:
        for key in keys:
            value = value[key]
    except (KeyError, TypeError):
        return default
    return value


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_number_value(*keys: str, default: float, cast: Callable[[Any], Any] = float) -> Any:
    """Get a numeric setting, falling back to ``default`` when it does not cast.

    Example:
        >>> get_number_value('validation', 'date_lookback_years', default=1, cast=int)
        1
    """
    value = get_config_value(*keys, default=default)
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring setting %s=%r: %s", '.'.join(keys), value, exc)
        return cast(default)
