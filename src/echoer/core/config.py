"""
CONTRACT: inline
ROLE: Load YAML config, validate, and expose typed accessors.

INPUTS:
  - Topic: n/a  Type: n/a
OUTPUTS:
  - Topic: n/a  Type: n/a

CONFIG KEYS:
  - config_path: path to YAML file
  - runtime.enable_validation: enable validation (bool)

PERF / TIMING:
  - load once at startup

FAILURE MODES:
  - invalid key -> raise ValueError listing every problem

LOG EVENTS:
  - n/a

TESTS:
  - tests/test_config.py

CONTRACT DETAILS:
# Config contract

- echoer.* selects console verbosity, pacing, channel and color.
- Missing keys fall back to defaults; unknown keys are kept.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import yaml

from echoer.core.logging import LEVELS


def load_config(path: str) -> Dict[str, Any]:
    """Load YAML config and apply defaults."""
    with open(path, "r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    return build_config(data, source=path)


def build_config(data: Optional[Dict[str, Any]] = None, source: str = "<dict>") -> Dict[str, Any]:
    """Merge ``data`` over the defaults and validate when enabled."""
    merged = _merge_dicts(_default_config(), data or {})
    if bool(get_path(merged, "runtime.enable_validation", False)):
        errors = validate_config(merged)
        if errors:
            joined = "\n".join(f"- {e}" for e in errors)
            raise ValueError(f"Config validation failed for {source}:\n{joined}")
    return merged


def get_path(config: Dict[str, Any], dotted_path: str, default: Any = None) -> Any:
    """Get a nested config value by dotted path."""
    node: Any = config
    for key in dotted_path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def _default_config() -> Dict[str, Any]:
    return {
        "runtime": {
            "enable_validation": True,
        },
        "echoer": {
            "short": True,
            "delay_ms": 100,
            "channel": "echoer",
            "color": True,
        },
        "bus": {
            "max_queue_depth": 8,
        },
        "logging": {
            "level": "info",
        },
    }


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Return a list of validation errors for the merged config."""
    errors: List[str] = []

    echoer_cfg = config.get("echoer", {})
    if not isinstance(echoer_cfg, dict):
        errors.append("echoer must be a dict")
        echoer_cfg = {}
    if not isinstance(echoer_cfg.get("short", True), bool):
        errors.append("echoer.short must be a bool")
    if not isinstance(echoer_cfg.get("color", True), bool):
        errors.append("echoer.color must be a bool")
    delay_ms = echoer_cfg.get("delay_ms", 0)
    if isinstance(delay_ms, bool) or not isinstance(delay_ms, int):
        errors.append("echoer.delay_ms must be an integer")
    elif delay_ms < 0:
        errors.append("echoer.delay_ms must be >= 0")
    channel = echoer_cfg.get("channel", "")
    if not isinstance(channel, str) or not channel:
        errors.append("echoer.channel must be a non-empty string")

    bus_cfg = config.get("bus", {})
    if not isinstance(bus_cfg, dict):
        bus_cfg = {}
    depth = bus_cfg.get("max_queue_depth", 1)
    if isinstance(depth, bool) or not isinstance(depth, int) or depth <= 0:
        errors.append("bus.max_queue_depth must be > 0")

    level = str(get_path(config, "logging.level", "info"))
    if level not in LEVELS:
        errors.append(f"logging.level must be one of {', '.join(LEVELS)}")

    return errors
