from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from .errors import ConfigurationError
from .restore import STRATEGIES
from .walk import DEFAULT_SHUFFLE_FACTOR

DEFAULT_CONFIG: dict[str, Any] = {
    "n_disks": 3,
    "arbitrary": False,
    "seed": None,
    "shuffle_factor": DEFAULT_SHUFFLE_FACTOR,
    "strategy": "random_walk",
    "max_steps": None,
    "progress": False,
}


def load_config(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ConfigurationError(f"config must be a JSON object: {path}")
    return _expand_env_vars(data)


def _expand_env_vars(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _expand_env_vars(v) for k, v in value.items()}
    return value


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {**base}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_int(name: str, value: Any, *, minimum: int, optional: bool) -> int | None:
    if value is None and optional:
        return None
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in {"1", "true", "yes", "on"}:
            return True
        if text in {"0", "false", "no", "off", ""}:
            return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def resolve_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge `config` over the defaults and validate every known key."""

    merged = merge_dicts(DEFAULT_CONFIG, config or {})
    unknown = sorted(set(merged) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigurationError(f"unknown config keys: {unknown}")

    merged["n_disks"] = _coerce_int(
        "n_disks", merged["n_disks"], minimum=1, optional=False
    )
    merged["shuffle_factor"] = _coerce_int(
        "shuffle_factor", merged["shuffle_factor"], minimum=0, optional=False
    )
    merged["seed"] = _coerce_int("seed", merged["seed"], minimum=0, optional=True)
    merged["max_steps"] = _coerce_int(
        "max_steps", merged["max_steps"], minimum=1, optional=True
    )
    merged["arbitrary"] = _coerce_bool("arbitrary", merged["arbitrary"])
    merged["progress"] = _coerce_bool("progress", merged["progress"])
    if merged["strategy"] not in STRATEGIES:
        raise ConfigurationError(
            f"strategy must be one of {list(STRATEGIES)}, got {merged['strategy']!r}"
        )
    return merged
