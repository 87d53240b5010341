from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

_RULES_CACHE: dict[str, dict[str, Any]] = {}
_RULES_DIR = Path(__file__).resolve().parents[2] / "config"


def rules_path(name: str) -> Path:
    return _RULES_DIR / f"{name}.yaml"


def load_rules(name: str) -> dict[str, Any]:
    """Load a rule table from repo-level config/<name>.yaml and cache it."""
    cached = _RULES_CACHE.get(name)
    if cached is not None:
        return cached

    path = rules_path(name)
    if not path.exists():
        raise RuntimeError(
            f"Rule table not found at '{path}'. "
            f"Expected file: config/{name}.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read rule table '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in rule table '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid rule table '{path}': expected a top-level mapping.")

    _RULES_CACHE[name] = parsed
    return parsed


def get_rule_value(name: str, path: str, default: Any = None) -> Any:
    """Get nested rule value using dot path notation, e.g. 'bounds.max'."""
    if not path:
        return default

    current: Any = load_rules(name)
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current
