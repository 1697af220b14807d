"""
Environment helpers for config dataclasses.

``read_env_defaults`` builds constructor kwargs for a config dataclass
from environment variables, coercing each value to the field's type.
Variables that are unset are left out so the dataclass default applies.
"""

from __future__ import annotations

import os
from dataclasses import Field
from logging import getLogger
from typing import Any, Dict, Mapping

logger = getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def read_env_defaults(
    env_map: Mapping[str, str],
    fields: Mapping[str, Field],
) -> Dict[str, Any]:
    """Return ``{field_name: value}`` for every mapped variable that is set."""
    values: Dict[str, Any] = {}
    for field_name, env_name in env_map.items():
        raw = os.environ.get(env_name)
        if raw is None or field_name not in fields:
            continue
        try:
            values[field_name] = _coerce(raw, fields[field_name].type)
        except ValueError:
            logger.warning(f"Ignoring invalid value for {env_name}: {raw!r}")
    return values


def _coerce(raw: str, type_hint: Any) -> Any:
    # Annotations are strings under ``from __future__ import annotations``.
    name = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
    if name == "bool":
        return raw.strip().lower() in _TRUE_VALUES
    if name == "int":
        return int(raw)
    if name == "float":
        return float(raw)
    return raw
