"""
Workflow Storage Configuration.

Controls where saved workflows live, the icon used for steps the
catalog no longer knows, and the backend log level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from service.config.sub_config.general.env_utils import read_env_defaults

_DEFAULT_STORAGE_PATH = str(Path.home() / ".talk2task" / "workflows.json")


@dataclass
class StorageConfig:
    """Workflow store settings."""

    storage_path: str = _DEFAULT_STORAGE_PATH
    fallback_presentation_key: str = "zap"
    log_level: str = "INFO"

    _ENV_MAP = {
        "storage_path": "TALK2TASK_STORAGE_PATH",
        "fallback_presentation_key": "TALK2TASK_FALLBACK_ICON",
        "log_level": "TALK2TASK_LOG_LEVEL",
    }

    @classmethod
    def get_default_instance(cls) -> "StorageConfig":
        defaults = read_env_defaults(cls._ENV_MAP, cls.__dataclass_fields__)
        return cls(**defaults)

    @property
    def storage_file(self) -> Path:
        return Path(self.storage_path).expanduser()

    def apply_log_level(self) -> None:
        """Set the level of the ``service`` logger tree."""
        level = logging.getLevelName(self.log_level.upper())
        if isinstance(level, int):
            logging.getLogger("service").setLevel(level)
