"""
Configuration Module

Dataclass-based settings read from environment variables.
"""
from service.config.sub_config.general.storage_config import StorageConfig

__all__ = ['StorageConfig']
