"""Application configuration helpers."""

from __future__ import annotations

from .bgg import BggConfig, get_bgg_config
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .export import ExportConfig, get_export_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .notion import NotionConfig, get_notion_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "BggConfig",
    "CacheConfig",
    "ConfigurationError",
    "ExportConfig",
    "MissingConfigurationError",
    "NotionConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_bgg_config",
    "get_export_config",
    "get_notion_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
