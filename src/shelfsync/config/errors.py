"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a setting is present but unusable, such as an invalid export layout."""


class MissingConfigurationError(ConfigurationError):
    """Raised when credentials or required settings are absent or blank."""
