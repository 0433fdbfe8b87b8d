"""Errors raised while reading toolsync settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, such as a non-numeric retry count."""


class MissingConfigurationError(ConfigurationError):
    """A required setting, typically the Product Hunt token, is unset or blank."""


class SyncDisabledError(ConfigurationError):
    """Raised when the catalog sync is switched off for this deployment."""
