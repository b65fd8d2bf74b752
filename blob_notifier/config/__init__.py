"""Configuration management module for the blob upload notifier."""

from .environment import NotificationConfig, load_notification_config
from .exceptions import (
    ConfigurationError,
    ConfigurationValueOutOfRangeError,
    MissingConfigurationValueError,
)
from .validators import check_for_warnings, emit_warnings

__all__ = [
    # Loader
    "load_notification_config",
    # Configuration object
    "NotificationConfig",
    # Validation helpers
    "check_for_warnings",
    "emit_warnings",
    # Exceptions
    "ConfigurationError",
    "MissingConfigurationValueError",
    "ConfigurationValueOutOfRangeError",
]
