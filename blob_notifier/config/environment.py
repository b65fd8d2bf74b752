"""Environment variable loading and validation."""

import os
from typing import Mapping, Optional, Union

from .exceptions import (
    ConfigurationError,
    ConfigurationValueOutOfRangeError,
    MissingConfigurationValueError,
)
from .validators import check_for_warnings, emit_warnings

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "key-value"]

# Checked in this order; the first blank value aborts startup.
REQUIRED_TEXT_SETTINGS = [
    ("connection_string", "CONNECTION_STRING", "Blob service connection string"),
    ("container_name", "CONTAINER_NAME", "Container name"),
    ("sender_name", "EMAIL_SENDER_NAME", "Email sender name"),
    ("sender_pass", "EMAIL_SENDER_PASS", "Email sender password"),
    ("sender_host", "EMAIL_SENDER_HOST", "Email sender host"),
]


class NotificationConfig:
    """Process-wide settings for the upload notifier.

    Values are validated on construction, so an instance that exists is
    always usable. The first failing check raises and nothing is built.
    """

    def __init__(
        self,
        connection_string: Optional[str],
        container_name: Optional[str],
        sender_name: Optional[str],
        sender_pass: Optional[str],
        sender_host: Optional[str],
        sender_port: Union[int, str, None],
        sender_display_name: Optional[str] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize and validate notification configuration."""
        self.connection_string = connection_string
        self.container_name = container_name
        self.sender_name = sender_name
        self.sender_pass = sender_pass
        self.sender_host = sender_host
        self.sender_port = sender_port
        self.sender_display_name = sender_display_name or None
        self.log_level = (log_level or "INFO").upper()
        self.log_format = log_format or "key-value"
        self.environment = environment or "local"

        self.validate()

    def validate(self) -> None:
        """
        Check every required setting, failing on the first bad one.

        Raises:
            MissingConfigurationValueError: A required value is blank
            ConfigurationValueOutOfRangeError: EMAIL_SENDER_PORT is not a valid port
            ConfigurationError: LOG_LEVEL or LOG_FORMAT is not recognised
        """
        for attribute, setting, description in REQUIRED_TEXT_SETTINGS:
            value = getattr(self, attribute)
            if value is None or not str(value).strip():
                raise MissingConfigurationValueError(setting, description)

        self.sender_port = _parse_port(self.sender_port)

        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid LOG_LEVEL: '{self.log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}",
                setting="LOG_LEVEL",
            )

        if self.log_format not in VALID_LOG_FORMATS:
            raise ConfigurationError(
                f"Invalid LOG_FORMAT: '{self.log_format}'. Must be 'json' or 'key-value'",
                setting="LOG_FORMAT",
            )

    def __repr__(self) -> str:
        return (
            f"NotificationConfig(container_name={self.container_name!r}, "
            f"sender_name={self.sender_name!r}, sender_host={self.sender_host!r}, "
            f"sender_port={self.sender_port!r})"
        )


def load_notification_config(
    environ: Optional[Mapping[str, str]] = None,
) -> NotificationConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - CONNECTION_STRING: Storage account connection string (must carry AccountKey)
    - CONTAINER_NAME: Container watched by the blob trigger
    - EMAIL_SENDER_NAME: Sending mailbox address, also used as SMTP login
    - EMAIL_SENDER_PASS: SMTP password for the sending mailbox
    - EMAIL_SENDER_HOST: SMTP server hostname
    - EMAIL_SENDER_PORT: SMTP server port (1-65535)

    Optional environment variables:
    - EMAIL_SENDER_DISPLAY_NAME: Display name shown in the From header
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    - LOG_FORMAT: json or key-value (default key-value)
    - ENVIRONMENT: Environment label added to every log record (default local)

    Args:
        environ: Mapping to read from instead of os.environ

    Returns:
        NotificationConfig with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    env = os.environ if environ is None else environ

    config = NotificationConfig(
        connection_string=env.get("CONNECTION_STRING"),
        container_name=env.get("CONTAINER_NAME"),
        sender_name=env.get("EMAIL_SENDER_NAME"),
        sender_pass=env.get("EMAIL_SENDER_PASS"),
        sender_host=env.get("EMAIL_SENDER_HOST"),
        sender_port=env.get("EMAIL_SENDER_PORT"),
        sender_display_name=env.get("EMAIL_SENDER_DISPLAY_NAME"),
        log_level=env.get("LOG_LEVEL"),
        log_format=env.get("LOG_FORMAT"),
        environment=env.get("ENVIRONMENT"),
    )

    warning_messages = check_for_warnings(config)
    if warning_messages:
        emit_warnings(warning_messages)

    return config


def _parse_port(value: Union[int, str, None]) -> int:
    """
    Convert EMAIL_SENDER_PORT to an int in the TCP port range.

    Args:
        value: Raw port value from the environment or caller

    Returns:
        Port number

    Raises:
        MissingConfigurationValueError: If the value is blank
        ConfigurationValueOutOfRangeError: If the value is not 1-65535
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingConfigurationValueError("EMAIL_SENDER_PORT", "Email sender port")

    allowed = "an integer between 1 and 65535"
    if isinstance(value, bool):
        raise ConfigurationValueOutOfRangeError("EMAIL_SENDER_PORT", value, allowed)

    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationValueOutOfRangeError("EMAIL_SENDER_PORT", value, allowed)

    if port < 1 or port > 65535:
        raise ConfigurationValueOutOfRangeError("EMAIL_SENDER_PORT", port, allowed)

    return port
