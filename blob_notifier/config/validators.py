"""Additional validation utilities for configuration."""

import warnings
from typing import TYPE_CHECKING, List

from email_validator import EmailNotValidError, validate_email

if TYPE_CHECKING:
    from .environment import NotificationConfig


def check_for_warnings(config: "NotificationConfig") -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    None of these stop the handler from starting; they point at settings
    that are likely to make every delivery fail.

    Args:
        config: Validated notification configuration

    Returns:
        List of warning messages
    """
    warning_messages = []

    # The sender name doubles as the From address
    try:
        validate_email(config.sender_name, check_deliverability=False)
    except EmailNotValidError:
        warning_messages.append(
            f"EMAIL_SENDER_NAME ('{config.sender_name}') is not an email address; "
            "most SMTP servers will reject it as the From address"
        )

    if config.sender_port == 25:
        warning_messages.append(
            "EMAIL_SENDER_PORT is 25; TLS is required and many servers "
            "do not offer STARTTLS on this port"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
