"""Recipient address validation.

Syntax-only checks backed by email-validator. Deliverability (DNS/MX) is
never checked, dotless domains and quoted local parts are accepted. The
library still refuses special-use names such as "localhost", "*.local" and
"*.test".
"""

from typing import Any

from email_validator import EmailNotValidError, validate_email


def normalize_email(address: str) -> str:
    """Validate an email address and return its normalized form.

    Args:
        address: Candidate address, surrounding whitespace is ignored

    Returns:
        Normalized address (lowercased domain, Unicode NFC)

    Raises:
        ValueError: If the address is not a syntactically valid addr-spec
    """
    if not isinstance(address, str):
        raise ValueError(f"Email address must be a string, got {type(address).__name__}")

    try:
        validated = validate_email(
            address.strip(),
            check_deliverability=False,
            globally_deliverable=False,
            allow_quoted_local=True,
        )
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email address '{address}' - {e}") from e

    return validated.normalized


def is_valid_email(address: Any) -> bool:
    """Return True if ``address`` is a syntactically valid email address.

    Example:
        >>> is_valid_email("email@example.com")
        True
        >>> is_valid_email("invalid-email")
        False
    """
    try:
        normalize_email(address)
    except ValueError:
        return False
    return True
