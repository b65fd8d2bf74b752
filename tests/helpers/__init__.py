"""Test helper utilities for blob upload notifier tests."""

from blob_notifier.config.environment import NotificationConfig

# base64 of b"test-account-key"; never valid against a real account
TEST_ACCOUNT_NAME = "testaccount"
TEST_ACCOUNT_KEY = "dGVzdC1hY2NvdW50LWtleQ=="
TEST_CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;"
    f"AccountName={TEST_ACCOUNT_NAME};"
    f"AccountKey={TEST_ACCOUNT_KEY};"
    "EndpointSuffix=core.windows.net"
)

VALID_SETTINGS = {
    "CONNECTION_STRING": TEST_CONNECTION_STRING,
    "CONTAINER_NAME": "uploads",
    "EMAIL_SENDER_NAME": "sender@example.com",
    "EMAIL_SENDER_PASS": "secret123",
    "EMAIL_SENDER_PORT": "587",
    "EMAIL_SENDER_HOST": "smtp.example.com",
}


def make_config(**overrides) -> NotificationConfig:
    """Build a valid NotificationConfig, overriding individual fields."""
    values = {
        "connection_string": TEST_CONNECTION_STRING,
        "container_name": "uploads",
        "sender_name": "sender@example.com",
        "sender_pass": "secret123",
        "sender_host": "smtp.example.com",
        "sender_port": 587,
    }
    values.update(overrides)
    return NotificationConfig(**values)


__all__ = [
    "TEST_ACCOUNT_NAME",
    "TEST_ACCOUNT_KEY",
    "TEST_CONNECTION_STRING",
    "VALID_SETTINGS",
    "make_config",
]
