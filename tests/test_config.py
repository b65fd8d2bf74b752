"""Tests for configuration loading and validation."""

import warnings

import pytest

from blob_notifier.config import (
    ConfigurationError,
    ConfigurationValueOutOfRangeError,
    MissingConfigurationValueError,
    NotificationConfig,
    check_for_warnings,
    load_notification_config,
)
from tests.helpers import VALID_SETTINGS, make_config


class TestLoadNotificationConfig:
    """Test loading configuration from environment mappings."""

    def test_all_settings_valid(self):
        """Test that a complete environment loads without raising."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            config = load_notification_config(dict(VALID_SETTINGS))

        assert config.connection_string == VALID_SETTINGS["CONNECTION_STRING"]
        assert config.container_name == "uploads"
        assert config.sender_name == "sender@example.com"
        assert config.sender_pass == "secret123"
        assert config.sender_host == "smtp.example.com"
        assert config.sender_port == 587

    def test_optional_defaults(self):
        """Test defaults for optional settings."""
        config = load_notification_config(dict(VALID_SETTINGS))

        assert config.sender_display_name is None
        assert config.log_level == "INFO"
        assert config.log_format == "key-value"
        assert config.environment == "local"

    def test_optional_settings_loaded(self):
        """Test optional settings are read when present."""
        env = {
            **VALID_SETTINGS,
            "EMAIL_SENDER_DISPLAY_NAME": "File Uploads",
            "LOG_LEVEL": "debug",
            "LOG_FORMAT": "json",
            "ENVIRONMENT": "production",
        }
        config = load_notification_config(env)

        assert config.sender_display_name == "File Uploads"
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.environment == "production"

    def test_reads_os_environ_by_default(self, mock_env_vars):
        """Test that os.environ is used when no mapping is given."""
        config = load_notification_config()

        assert config.container_name == "uploads"
        assert config.sender_port == 587


class TestRequiredSettings:
    """Test fail-fast validation of the six required settings."""

    @pytest.mark.parametrize(
        "missing_key,expected_error",
        [
            ("CONNECTION_STRING", MissingConfigurationValueError),
            ("CONTAINER_NAME", MissingConfigurationValueError),
            ("EMAIL_SENDER_NAME", MissingConfigurationValueError),
            ("EMAIL_SENDER_PASS", MissingConfigurationValueError),
            ("EMAIL_SENDER_PORT", ConfigurationValueOutOfRangeError),
            ("EMAIL_SENDER_HOST", MissingConfigurationValueError),
        ],
    )
    def test_missing_or_invalid_setting_raises(self, missing_key, expected_error):
        """Test each setting removed (or port zeroed) raises its own error."""
        env = dict(VALID_SETTINGS)
        if missing_key == "EMAIL_SENDER_PORT":
            env[missing_key] = "0"
        else:
            del env[missing_key]

        with pytest.raises(ConfigurationError) as exc_info:
            load_notification_config(env)

        assert type(exc_info.value) is expected_error
        assert exc_info.value.setting == missing_key

    @pytest.mark.parametrize(
        "key",
        ["CONNECTION_STRING", "CONTAINER_NAME", "EMAIL_SENDER_NAME", "EMAIL_SENDER_PASS", "EMAIL_SENDER_HOST"],
    )
    def test_whitespace_only_value_is_missing(self, key):
        """Test that blank values count as missing."""
        env = {**VALID_SETTINGS, key: "   "}

        with pytest.raises(MissingConfigurationValueError) as exc_info:
            load_notification_config(env)

        assert exc_info.value.setting == key

    def test_missing_port_is_missing_value(self):
        """Test that an absent port is a missing value, not a range error."""
        env = dict(VALID_SETTINGS)
        del env["EMAIL_SENDER_PORT"]

        with pytest.raises(MissingConfigurationValueError) as exc_info:
            load_notification_config(env)

        assert exc_info.value.setting == "EMAIL_SENDER_PORT"

    @pytest.mark.parametrize("port", ["-1", "65536", "abc", "58.7"])
    def test_invalid_port_out_of_range(self, port):
        """Test negative, too large and non-integer ports."""
        env = {**VALID_SETTINGS, "EMAIL_SENDER_PORT": port}

        with pytest.raises(ConfigurationValueOutOfRangeError) as exc_info:
            load_notification_config(env)

        assert "EMAIL_SENDER_PORT" in str(exc_info.value)

    def test_first_failing_check_wins(self):
        """Test checks run in order and stop at the first failure."""
        env = dict(VALID_SETTINGS)
        del env["CONTAINER_NAME"]
        del env["EMAIL_SENDER_HOST"]
        env["EMAIL_SENDER_PORT"] = "0"

        with pytest.raises(MissingConfigurationValueError) as exc_info:
            load_notification_config(env)

        assert exc_info.value.setting == "CONTAINER_NAME"

    def test_error_message_has_suggestions(self):
        """Test that the error message explains how to fix the setting."""
        env = dict(VALID_SETTINGS)
        del env["CONNECTION_STRING"]

        with pytest.raises(MissingConfigurationValueError) as exc_info:
            load_notification_config(env)

        message = str(exc_info.value)
        assert "Blob service connection string is not configured." in message
        assert "Missing required environment variable: CONNECTION_STRING" in message
        assert "Suggestions:" in message


class TestOptionalSettings:
    """Test validation of optional logging settings."""

    def test_invalid_log_level(self):
        """Test that an unknown LOG_LEVEL is rejected."""
        env = {**VALID_SETTINGS, "LOG_LEVEL": "VERBOSE"}

        with pytest.raises(ConfigurationError) as exc_info:
            load_notification_config(env)

        assert type(exc_info.value) is ConfigurationError
        assert exc_info.value.setting == "LOG_LEVEL"

    def test_invalid_log_format(self):
        """Test that an unknown LOG_FORMAT is rejected."""
        env = {**VALID_SETTINGS, "LOG_FORMAT": "xml"}

        with pytest.raises(ConfigurationError) as exc_info:
            load_notification_config(env)

        assert exc_info.value.setting == "LOG_FORMAT"


class TestNotificationConfig:
    """Test direct construction of NotificationConfig."""

    def test_port_string_converted(self):
        """Test that a numeric string port is stored as int."""
        config = make_config(sender_port="465")
        assert config.sender_port == 465

    def test_direct_construction_validates(self):
        """Test that constructing with a blank field raises immediately."""
        with pytest.raises(MissingConfigurationValueError):
            make_config(sender_pass="")

    def test_boolean_port_rejected(self):
        """Test that a boolean is not accepted as a port."""
        with pytest.raises(ConfigurationValueOutOfRangeError):
            make_config(sender_port=True)

    def test_repr_hides_secrets(self):
        """Test that repr never includes the password or connection string."""
        config = make_config()
        text = repr(config)

        assert "secret123" not in text
        assert "AccountKey" not in text
        assert "smtp.example.com" in text


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_no_warnings_for_valid_config(self):
        """Test a typical config produces no warnings."""
        assert check_for_warnings(make_config()) == []

    def test_sender_name_not_an_address(self):
        """Test warning when EMAIL_SENDER_NAME is not an email address."""
        messages = check_for_warnings(make_config(sender_name="Uploads Team"))

        assert len(messages) == 1
        assert "EMAIL_SENDER_NAME" in messages[0]

    def test_port_25_warning(self):
        """Test warning for plain SMTP port."""
        messages = check_for_warnings(make_config(sender_port=25))

        assert any("25" in message for message in messages)

    def test_load_emits_warnings(self):
        """Test that loading emits warnings through the warnings module."""
        env = {**VALID_SETTINGS, "EMAIL_SENDER_NAME": "ValidEmailSenderName"}

        with pytest.warns(UserWarning, match="EMAIL_SENDER_NAME"):
            config = load_notification_config(env)

        assert config.sender_name == "ValidEmailSenderName"


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock required environment variables for testing."""
    for key, value in VALID_SETTINGS.items():
        monkeypatch.setenv(key, value)
    for key in ("EMAIL_SENDER_DISPLAY_NAME", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT"):
        monkeypatch.delenv(key, raising=False)
