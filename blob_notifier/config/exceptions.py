"""Custom exceptions for configuration management."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Exception raised when configuration validation fails.

    Stores the offending setting (when a single one is to blame), any
    collected validation errors, and suggestions on how to fix them.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        setting: Optional[str] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: List of specific validation errors
            suggestions: List of helpful suggestions to fix the errors
            setting: Name of the environment variable that failed validation
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.setting = setting
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with all errors and suggestions."""
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)


class MissingConfigurationValueError(ConfigurationError):
    """A required setting is absent, empty or whitespace-only."""

    def __init__(self, setting: str, description: str):
        super().__init__(
            f"{description} is not configured.",
            errors=[f"Missing required environment variable: {setting}"],
            suggestions=[
                "Copy .env.example to .env and fill in your settings",
                f"Set {setting} in the Function App application settings",
            ],
            setting=setting,
        )


class ConfigurationValueOutOfRangeError(ConfigurationError):
    """A numeric setting is not an integer or falls outside its allowed range."""

    def __init__(self, setting: str, value: object, allowed: str):
        super().__init__(
            f"Invalid {setting}: '{value}'. Must be {allowed}.",
            suggestions=[f"Set {setting} to {allowed}"],
            setting=setting,
        )
        self.value = value
