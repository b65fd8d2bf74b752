"""Data models and exceptions for the notification service.

This module defines result types and custom exceptions used throughout
the notification flow.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NotificationError(Exception):
    """Base exception for notification-related errors.

    Subclasses set ``kind`` so callers can report failures without
    matching on message text.
    """

    kind = "notification"


class NotificationTemplateError(NotificationError):
    """Raised when template rendering fails due to configuration or missing variables."""

    kind = "template"


class SMTPDeliveryError(NotificationError):
    """Raised when the SMTP session fails at any stage."""

    kind = "delivery"


class NotificationStatus(str, Enum):
    """Outcome of one handler invocation."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(str, Enum):
    """Why no notification was attempted."""

    MISSING_EMAIL = "missing_email"
    INVALID_EMAIL = "invalid_email"


@dataclass
class NotificationResult:
    """Result of processing one upload event.

    Attributes:
        blob_name: Name of the uploaded blob
        status: Outcome status (sent, skipped, failed)
        recipient: Address taken from metadata, if there was one
        reason: Why the notification was skipped
        error: Error message if signing or delivery failed
        error_kind: Failure category (signing, template, delivery)
    """

    blob_name: str
    status: NotificationStatus
    recipient: Optional[str] = None
    reason: Optional[SkipReason] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    def is_success(self) -> bool:
        """Check if the notification email was sent."""
        return self.status == NotificationStatus.SENT

    @classmethod
    def sent(cls, blob_name: str, recipient: str) -> "NotificationResult":
        return cls(blob_name=blob_name, status=NotificationStatus.SENT, recipient=recipient)

    @classmethod
    def skipped(
        cls, blob_name: str, reason: SkipReason, recipient: Optional[str] = None
    ) -> "NotificationResult":
        return cls(
            blob_name=blob_name,
            status=NotificationStatus.SKIPPED,
            recipient=recipient,
            reason=reason,
        )

    @classmethod
    def failed(
        cls, blob_name: str, recipient: str, error: NotificationError
    ) -> "NotificationResult":
        return cls(
            blob_name=blob_name,
            status=NotificationStatus.FAILED,
            recipient=recipient,
            error=str(error),
            error_kind=error.kind,
        )
