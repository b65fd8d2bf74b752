"""Email notifications for uploaded files.

- MailSender: composes and sends the upload notification
- SMTPClient: SMTP wrapper with TLS/STARTTLS support
- TemplateRenderer: Jinja2-based email template rendering
- Recipient validation helpers
- NotificationResult and the notification exception family
"""

from .models import (
    NotificationError,
    NotificationResult,
    NotificationStatus,
    NotificationTemplateError,
    SkipReason,
    SMTPDeliveryError,
)
from .recipients import is_valid_email, normalize_email
from .sender import MailSender
from .smtp_client import SMTPClient, build_sender_address
from .templates import TemplateRenderer

__all__ = [
    # Main sender
    "MailSender",
    # Models and results
    "NotificationResult",
    "NotificationStatus",
    "SkipReason",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    # Components
    "TemplateRenderer",
    "SMTPClient",
    # Utilities
    "build_sender_address",
    "is_valid_email",
    "normalize_email",
]
