"""Upload notification email composition and delivery.

MailSender turns a recipient, file name and download link into one HTML
email and hands it to the SMTP client. One message, one attempt: any
failure propagates to the caller as a NotificationError.
"""

from datetime import timedelta
from email.errors import MessageError
from email.message import EmailMessage
from typing import Optional

from blob_notifier.config.environment import NotificationConfig
from blob_notifier.logging import get_logger
from blob_notifier.utils.timestamps import format_duration

from .models import SMTPDeliveryError
from .smtp_client import SMTPClient, build_sender_address
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")


class MailSender:
    """Sends upload notification emails through a fresh SMTP session per call."""

    def __init__(
        self,
        config: NotificationConfig,
        smtp_client: Optional[SMTPClient] = None,
        template_renderer: Optional[TemplateRenderer] = None,
    ):
        """Initialize the mail sender.

        Args:
            config: Notification configuration with SMTP settings
            smtp_client: SMTP client instance (creates default if None)
            template_renderer: Template renderer instance (creates default if None)
        """
        self.config = config
        self.smtp_client = smtp_client or SMTPClient()
        self.template_renderer = template_renderer or TemplateRenderer()

    def build_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> EmailMessage:
        """Build a single-recipient HTML message.

        When a text body is given it becomes the first part and the HTML body
        its alternative; otherwise the message is HTML only.
        """
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = build_sender_address(self.config)
        message["To"] = to_address

        if text_body is not None:
            message.set_content(text_body)
            message.add_alternative(html_body, subtype="html")
        else:
            message.set_content(html_body, subtype="html")

        return message

    def send(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> None:
        """Deliver one message to one recipient.

        Raises:
            SMTPDeliveryError: If the message cannot be built or the SMTP session fails
        """
        try:
            message = self.build_message(to_address, subject, html_body, text_body)
        except (ValueError, TypeError, MessageError) as e:
            raise SMTPDeliveryError(f"Failed to build email message: {e}") from e

        self.smtp_client.send(message, self.config)
        logger.debug(
            f"Delivered message to {to_address}",
            extra={"event": "email.delivered"},
        )

    def send_upload_notice(
        self,
        to_address: str,
        file_name: str,
        download_url: str,
        link_validity: timedelta,
    ) -> None:
        """Render and send the "file uploaded" email.

        Args:
            to_address: Recipient address (already validated)
            file_name: Name of the uploaded blob
            download_url: Signed download link
            link_validity: How long the link stays valid, quoted in the body

        Raises:
            NotificationTemplateError: If the templates fail to render
            SMTPDeliveryError: If the SMTP session fails
        """
        rendered = self.template_renderer.render(
            {
                "file_name": file_name,
                "download_url": download_url,
                "link_validity": format_duration(link_validity),
            }
        )
        self.send(
            to_address,
            rendered["subject"],
            rendered["html_body"],
            rendered["text_body"],
        )
