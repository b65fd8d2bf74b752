"""SMTP client wrapper for email delivery.

Opens one session per message over TLS (implicit on port 465, STARTTLS
elsewhere), authenticates as the sending mailbox and always closes the
connection. There is no pooling and no retry.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, Optional

from blob_notifier.config.environment import NotificationConfig

from .models import SMTPDeliveryError

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SMTPClient:
    """Wrapper around smtplib for sending email messages.

    Handles connection lifecycle, TLS negotiation and authentication.
    Factories are injectable so tests never open sockets.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        """Initialize SMTP client with optional factory injection.

        Args:
            smtp_factory: Factory function for creating SMTP instances (for mocking)
            smtp_ssl_factory: Factory function for creating SMTP_SSL instances (for mocking)
        """
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage, config: NotificationConfig) -> None:
        """Send an email message via SMTP.

        Args:
            message: Fully constructed EmailMessage to send
            config: Notification configuration with SMTP settings

        Raises:
            SMTPDeliveryError: If the connection, TLS upgrade, login or send fails
        """
        smtp = None
        try:
            context = ssl.create_default_context()
            if config.sender_port == IMPLICIT_TLS_PORT:
                logger.debug(
                    f"Connecting to {config.sender_host}:{config.sender_port} with implicit TLS"
                )
                smtp = self.smtp_ssl_factory(
                    config.sender_host, config.sender_port, context=context
                )
            else:
                logger.debug(f"Connecting to {config.sender_host}:{config.sender_port}")
                smtp = self.smtp_factory(config.sender_host, config.sender_port)
                logger.debug("Upgrading connection with STARTTLS")
                smtp.starttls(context=context)

            logger.debug(f"Authenticating as {config.sender_name}")
            smtp.login(config.sender_name, config.sender_pass)

            smtp.send_message(message)
            logger.debug(f"Message sent successfully to {message['To']}")

        except smtplib.SMTPException as e:
            raise SMTPDeliveryError(f"SMTP error during message delivery: {e}") from e
        except OSError as e:
            raise SMTPDeliveryError(f"Network error during SMTP connection: {e}") from e
        except Exception as e:
            raise SMTPDeliveryError(f"Unexpected error during SMTP delivery: {e}") from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except Exception as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def build_sender_address(config: NotificationConfig) -> str:
    """Build the 'From' address for outgoing emails.

    Args:
        config: Notification configuration with sender settings

    Returns:
        "Display Name <sender>" when a display name is configured (quoted
        when it contains specials such as commas), otherwise the bare
        sender address
    """
    if config.sender_display_name:
        return formataddr((config.sender_display_name, config.sender_name))
    return config.sender_name
