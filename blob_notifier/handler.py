"""Upload notification handler.

Invoked once per uploaded blob. Reads the recipient from the blob metadata,
validates it, signs a download link and emails it. Notification is best
effort: ``handle`` reports every outcome through the log and never raises,
so the trigger runtime always sees a successful completion.
"""

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from blob_notifier.config.environment import NotificationConfig, load_notification_config
from blob_notifier.domain.models import UploadEvent
from blob_notifier.logging import get_logger
from blob_notifier.logging.context import log_context
from blob_notifier.notifications.models import (
    NotificationError,
    NotificationResult,
    NotificationStatus,
    SkipReason,
)
from blob_notifier.notifications.recipients import normalize_email
from blob_notifier.notifications.sender import MailSender
from blob_notifier.storage.signer import LINK_VALIDITY, BlobLinkSigner

logger = get_logger(__name__, component="handler")


class NotificationHandler:
    """Turns an upload event into at most one notification email.

    Flow per event:
    1. Look up metadata["email"]; skip if absent
    2. Validate the address; skip if malformed
    3. Sign a download link for the blob
    4. Send the notification email

    Steps 3 and 4 run sequentially with a single attempt each. Their
    failures come back as a failed NotificationResult, never as exceptions.
    """

    def __init__(
        self,
        config: NotificationConfig,
        signer: Optional[BlobLinkSigner] = None,
        mail_sender: Optional[MailSender] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the handler.

        Args:
            config: Notification configuration (re-validated here)
            signer: Link signer (creates default if None)
            mail_sender: Mail sender (creates default if None)
            logger_instance: Logger instance (uses module logger if None)

        Raises:
            ConfigurationError: If the configuration is incomplete or invalid
        """
        config.validate()
        self.config = config
        self.signer = signer or BlobLinkSigner(config.connection_string)
        self.mail_sender = mail_sender or MailSender(config)
        self.logger = logger_instance or logger

    @classmethod
    def from_environment(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "NotificationHandler":
        """Build a handler from environment variables.

        Raises:
            ConfigurationError: If any required setting is missing or invalid
        """
        return cls(load_notification_config(environ))

    def handle(
        self,
        stream: Any,
        blob_name: str,
        metadata: Optional[Mapping[str, str]],
        blob_trigger: Optional[str] = None,
    ) -> None:
        """Process one uploaded blob. Never raises.

        Args:
            stream: Blob content stream (not read)
            blob_name: Blob name within the watched container
            metadata: Metadata attached to the blob at upload time
            blob_trigger: Raw trigger path, "<container>/<blob>"
        """
        with log_context(blob_name=blob_name):
            self.logger.info(
                f"Blob trigger function processed blob\n Name: {blob_name}",
                extra={"event": "upload.received"},
            )

            try:
                event = UploadEvent(
                    blob_name=blob_name,
                    container_name=self.config.container_name,
                    metadata=metadata,
                    blob_path=blob_trigger,
                    content=stream,
                )
            except ValidationError as e:
                self.logger.error(
                    f"Ignoring malformed upload event: {e}",
                    extra={"event": "upload.invalid"},
                )
                return

            self._log_result(self.process(event))

    def process(self, event: UploadEvent) -> NotificationResult:
        """Run the notification flow for one event and report the outcome.

        Args:
            event: Upload event to notify about

        Returns:
            NotificationResult describing what happened
        """
        recipient = event.recipient
        if recipient is None:
            return NotificationResult.skipped(event.blob_name, SkipReason.MISSING_EMAIL)

        try:
            to_address = normalize_email(recipient)
        except ValueError:
            return NotificationResult.skipped(
                event.blob_name, SkipReason.INVALID_EMAIL, recipient=recipient
            )

        self.logger.debug(
            f"Sending email to: {to_address}",
            extra={"event": "notification.sending"},
        )

        try:
            download_url = self.signer.sign(event.container_name, event.blob_name)
            self.mail_sender.send_upload_notice(
                to_address,
                event.blob_name,
                download_url,
                link_validity=LINK_VALIDITY,
            )
        except NotificationError as e:
            return NotificationResult.failed(event.blob_name, to_address, e)

        return NotificationResult.sent(event.blob_name, to_address)

    def _log_result(self, result: NotificationResult) -> None:
        """Emit the single outcome log line for an invocation."""
        if result.status == NotificationStatus.SENT:
            self.logger.info(
                f"Email sent successfully to {result.recipient}",
                extra={"event": "notification.sent"},
            )
        elif result.reason == SkipReason.MISSING_EMAIL:
            self.logger.warning(
                "Email metadata not found.",
                extra={"event": "notification.skip", "reason": result.reason.value},
            )
        elif result.reason == SkipReason.INVALID_EMAIL:
            self.logger.warning(
                f"Invalid email address format: {result.recipient}",
                extra={"event": "notification.skip", "reason": result.reason.value},
            )
        else:
            self.logger.error(
                f"Failed to send email. Exception: {result.error}",
                extra={"event": "notification.failed", "error_kind": result.error_kind},
            )
