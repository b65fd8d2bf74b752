"""Template rendering for upload notification emails using Jinja2."""

import logging
from typing import Dict

from jinja2 import (
    Environment,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from .models import NotificationTemplateError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders the upload notification subject and bodies.

    Templates live in the blob_notifier.notifications.email_templates
    package directory and are cached by the Jinja2 environment after the
    first load.
    """

    def __init__(
        self,
        template_dir: str = "email_templates",
        subject_template: str = "upload_subject.j2",
        html_template: str = "upload_body.html.j2",
        text_template: str = "upload_body.txt.j2",
    ):
        """Initialize template renderer with Jinja2 environment.

        Args:
            template_dir: Directory name within the notifications package
            subject_template: Filename of subject line template
            html_template: Filename of HTML body template
            text_template: Filename of plain text body template
        """
        self.subject_template_name = subject_template
        self.html_template_name = html_template
        self.text_template_name = text_template

        self.env = Environment(
            loader=PackageLoader("blob_notifier.notifications", template_dir),
            # Only the HTML body is escaped; the text body must keep raw URLs
            autoescape=select_autoescape(enabled_extensions=("html", "html.j2"), default=False),
            undefined=StrictUndefined,
        )

    def render(self, context: Dict) -> Dict[str, str]:
        """Render all email templates with the provided context.

        Args:
            context: Template variables (file_name, download_url, link_validity)

        Returns:
            Dictionary with "subject" (single line), "html_body" and "text_body"

        Raises:
            NotificationTemplateError: If template rendering fails
        """
        try:
            subject_template = self.env.get_template(self.subject_template_name)
            html_template = self.env.get_template(self.html_template_name)
            text_template = self.env.get_template(self.text_template_name)

            subject = subject_template.render(context).strip().replace("\n", " ")
            html_body = html_template.render(context)
            text_body = text_template.render(context)

        except TemplateError as e:
            logger.error(f"Template rendering failed: {e}", exc_info=True)
            raise NotificationTemplateError(f"Template rendering failed: {e}") from e

        logger.debug(f"Rendered templates for file: {context.get('file_name', 'unknown')}")

        return {
            "subject": subject,
            "html_body": html_body,
            "text_body": text_body,
        }
