"""Contact-form notifications via the Mailjet send API."""

import html
import logging

import httpx

from src.config import Settings, get_settings
from src.services.errors import DeliveryFailed

logger = logging.getLogger(__name__)


class MailjetNotifier:
    """Forward contact-form submissions to the site inbox."""

    def __init__(self, settings: Settings | None = None, timeout: float = 10.0) -> None:
        self.settings = settings or get_settings()
        self.timeout = timeout

    def build_message(self, name: str, email: str, subject: str, message: str) -> dict:
        """Build the Mailjet v3.1 payload for one submission."""
        rows = [("Name", name), ("Email", email), ("Subject", subject), ("Message", message)]
        html_part = "\n".join(
            f"<p>{label}: {html.escape(value or '')}</p>" for label, value in rows
        )
        return {
            "Messages": [
                {
                    "From": {
                        "Email": self.settings.contact_from_email,
                        "Name": self.settings.contact_from_name,
                    },
                    "To": [{"Email": self.settings.contact_to_email}],
                    "ReplyTo": {"Email": email, "Name": name},
                    "Subject": self.settings.contact_subject,
                    "TextPart": "You received a new form submission:\n"
                    + "\n".join(f"{label}: {value}" for label, value in rows),
                    "HTMLPart": html_part,
                }
            ]
        }

    async def notify(self, name: str, email: str, subject: str, message: str) -> None:
        """Send one contact-form submission.

        Raises:
            DeliveryFailed: Mailjet is not configured or rejected the message
        """
        if not self.settings.mailjet_configured:
            logger.error("Mailjet credentials not configured, contact form disabled")
            raise DeliveryFailed()

        payload = self.build_message(name, email, subject, message)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.settings.mailjet_api_url,
                    json=payload,
                    auth=(self.settings.mailjet_api_key, self.settings.mailjet_api_secret),
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Mailjet: {e}")
            raise DeliveryFailed() from e

        logger.info(f"Contact form submission from {email} delivered")
