# File: brandsense/services/email_service.py

"""
Outgoing mail through the Resend API.

Without ``RESEND_API_KEY`` the service is disabled and ``send`` reports a
skipped delivery instead of raising.
"""

import html
import logging
from dataclasses import dataclass
from typing import Optional

import resend

from brandsense.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class EmailResult:
    """Result of an email send operation."""
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class EmailService:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.enabled = bool(self.settings.resend_api_key)
        if not self.enabled:
            logger.warning("RESEND_API_KEY not configured - emails will not be sent")

    def send(self, *, to: str, subject: str, html_body: str) -> EmailResult:
        if not self.enabled:
            return EmailResult(success=False, error="Email service disabled")

        resend.api_key = self.settings.resend_api_key
        try:
            response = resend.Emails.send(
                {
                    "from": self.settings.feedback_sender,
                    "to": [to],
                    "subject": subject,
                    "html": html_body,
                }
            )
        except Exception as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return EmailResult(success=False, error=str(e))

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info("Email sent to %s (id=%s)", to, message_id)
        return EmailResult(success=True, message_id=message_id)


def render_feedback_email(*, feedback: str, rating: int, user_email: Optional[str], user_name: Optional[str]) -> str:
    sender = f"{html.escape(user_name or 'Anonymous')} ({html.escape(user_email or 'no email')})"
    body = html.escape(feedback).replace("\n", "<br>")
    return (
        "<h2>New Feedback Received</h2>"
        f"<p><strong>From:</strong> {sender}</p>"
        f"<p><strong>Rating:</strong> {rating}/10</p>"
        "<p><strong>Feedback:</strong></p>"
        f"<p>{body}</p>"
        "<hr>"
        '<p style="color: #888; font-size: 12px;">Sent via Brand Sense Feedback System</p>'
    )
