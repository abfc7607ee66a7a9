"""Transactional email delivery through Resend."""

from __future__ import annotations

from typing import Any, Dict, Optional

import resend
import structlog

from .newsletter.formatting import unsubscribe_url, validate_email
from .newsletter.templates import WELCOME_TEMPLATE, render_template
from .settings import ConfigurationError, get_settings, resolve_secret

logger = structlog.get_logger(__name__)

WELCOME_SUBJECT = "🎉 Welcome to Six-Figure Jobs Newsletter!"

WELCOME_FEATURES = (
    ("Curated Opportunities", "Hand-picked jobs paying $100K+ from top companies across various industries"),
    ("Weekly Delivery", "Fresh opportunities delivered every Monday morning to start your week right"),
    ("Career Insights", "Salary trends, interview tips, and career advancement strategies"),
    ("No Spam Promise", "Quality over quantity. Unsubscribe anytime with one click"),
)


class ResendClient:
    """Resend client bound to a single API key.

    The SDK keeps its key in module state, so ``send`` rebinds it on every
    call. Clients holding different keys must not send concurrently from
    the same process.
    """

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def send(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Send one email and return the provider response (contains ``id``)."""
        resend.api_key = self.api_key
        return resend.Emails.send(params)


def get_resend() -> ResendClient:
    """Return a new client for the configured key, failing fast when it is absent."""
    api_key = resolve_secret("RESEND_API_KEY")
    if not api_key:
        raise ConfigurationError("RESEND_API_KEY is not set on the server environment")
    return ResendClient(api_key)


def send_welcome_email(
    email: str,
    first_name: Optional[str] = None,
    *,
    client: Optional[ResendClient] = None,
) -> Dict[str, Any]:
    """Send the subscription welcome email."""
    if not validate_email(email):
        raise ValueError("Invalid email format")

    settings = get_settings()
    client = client or get_resend()

    html = render_template(
        WELCOME_TEMPLATE,
        first_name=first_name,
        features=WELCOME_FEATURES,
        base_url=settings.site_base_url,
        unsubscribe_url=unsubscribe_url(email, settings.site_base_url),
    )

    result = client.send(
        {
            "from": settings.welcome_from_email,
            "to": [email],
            "subject": WELCOME_SUBJECT,
            "html": html,
        }
    )
    logger.info("welcome_email_sent", message_id=result.get("id", "unknown"))
    return result
