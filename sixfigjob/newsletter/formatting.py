"""Helpers for composing newsletter subjects, job cards and recipient text."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional, Union
from urllib.parse import quote

import bleach
from markupsafe import Markup

from ..models import NewsletterJob
from ..settings import get_settings
from .templates import JOB_CARD_TEMPLATE, render_template

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ALLOWED_TAGS = ["p", "br", "strong", "em", "a", "ul", "li"]
ALLOWED_ATTRIBUTES = {"a": ["href", "title"]}

FIRST_NAME_PLACEHOLDER = "{{firstName}}"
EMAIL_PLACEHOLDER = "{{email}}"


def generate_newsletter_subject(new_jobs_count: int, issue_date: date) -> str:
    """Subject line such as ``12 New Six-Figure Jobs This Week • Oct 19``."""
    date_str = f"{issue_date:%b} {issue_date.day}"
    return f"{new_jobs_count} New Six-Figure Jobs This Week • {date_str}"


def sanitize_description(content: str) -> str:
    """Strip a job description down to a small set of inline-safe tags."""
    return bleach.clean(content, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES, strip=True)


def format_job_for_newsletter(
    job: Union[NewsletterJob, dict], base_url: Optional[str] = None
) -> str:
    """Render one job as an inline-styled HTML card."""
    if isinstance(job, dict):
        job = NewsletterJob(**job)

    base_url = (base_url or get_settings().site_base_url).rstrip("/")
    return render_template(
        JOB_CARD_TEMPLATE,
        job=job,
        description=Markup(sanitize_description(job.ShortDescription or "")),
        job_url=f"{base_url}/jobs/{quote(job.slug)}",
    )


def validate_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def format_subscriber_count(count: int) -> str:
    """Compact display form: 999, 1.5K, 2.0M."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def personalize_content(html_content: str, first_name: Optional[str], email: str) -> str:
    """Fill the first occurrence of each recipient placeholder."""
    return html_content.replace(FIRST_NAME_PLACEHOLDER, first_name or "there", 1).replace(
        EMAIL_PLACEHOLDER, email, 1
    )


def unsubscribe_url(email: str, base_url: Optional[str] = None) -> str:
    base_url = (base_url or get_settings().site_base_url).rstrip("/")
    return f"{base_url}/unsubscribe?email={quote(email, safe='')}"


def unsubscribe_header(email: str, base_url: Optional[str] = None) -> dict:
    """``List-Unsubscribe`` header for a newsletter send."""
    return {"List-Unsubscribe": f"<{unsubscribe_url(email, base_url)}>"}
