"""Newsletter utilities package."""

from .formatting import (
    format_job_for_newsletter,
    format_subscriber_count,
    generate_newsletter_subject,
    personalize_content,
    unsubscribe_header,
    validate_email,
)
from .schedule import next_monday, schedule_status
from .trigger import AUTO_SEND_PAYLOAD, trigger_weekly_newsletter

__all__ = [
    "AUTO_SEND_PAYLOAD",
    "format_job_for_newsletter",
    "format_subscriber_count",
    "generate_newsletter_subject",
    "next_monday",
    "personalize_content",
    "schedule_status",
    "trigger_weekly_newsletter",
    "unsubscribe_header",
    "validate_email",
]
