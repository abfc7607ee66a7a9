"""SixFigJob integration glue: settings, analytics, email and newsletter trigger."""

from .analytics import Analytics, DataLayer, build_page_url, get_analytics, is_ga_enabled
from .mailer import ResendClient, get_resend, send_welcome_email
from .models import NewsletterJob, NewsletterStats, ScheduleStatus, UserProfile
from .newsletter import schedule_status, trigger_weekly_newsletter
from .settings import ConfigurationError, Settings, get_settings

__all__ = [
    "Analytics",
    "ConfigurationError",
    "DataLayer",
    "NewsletterJob",
    "NewsletterStats",
    "ResendClient",
    "ScheduleStatus",
    "Settings",
    "UserProfile",
    "build_page_url",
    "get_analytics",
    "get_resend",
    "get_settings",
    "is_ga_enabled",
    "schedule_status",
    "send_welcome_email",
    "trigger_weekly_newsletter",
]
