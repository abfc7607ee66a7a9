"""Weekly send schedule: newsletters go out on Mondays."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from ..models import ScheduleStatus
from ..settings import Settings, get_settings

MONDAY = 0


def next_monday(now: datetime) -> datetime:
    """The coming Monday at the same time of day; ``now`` itself on a Monday."""
    days_ahead = (MONDAY - now.weekday()) % 7
    return now + timedelta(days=days_ahead)


def schedule_status(
    now: Optional[datetime] = None, settings: Optional[Settings] = None
) -> ScheduleStatus:
    now = now or datetime.now(timezone.utc)
    settings = settings or get_settings()
    return ScheduleStatus(
        current_time=now,
        is_monday=now.weekday() == MONDAY,
        next_scheduled_send=next_monday(now),
        auto_send_enabled=settings.newsletter_auto_send,
    )
