"""Outbound trigger for the weekly newsletter auto-send."""

from __future__ import annotations

from typing import Any, Optional

import httpx
import structlog

from ..settings import NEWSLETTER_SCHEDULE_PATH, Settings, get_settings

logger = structlog.get_logger(__name__)

AUTO_SEND_PAYLOAD = {"action": "auto-send"}


def schedule_endpoint(settings: Settings) -> str:
    return f"{settings.require('public_domain').rstrip('/')}{NEWSLETTER_SCHEDULE_PATH}"


async def trigger_weekly_newsletter(
    settings: Optional[Settings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Any:
    """POST an auto-send request to the newsletter schedule endpoint.

    Returns the endpoint's JSON body unchanged. The HTTP status is not
    inspected and nothing is retried: transport errors and non-JSON bodies
    propagate to the caller as raised by httpx.
    """
    settings = settings or get_settings()
    url = schedule_endpoint(settings)
    headers = {
        "Authorization": f"Bearer {settings.require('newsletter_api_secret')}",
        "Content-Type": "application/json",
    }

    logger.info("newsletter_trigger_start", url=url)

    if client is None:
        async with httpx.AsyncClient(timeout=None) as owned_client:
            response = await owned_client.post(url, json=AUTO_SEND_PAYLOAD, headers=headers)
    else:
        response = await client.post(url, json=AUTO_SEND_PAYLOAD, headers=headers)

    logger.info("newsletter_trigger_response", status_code=response.status_code)
    return response.json()
