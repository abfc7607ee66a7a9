#!/usr/bin/env python3
"""
SixFigJob integrations - HTTP entry point
Routes scheduler and site requests: health check → newsletter cron trigger → schedule status → welcome email
"""

import asyncio
import os
from datetime import datetime

import functions_framework
import structlog
from flask import jsonify

from sixfigjob import (
    ConfigurationError,
    get_settings,
    schedule_status,
    send_welcome_email,
    trigger_weekly_newsletter,
)
from sixfigjob.logging_utils import setup_logging
from sixfigjob.newsletter import validate_email

setup_logging()
logger = structlog.get_logger(__name__)


def _bearer_matches(request, secret: str) -> bool:
    return bool(secret) and request.headers.get("Authorization", "") == f"Bearer {secret}"


# Main Cloud Function endpoint with routing
@functions_framework.http
def main_handler(request):
    """Main HTTP endpoint that routes to different functions based on path"""

    path = request.path.rstrip("/")
    method = request.method

    logger.info("http_request", method=method, path=path, timestamp=datetime.now().isoformat())

    if path == "":
        # Health check
        if method == "GET":
            return {
                "status": "healthy",
                "service": "sixfigjob-integrations",
                "timestamp": datetime.now().isoformat(),
            }, 200
        return {"error": "Method not allowed"}, 405

    elif path == "/cron/newsletter":
        if method in ("GET", "POST"):
            return handle_newsletter_cron(request)
        return {"error": "Method not allowed"}, 405

    elif path == "/newsletter/schedule-status":
        if method == "GET":
            return handle_schedule_status(request)
        return {"error": "Method not allowed"}, 405

    elif path == "/newsletter/welcome":
        if method == "POST":
            return handle_welcome(request)
        return {"error": "Method not allowed"}, 405

    return {"error": "Not found"}, 404


def handle_newsletter_cron(request):
    """Run the weekly newsletter trigger on behalf of the scheduler."""
    if not _bearer_matches(request, get_settings().cron_secret):
        logger.warning("cron_unauthorized", source=request.headers.get("User-Agent", "unknown"))
        return {"error": "Unauthorized"}, 401

    logger.info("newsletter_cron_started", timestamp=datetime.now().isoformat())

    try:
        result = asyncio.run(trigger_weekly_newsletter())
    except Exception as exc:  # noqa: BLE001
        logger.exception("newsletter_cron_failed", error=str(exc))
        return {
            "success": False,
            "error": str(exc),
            "timestamp": datetime.now().isoformat(),
        }, 500

    if isinstance(result, dict) and "error" in result:
        logger.error("newsletter_cron_upstream_error", error=str(result["error"]))
        return jsonify(
            {
                "success": False,
                "error": result["error"],
                "upstream": result,
                "timestamp": datetime.now().isoformat(),
            }
        ), 500

    logger.info("newsletter_cron_completed")
    return jsonify(result), 200


def handle_schedule_status(request):
    """Report whether today is a send day and when the next send is due."""
    secret = get_settings().newsletter_api_secret
    auth_header = request.headers.get("Authorization", "")
    if not secret or secret not in auth_header:
        return {"error": "Unauthorized"}, 401

    status = schedule_status()
    return status.model_dump(mode="json", by_alias=True), 200


def handle_welcome(request):
    """Send the welcome email to a new subscriber."""
    payload = request.get_json(silent=True) or {}
    email = (payload.get("email") or "").strip()
    first_name = payload.get("firstName")

    if not email:
        return {"error": "Email required"}, 400
    if not validate_email(email):
        return {"error": "Invalid email format"}, 400

    try:
        send_welcome_email(email, first_name)
    except ConfigurationError as exc:
        logger.error("welcome_email_misconfigured", error=str(exc))
        return {"error": "Failed to send welcome email"}, 500
    except Exception as exc:  # noqa: BLE001
        logger.exception("welcome_email_failed", error=str(exc))
        return {"error": "Failed to send welcome email"}, 500

    return {"success": True}, 200


if __name__ == "__main__":
    if os.getenv("PORT") or os.getenv("FUNCTION_TARGET"):
        logger.info("cloud_environment_detected")
    else:
        # Running locally - fire the trigger once
        print(asyncio.run(trigger_weekly_newsletter()))
