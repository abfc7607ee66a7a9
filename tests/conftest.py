from pathlib import Path

import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sixfigjob.settings import get_settings

MANAGED_ENV = (
    "PUBLIC_DOMAIN",
    "NEWSLETTER_API_SECRET",
    "RESEND_API_KEY",
    "PUBLIC_GA_ID",
    "CRON_SECRET",
    "NEWSLETTER_FROM_EMAIL",
    "WELCOME_FROM_EMAIL",
    "NEWSLETTER_AUTO_SEND",
    "SECRET_MANAGER_ENABLED",
    "GCP_PROJECT_ID",
    "EMAIL_TEMPLATES_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate every test from the developer's environment and cached settings."""
    for name in MANAGED_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
