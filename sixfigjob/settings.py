"""Configuration and shared settings for the SixFigJob integrations."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

import structlog
from dotenv import load_dotenv
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import secretmanager
from pydantic import BaseModel, Field

load_dotenv()

logger = structlog.get_logger(__name__)

DEFAULT_DOMAIN = "http://localhost:3000"
DEFAULT_NEWSLETTER_FROM = "JobBoard <newsletter@yourdomain.com>"
DEFAULT_WELCOME_FROM = "JobBoard <welcome@yourdomain.com>"

NEWSLETTER_SCHEDULE_PATH = "/api/newsletter/schedule"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing from the environment."""


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() == "true"


def access_secret_version(secret_id: str, version_id: str = "latest") -> Optional[bytes]:
    """Access the payload for the given secret version and return it."""
    client = secretmanager.SecretManagerServiceClient()

    project_id = os.getenv("GCP_PROJECT_ID")
    if not project_id:
        import google.auth

        _, project_id = google.auth.default()
        if not project_id:
            logger.error("gcp_project_unresolved", hint="Set GCP_PROJECT_ID env var")
            return None

    name = f"projects/{project_id}/secrets/{secret_id}/versions/{version_id}"

    response = client.access_secret_version(request={"name": name})
    return response.payload.data


def ga_id_from_env() -> str:
    """The public analytics id; never touches Secret Manager."""
    return os.getenv("PUBLIC_GA_ID", "").strip()


def _secret_id_for(env_name: str) -> str:
    # RESEND_API_KEY -> resend-api-key
    return env_name.strip().lower().replace("_", "-")


def resolve_secret(env_name: str) -> str:
    """Return a secret from the environment, falling back to Secret Manager.

    The fallback only runs when ``SECRET_MANAGER_ENABLED=true``. Lookup
    failures (missing credentials, unknown or forbidden secret) are logged and
    treated as unset; an empty string means the secret is not configured
    anywhere, and callers raise :class:`ConfigurationError` on it.
    """
    value = (os.getenv(env_name) or "").strip()
    if value or not _env_bool("SECRET_MANAGER_ENABLED"):
        return value

    secret_id = _secret_id_for(env_name)
    logger.info("secret_manager_lookup", secret_id=secret_id)
    try:
        payload = access_secret_version(secret_id)
    except (GoogleAPIError, DefaultCredentialsError) as exc:
        logger.warning(
            "secret_manager_lookup_failed",
            secret_id=secret_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return ""
    if not payload:
        return ""
    return payload.decode("utf-8").strip()


class Settings(BaseModel):
    """Process-wide configuration resolved once from the environment."""

    public_domain: str = Field(default="", description="Public base URL of the web app")
    newsletter_api_secret: str = Field(
        default="", description="Bearer secret for the newsletter schedule endpoint"
    )
    resend_api_key: str = Field(default="", description="Resend transactional email key")
    ga_id: str = Field(default="", description="Public Google Analytics measurement id")
    cron_secret: str = Field(default="", description="Bearer secret sent by the scheduler")
    newsletter_from_email: str = DEFAULT_NEWSLETTER_FROM
    welcome_from_email: str = DEFAULT_WELCOME_FROM
    newsletter_auto_send: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            public_domain=os.getenv("PUBLIC_DOMAIN", "").strip(),
            newsletter_api_secret=resolve_secret("NEWSLETTER_API_SECRET"),
            resend_api_key=resolve_secret("RESEND_API_KEY"),
            ga_id=ga_id_from_env(),
            cron_secret=resolve_secret("CRON_SECRET"),
            newsletter_from_email=os.getenv("NEWSLETTER_FROM_EMAIL", "").strip()
            or DEFAULT_NEWSLETTER_FROM,
            welcome_from_email=os.getenv("WELCOME_FROM_EMAIL", "").strip()
            or DEFAULT_WELCOME_FROM,
            newsletter_auto_send=_env_bool("NEWSLETTER_AUTO_SEND"),
        )

    @property
    def site_base_url(self) -> str:
        """Base URL for links in outgoing emails."""
        return (self.public_domain or DEFAULT_DOMAIN).rstrip("/")

    def require(self, field_name: str) -> str:
        """Return a configured value or raise :class:`ConfigurationError`."""
        value = getattr(self, field_name)
        if not value:
            env_name = _ENV_NAMES.get(field_name, field_name.upper())
            raise ConfigurationError(f"{env_name} is not set on the server environment")
        return value


_ENV_NAMES = {"ga_id": "PUBLIC_GA_ID"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build (or retrieve cached) settings for this process."""
    settings = Settings.from_env()
    logger.info(
        "settings_loaded",
        public_domain=settings.public_domain or None,
        analytics_configured=bool(settings.ga_id),
        auto_send=settings.newsletter_auto_send,
    )
    return settings
