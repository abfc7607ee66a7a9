import os

import pytest
from google.api_core.exceptions import NotFound, PermissionDenied
from google.auth.exceptions import DefaultCredentialsError

from sixfigjob.settings import (
    DEFAULT_NEWSLETTER_FROM,
    ConfigurationError,
    Settings,
    get_settings,
    resolve_secret,
)


def test_from_env_reads_values(monkeypatch):
    monkeypatch.setenv("PUBLIC_DOMAIN", " https://sixfigjob.com ")
    monkeypatch.setenv("NEWSLETTER_API_SECRET", "nl-secret")
    monkeypatch.setenv("RESEND_API_KEY", "re_123")
    monkeypatch.setenv("PUBLIC_GA_ID", "G-TEST")
    monkeypatch.setenv("NEWSLETTER_AUTO_SEND", "TRUE")

    settings = Settings.from_env()

    assert settings.public_domain == "https://sixfigjob.com"
    assert settings.newsletter_api_secret == "nl-secret"
    assert settings.resend_api_key == "re_123"
    assert settings.ga_id == "G-TEST"
    assert settings.newsletter_auto_send is True
    assert settings.newsletter_from_email == DEFAULT_NEWSLETTER_FROM


def test_from_env_defaults():
    settings = Settings.from_env()

    assert settings.public_domain == ""
    assert settings.ga_id == ""
    assert settings.newsletter_auto_send is False
    assert settings.site_base_url == "http://localhost:3000"


def test_require_raises_configuration_error():
    settings = Settings()

    with pytest.raises(ConfigurationError, match="NEWSLETTER_API_SECRET is not set"):
        settings.require("newsletter_api_secret")
    with pytest.raises(ConfigurationError, match="PUBLIC_GA_ID"):
        settings.require("ga_id")


def test_require_returns_value():
    assert Settings(public_domain="https://x.io").require("public_domain") == "https://x.io"


def test_configuration_error_is_runtime_error():
    assert issubclass(ConfigurationError, RuntimeError)


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("PUBLIC_GA_ID", "G-ONE")
    first = get_settings()
    monkeypatch.setenv("PUBLIC_GA_ID", "G-TWO")

    assert get_settings() is first
    assert get_settings().ga_id == "G-ONE"


def test_resolve_secret_skips_manager_when_disabled(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("secret manager must not be called")

    monkeypatch.setattr("sixfigjob.settings.access_secret_version", fail)

    assert resolve_secret("CRON_SECRET") == ""


def test_resolve_secret_prefers_environment(monkeypatch):
    monkeypatch.setenv("SECRET_MANAGER_ENABLED", "true")
    monkeypatch.setenv("CRON_SECRET", "from-env")
    monkeypatch.setattr(
        "sixfigjob.settings.access_secret_version",
        lambda *a, **k: pytest.fail("unexpected lookup"),
    )

    assert resolve_secret("CRON_SECRET") == "from-env"


def test_resolve_secret_missing_in_manager(monkeypatch):
    monkeypatch.setenv("SECRET_MANAGER_ENABLED", "true")
    monkeypatch.setattr("sixfigjob.settings.access_secret_version", lambda *a, **k: None)

    assert resolve_secret("CRON_SECRET") == ""


class _NoCredentialsClient:
    def __init__(self, *args, **kwargs):
        raise DefaultCredentialsError("File /nonexistent.json was not found.")


def _client_raising(error):
    class _Client:
        def access_secret_version(self, request):
            raise error

    return _Client


@pytest.fixture
def secret_manager_on(monkeypatch):
    monkeypatch.setenv("SECRET_MANAGER_ENABLED", "true")
    monkeypatch.setenv("GCP_PROJECT_ID", "sixfigjob-test")


def test_resolve_secret_without_credentials_is_unset(secret_manager_on, monkeypatch):
    monkeypatch.setattr(
        "sixfigjob.settings.secretmanager.SecretManagerServiceClient", _NoCredentialsClient
    )

    assert resolve_secret("RESEND_API_KEY") == ""


@pytest.mark.parametrize(
    "error",
    [
        NotFound("Secret [resend-api-key] not found"),
        PermissionDenied("Permission denied on secret"),
    ],
)
def test_resolve_secret_api_errors_are_unset(secret_manager_on, monkeypatch, error):
    monkeypatch.setattr(
        "sixfigjob.settings.secretmanager.SecretManagerServiceClient", _client_raising(error)
    )

    assert resolve_secret("RESEND_API_KEY") == ""


def test_get_settings_survives_secret_manager_errors(secret_manager_on, monkeypatch):
    monkeypatch.setenv("PUBLIC_GA_ID", "G-TEST")
    monkeypatch.setattr(
        "sixfigjob.settings.secretmanager.SecretManagerServiceClient", _NoCredentialsClient
    )

    settings = get_settings()

    assert settings.ga_id == "G-TEST"
    assert settings.resend_api_key == ""
    with pytest.raises(ConfigurationError):
        settings.require("cron_secret")


def test_environment_is_isolated_from_developer_shell():
    for name in ("GCP_PROJECT_ID", "EMAIL_TEMPLATES_DIR", "LOG_LEVEL", "SECRET_MANAGER_ENABLED"):
        assert os.getenv(name) is None
