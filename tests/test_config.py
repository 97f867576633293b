"""Tests for environment-driven settings."""

from __future__ import annotations

import json
from datetime import timedelta

import pytest

from mercure_client.auth.jwt import decode_token
from mercure_client.config import Settings
from mercure_client.errors import InvalidHubUrl
from mercure_client.hub import HubUrl
from mercure_client.topic_selector import UriTemplate, Wildcard

SECRET = "!ChangeThisMercureHubJWTSecretKey!"
HUB = "https://localhost/.well-known/mercure"


@pytest.fixture()
def settings_env(monkeypatch, no_mercure_env):
    monkeypatch.setenv("MERCURE_HUB_URL", HUB)
    monkeypatch.setenv("MERCURE_PUBLISHER_JWT_SECRET", SECRET)
    return monkeypatch


class TestSettings:
    def test_defaults(self, no_mercure_env):
        settings = Settings(_env_file=None)
        assert settings.hub_url == ""
        assert settings.http_timeout_seconds == 30.0
        assert settings.jwt_algorithm == "HS256"
        assert settings.publish_selectors == ["*"]
        assert settings.subscriber_jwt_max_age_seconds is None

    def test_from_env(self, settings_env):
        settings_env.setenv("MERCURE_HTTP_TIMEOUT_SECONDS", "5")
        settings_env.setenv(
            "MERCURE_PUBLISH_SELECTORS", json.dumps(["https://example.com/books/{id}"])
        )
        settings = Settings(_env_file=None)
        assert settings.effective_hub_url() == HubUrl(HUB)
        assert settings.http_timeout_seconds == 5.0
        assert settings.effective_publisher_jwt().selectors == (
            UriTemplate("https://example.com/books/{id}"),
        )

    def test_secret_not_in_repr(self, settings_env):
        assert SECRET not in repr(Settings(_env_file=None))


class TestEffectiveValues:
    def test_missing_hub_url(self, no_mercure_env):
        with pytest.raises(RuntimeError, match="MERCURE_HUB_URL"):
            Settings(_env_file=None).effective_hub_url()

    def test_invalid_hub_url(self, no_mercure_env):
        with pytest.raises(InvalidHubUrl):
            Settings(_env_file=None, hub_url="https://localhost/hub").effective_hub_url()

    def test_missing_publisher_secret(self, no_mercure_env):
        with pytest.raises(RuntimeError, match="MERCURE_PUBLISHER_JWT_SECRET"):
            Settings(_env_file=None).effective_publisher_jwt()

    def test_publisher_jwt(self, settings_env):
        publisher_jwt = Settings(_env_file=None).effective_publisher_jwt()
        assert publisher_jwt.selectors == (Wildcard(),)
        assert decode_token(publisher_jwt.to_compact_token(), SECRET).publish == (Wildcard(),)

    def test_subscriber_secret_falls_back(self, settings_env):
        settings = Settings(_env_file=None)
        assert settings.effective_subscriber_secret().get_secret_value() == SECRET

    def test_subscriber_secret_preferred(self, settings_env):
        settings_env.setenv("MERCURE_SUBSCRIBER_JWT_SECRET", "subscriber-secret-subscriber-xxxx")
        settings = Settings(_env_file=None)
        assert settings.effective_subscriber_secret().get_secret_value() == (
            "subscriber-secret-subscriber-xxxx"
        )

    def test_no_secret_at_all(self, no_mercure_env):
        with pytest.raises(RuntimeError, match="MERCURE_SUBSCRIBER_JWT_SECRET"):
            Settings(_env_file=None).effective_subscriber_secret()

    def test_subscriber_jwt_default_max_age(self, settings_env):
        settings_env.setenv("MERCURE_SUBSCRIBER_JWT_MAX_AGE_SECONDS", "600")
        subscriber_jwt = Settings(_env_file=None).subscriber_jwt(
            [Wildcard()], payload={"user": "1"}
        )
        assert subscriber_jwt.max_age == timedelta(minutes=10)
        claims = decode_token(subscriber_jwt.to_compact_token(), SECRET)
        assert claims.payload == {"user": "1"}

    def test_subscriber_jwt_explicit_max_age(self, settings_env):
        settings_env.setenv("MERCURE_SUBSCRIBER_JWT_MAX_AGE_SECONDS", "600")
        subscriber_jwt = Settings(_env_file=None).subscriber_jwt(
            [Wildcard()], max_age=timedelta(minutes=1)
        )
        assert subscriber_jwt.max_age == timedelta(minutes=1)
