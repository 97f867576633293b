"""Environment-driven configuration using pydantic-settings."""

from __future__ import annotations

from datetime import timedelta

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from mercure_client.auth.jwt import PublisherJwt, SubscriberJwt
from mercure_client.hub import HubUrl
from mercure_client.topic_selector import TopicSelector


class Settings(BaseSettings):
    """Client configuration. All values can be overridden via env vars prefixed ``MERCURE_``."""

    model_config = SettingsConfigDict(
        env_prefix="MERCURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- hub ---
    hub_url: str = ""
    http_timeout_seconds: float = 30.0

    # --- JWT ---
    publisher_jwt_secret: SecretStr = SecretStr("")
    subscriber_jwt_secret: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    publish_selectors: list[str] = ["*"]
    subscriber_jwt_max_age_seconds: int | None = None

    def effective_hub_url(self) -> HubUrl:
        """Return the validated hub URL."""
        if not self.hub_url:
            raise RuntimeError("MERCURE_HUB_URL must be set.")
        return HubUrl(self.hub_url)

    def effective_publisher_jwt(self) -> PublisherJwt:
        """Return a publisher JWT over the configured selectors."""
        secret = self.publisher_jwt_secret.get_secret_value()
        if not secret:
            raise RuntimeError("MERCURE_PUBLISHER_JWT_SECRET must be set.")
        return PublisherJwt(
            secret,
            [TopicSelector.parse(s) for s in self.publish_selectors],
            algorithm=self.jwt_algorithm,
        )

    def effective_subscriber_secret(self) -> SecretStr:
        """Return the subscriber secret, falling back to the publisher one."""
        if self.subscriber_jwt_secret.get_secret_value():
            return self.subscriber_jwt_secret
        if self.publisher_jwt_secret.get_secret_value():
            return self.publisher_jwt_secret
        raise RuntimeError(
            "MERCURE_SUBSCRIBER_JWT_SECRET (or MERCURE_PUBLISHER_JWT_SECRET) must be set."
        )

    def subscriber_jwt(
        self,
        selectors: list[TopicSelector],
        *,
        payload: object = None,
        max_age: timedelta | None = None,
    ) -> SubscriberJwt:
        """Build a subscriber JWT, defaulting ``max_age`` to the configured one."""
        if max_age is None and self.subscriber_jwt_max_age_seconds is not None:
            max_age = timedelta(seconds=self.subscriber_jwt_max_age_seconds)
        return SubscriberJwt(
            self.effective_subscriber_secret().get_secret_value(),
            selectors,
            payload=payload,
            max_age=max_age,
            algorithm=self.jwt_algorithm,
        )
