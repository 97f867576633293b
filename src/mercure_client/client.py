"""Publishing updates to a Mercure hub.

The wire format is a form-encoded ``POST`` to the hub URL authorized with a
publisher JWT narrowed to the update's topic.
"""

from __future__ import annotations

import enum
import logging
from typing import NewType
from urllib.parse import urlencode

import httpx

from mercure_client.auth.jwt import PublisherJwt
from mercure_client.errors import (
    HubRejected,
    NoMatchingSelector,
    TransportError,
    Unauthorized,
)
from mercure_client.hub import HubUrl
from mercure_client.obs.redaction import redact_headers, redact_value
from mercure_client.topic import Topic

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Any non-empty value marks an update as private; absence means public.
PRIVATE_FLAG = "on"

UpdateId = NewType("UpdateId", str)


class PublishUpdatePrivacy(enum.Enum):
    """Whether an update is delivered only to authorized subscribers."""

    PUBLIC = "public"
    PRIVATE = "private"


def build_publish_form(
    topic: Topic,
    data: str | None = None,
    privacy: PublishUpdatePrivacy = PublishUpdatePrivacy.PUBLIC,
    *,
    update_id: str | None = None,
    event_type: str | None = None,
    retry: int | None = None,
) -> list[tuple[str, str]]:
    """Return the ordered form fields of a publish request."""
    fields = [("topic", iri) for iri in topic.iris]
    if data is not None:
        fields.append(("data", data))
    if privacy is PublishUpdatePrivacy.PRIVATE:
        fields.append(("private", PRIVATE_FLAG))
    if update_id is not None:
        fields.append(("id", update_id))
    if event_type is not None:
        fields.append(("type", event_type))
    if retry is not None:
        fields.append(("retry", str(retry)))
    return fields


def encode_publish_body(
    topic: Topic,
    data: str | None = None,
    privacy: PublishUpdatePrivacy = PublishUpdatePrivacy.PUBLIC,
    *,
    update_id: str | None = None,
    event_type: str | None = None,
    retry: int | None = None,
) -> str:
    """``application/x-www-form-urlencoded`` body of a publish request."""
    fields = build_publish_form(
        topic, data, privacy, update_id=update_id, event_type=event_type, retry=retry
    )
    return urlencode(fields)


class Client:
    """Mercure publisher client.

    Holds no mutable state: the same instance can serve concurrent
    :meth:`publish_update` calls. The ``httpx.AsyncClient`` is owned by the
    caller, who is responsible for closing it.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        hub_url: HubUrl,
        publisher_jwt: PublisherJwt,
    ) -> None:
        self._http_client = http_client
        self._hub_url = hub_url
        self._publisher_jwt = publisher_jwt

    @property
    def hub_url(self) -> HubUrl:
        return self._hub_url

    @property
    def publisher_jwt(self) -> PublisherJwt:
        return self._publisher_jwt

    async def publish_update(
        self,
        topic: Topic,
        data: str | None = None,
        privacy: PublishUpdatePrivacy = PublishUpdatePrivacy.PUBLIC,
        *,
        update_id: str | None = None,
        event_type: str | None = None,
        retry: int | None = None,
    ) -> UpdateId:
        """Publish an update and return the identifier assigned by the hub.

        Raises
        ------
        Unauthorized
            The token has no selector for the topic (nothing is sent), or the
            hub answered 401/403.
        HubRejected
            Any other non-2xx status.
        TransportError
            The request could not be sent or the response could not be read.
        SigningError
            The publisher secret is unusable.
        """
        try:
            jwt = self._publisher_jwt.narrowed_for(topic)
        except NoMatchingSelector as err:
            raise Unauthorized(err.detail) from err

        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "Authorization": f"Bearer {jwt.to_compact_token()}",
        }
        body = encode_publish_body(
            topic,
            data,
            privacy,
            update_id=update_id,
            event_type=event_type,
            retry=retry,
        )

        logger.debug(
            "publishing update to %s topics=%s privacy=%s headers=%s",
            self._hub_url,
            list(topic.iris),
            privacy.value,
            redact_headers(headers),
        )

        try:
            response = await self._http_client.post(
                str(self._hub_url), headers=headers, content=body
            )
        except httpx.HTTPError as err:
            raise TransportError(f"failed to send request to Mercure hub: {err}") from err

        if response.status_code in (401, 403):
            logger.warning("hub refused update for %s: %s", topic, response.status_code)
            raise Unauthorized(
                f"hub refused update with status {response.status_code}",
                status_code=response.status_code,
            )
        if not response.is_success:
            logger.warning(
                "hub rejected update for %s: %s %s",
                topic,
                response.status_code,
                redact_value(response.text),
            )
            raise HubRejected(response.status_code, response.text)

        return UpdateId(response.text)
