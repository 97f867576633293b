"""A client implementation of the Mercure protocol.

Usage::

    import httpx
    from mercure_client import Client, HubUrl, PublisherJwt, Topic, Wildcard

    hub_url = HubUrl("https://localhost/.well-known/mercure")
    publisher_jwt = PublisherJwt(b"!ChangeThisMercureHubJWTSecretKey!", [Wildcard()])

    async with httpx.AsyncClient() as http_client:
        client = Client(http_client, hub_url, publisher_jwt)
        update_id = await client.publish_update(
            Topic("https://example.com/books/1"), '{"isbn":"9780735218789"}'
        )
"""

from mercure_client.auth.claims import TokenClaims
from mercure_client.auth.jwt import PublisherJwt, SubscriberJwt, decode_token
from mercure_client.client import Client, PublishUpdatePrivacy, UpdateId
from mercure_client.errors import (
    EmptyClaims,
    HubRejected,
    InvalidHubUrl,
    InvalidMaxAge,
    InvalidTemplate,
    InvalidToken,
    InvalidTopic,
    MercureError,
    NoMatchingSelector,
    PublishError,
    SigningError,
    TokenError,
    TransportError,
    Unauthorized,
    ValidationError,
)
from mercure_client.hub import HubUrl
from mercure_client.topic import Topic
from mercure_client.topic_selector import TopicSelector, UriTemplate, Wildcard
from mercure_client.version import __version__

__all__ = [
    "Client",
    "EmptyClaims",
    "HubRejected",
    "HubUrl",
    "InvalidHubUrl",
    "InvalidMaxAge",
    "InvalidTemplate",
    "InvalidToken",
    "InvalidTopic",
    "MercureError",
    "NoMatchingSelector",
    "PublishError",
    "PublishUpdatePrivacy",
    "PublisherJwt",
    "SigningError",
    "SubscriberJwt",
    "TokenClaims",
    "TokenError",
    "Topic",
    "TopicSelector",
    "TransportError",
    "Unauthorized",
    "UpdateId",
    "UriTemplate",
    "ValidationError",
    "Wildcard",
    "__version__",
    "decode_token",
]
