"""Authorization: the ``mercure`` claim and publisher/subscriber JWTs."""

from mercure_client.auth.claims import Role, TokenClaims
from mercure_client.auth.cookie import (
    MAX_AGE_LIMIT,
    MERCURE_AUTHORIZATION_COOKIE_NAME,
    authorization_cookie,
)
from mercure_client.auth.jwt import PublisherJwt, SubscriberJwt, decode_token

__all__ = [
    "MAX_AGE_LIMIT",
    "MERCURE_AUTHORIZATION_COOKIE_NAME",
    "PublisherJwt",
    "Role",
    "SubscriberJwt",
    "TokenClaims",
    "authorization_cookie",
    "decode_token",
]
