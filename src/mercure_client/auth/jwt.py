"""Publisher and subscriber JWT issuers (HS256 by default).

Tokens are signed on demand with PyJWT and never cached: the publish path
re-derives a token narrowed to the topic of every update.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar, Self

import jwt
from pydantic import SecretBytes

from mercure_client.auth.claims import Role, TokenClaims
from mercure_client.auth.cookie import check_max_age
from mercure_client.errors import InvalidToken, SigningError
from mercure_client.topic import Topic
from mercure_client.topic_selector import TopicSelector

DEFAULT_ALGORITHM = "HS256"


def _as_secret(secret: str | bytes | SecretBytes) -> SecretBytes:
    if isinstance(secret, SecretBytes):
        return secret
    if isinstance(secret, str):
        return SecretBytes(secret.encode())
    return SecretBytes(bytes(secret))


class _MercureJwt:
    """Shared signing logic. The secret is never part of ``repr()``."""

    _role: ClassVar[Role]

    __slots__ = ("_algorithm", "_claims", "_registered", "_secret")

    def __init__(
        self,
        secret: str | bytes | SecretBytes,
        claims: TokenClaims,
        *,
        algorithm: str,
        registered_claims: Mapping[str, Any] | None,
    ) -> None:
        self._secret = _as_secret(secret)
        self._claims = claims
        self._algorithm = algorithm
        self._registered = dict(registered_claims or {})

    @property
    def claims(self) -> TokenClaims:
        return self._claims

    @property
    def selectors(self) -> tuple[TopicSelector, ...]:
        return self._claims.selectors(self._role)

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def _time_claims(self) -> dict[str, Any]:
        return {}

    def to_compact_token(self) -> str:
        """Sign the claims and return the compact ``header.payload.signature`` form."""
        payload: dict[str, Any] = {**self._registered, **self._time_claims()}
        payload.update(self._claims.to_claim())
        try:
            return jwt.encode(payload, self._secret.get_secret_value(), algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as err:
            raise SigningError(f"failed to encode and sign JWT: {err}") from err

    def narrowed_for(self, topic: Topic) -> Self:
        """Return a copy whose selectors are restricted to those matching *topic*.

        Raises :class:`~mercure_client.errors.NoMatchingSelector` when the
        token cannot authorize every IRI of the topic.
        """
        narrowed = copy.copy(self)
        narrowed._claims = self._claims.narrowed(self._role, topic.iris)
        return narrowed

    def __repr__(self) -> str:
        selectors = [str(s) for s in self.selectors]
        return f"{type(self).__name__}(selectors={selectors!r}, algorithm={self._algorithm!r})"


class PublisherJwt(_MercureJwt):
    """A publisher JWT: ``mercure.publish`` set, never a subscriber payload."""

    _role = Role.PUBLISH

    __slots__ = ()

    def __init__(
        self,
        secret: str | bytes | SecretBytes,
        selectors: Iterable[TopicSelector],
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        registered_claims: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            secret,
            TokenClaims.for_publisher(selectors),
            algorithm=algorithm,
            registered_claims=registered_claims,
        )


class SubscriberJwt(_MercureJwt):
    """A subscriber JWT: ``mercure.subscribe`` set, optional ``payload``.

    These tokens SHOULD be short-lived, especially for web browsers; pass
    ``max_age`` to add an ``exp`` claim computed at signing time.
    """

    _role = Role.SUBSCRIBE

    __slots__ = ("_max_age",)

    def __init__(
        self,
        secret: str | bytes | SecretBytes,
        selectors: Iterable[TopicSelector],
        *,
        payload: Any = None,
        max_age: timedelta | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
        registered_claims: Mapping[str, Any] | None = None,
    ) -> None:
        self._max_age = None if max_age is None else check_max_age(max_age)
        super().__init__(
            secret,
            TokenClaims.for_subscriber(selectors, payload=payload),
            algorithm=algorithm,
            registered_claims=registered_claims,
        )

    @property
    def max_age(self) -> timedelta | None:
        return self._max_age

    def _time_claims(self) -> dict[str, Any]:
        if self._max_age is None:
            return {}
        return {"exp": datetime.now(UTC) + self._max_age}


def decode_token(
    token: str,
    secret: str | bytes | SecretBytes,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    audience: str | None = None,
) -> TokenClaims:
    """Verify *token* and return its ``mercure`` claims."""
    key = _as_secret(secret).get_secret_value()
    try:
        payload = jwt.decode(
            token,
            key,
            algorithms=[algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token expired") from None
    except jwt.InvalidTokenError:
        raise InvalidToken("Invalid token") from None
    return TokenClaims.from_claim(payload)
