"""The ``mercure`` private claim carried by publisher and subscriber JWTs."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from mercure_client.errors import EmptyClaims, InvalidTemplate, InvalidToken, NoMatchingSelector
from mercure_client.topic_selector import TopicSelector

MERCURE_CLAIM = "mercure"


class Role(str, Enum):
    """Which selector list a token is issued for."""

    PUBLISH = "publish"
    SUBSCRIBE = "subscribe"


class MercureClaimModel(BaseModel):
    """Typed representation of the ``mercure`` claim."""

    model_config = ConfigDict(extra="ignore")

    publish: list[str] | None = None
    subscribe: list[str] | None = None
    payload: Any = None


class JWTPayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mercure: MercureClaimModel


def _unique(selectors: Iterable[TopicSelector] | None) -> tuple[TopicSelector, ...] | None:
    if selectors is None:
        return None
    # de-duplicate preserving order
    unique = tuple(dict.fromkeys(selectors))
    return unique or None


@dataclass(frozen=True)
class TokenClaims:
    """Publish/subscribe selectors and the optional subscriber payload.

    At least one of ``publish`` and ``subscribe`` must be non-empty. Selector
    order is kept exactly as given (minus duplicates) so serialization is
    deterministic.
    """

    publish: tuple[TopicSelector, ...] | None = None
    subscribe: tuple[TopicSelector, ...] | None = None
    payload: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "publish", _unique(self.publish))
        object.__setattr__(self, "subscribe", _unique(self.subscribe))
        if self.publish is None and self.subscribe is None:
            raise EmptyClaims("token claims need at least one publish or subscribe selector")

    @classmethod
    def build(
        cls,
        publish: Iterable[TopicSelector] | None = None,
        subscribe: Iterable[TopicSelector] | None = None,
        payload: Any = None,
    ) -> TokenClaims:
        return cls(
            publish=None if publish is None else tuple(publish),
            subscribe=None if subscribe is None else tuple(subscribe),
            payload=payload,
        )

    @classmethod
    def for_publisher(cls, selectors: Iterable[TopicSelector]) -> TokenClaims:
        return cls.build(publish=selectors)

    @classmethod
    def for_subscriber(cls, selectors: Iterable[TopicSelector], payload: Any = None) -> TokenClaims:
        return cls.build(subscribe=selectors, payload=payload)

    def selectors(self, role: Role) -> tuple[TopicSelector, ...]:
        found = self.publish if role is Role.PUBLISH else self.subscribe
        return found or ()

    def narrowed(self, role: Role, iris: Sequence[str]) -> TokenClaims:
        """Keep only the ``role`` selectors matching at least one of ``iris``.

        Every IRI must be matched by some selector, otherwise the hub would
        refuse the update anyway.
        """
        selectors = self.selectors(role)
        kept = tuple(s for s in selectors if any(s.matches(iri) for iri in iris))
        if not kept:
            raise NoMatchingSelector(
                f"no {role.value} selector matches topic {iris[0] if iris else ''!r}"
            )
        for iri in iris:
            if not any(s.matches(iri) for s in kept):
                raise NoMatchingSelector(f"no {role.value} selector matches topic {iri!r}")
        return replace(self, **{role.value: kept})

    def to_claim(self) -> dict[str, Any]:
        """Return the ``{"mercure": {...}}`` claim, omitting absent keys."""
        mercure: dict[str, Any] = {}
        if self.publish is not None:
            mercure["publish"] = [str(s) for s in self.publish]
        if self.subscribe is not None:
            mercure["subscribe"] = [str(s) for s in self.subscribe]
        if self.payload is not None:
            mercure["payload"] = self.payload
        return {MERCURE_CLAIM: mercure}

    @classmethod
    def from_claim(cls, payload: Mapping[str, Any]) -> TokenClaims:
        """Parse a decoded JWT payload containing the ``mercure`` claim."""
        try:
            parsed = JWTPayloadModel.model_validate(payload)
        except PydanticValidationError as err:
            raise InvalidToken("token payload has no valid mercure claim") from err
        claim = parsed.mercure
        try:
            return cls.build(
                publish=None if claim.publish is None else map(TopicSelector.parse, claim.publish),
                subscribe=(
                    None if claim.subscribe is None else map(TopicSelector.parse, claim.subscribe)
                ),
                payload=claim.payload,
            )
        except (InvalidTemplate, EmptyClaims) as err:
            raise InvalidToken(f"token has an unusable mercure claim: {err.detail}") from err
