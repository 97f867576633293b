"""Exception hierarchy shared by every mercure_client module.

Every error carries a human-readable ``detail``. Library exceptions that
caused a failure are chained via ``raise ... from err``.
"""

from __future__ import annotations


class MercureError(Exception):
    """Base class for all errors raised by mercure_client."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


# ── Validation (permanent, raised at construction) ────────────────────────


class ValidationError(MercureError):
    """A value was rejected before any token or request was produced."""


class InvalidHubUrl(ValidationError):
    """The URL does not point at a Mercure hub endpoint."""


class InvalidTemplate(ValidationError):
    """A topic selector is not a valid URI Template."""


class InvalidTopic(ValidationError):
    """A topic IRI is empty or not an absolute URL."""


class InvalidMaxAge(ValidationError):
    """A subscriber token lifetime is out of range."""


# ── Tokens ────────────────────────────────────────────────────────────────


class TokenError(MercureError):
    """Raised when building, signing or verifying a token fails."""


class EmptyClaims(TokenError):
    """Neither ``publish`` nor ``subscribe`` selectors were given."""


class NoMatchingSelector(TokenError):
    """No selector of the token authorizes the requested topic."""


class SigningError(TokenError):
    """The signing key is unusable for the configured algorithm."""


class InvalidToken(TokenError):
    """A token failed signature verification or claim parsing."""


# ── Publishing ────────────────────────────────────────────────────────────


class PublishError(MercureError):
    """Raised when an update could not be published."""


class Unauthorized(PublishError):
    """The publisher is not allowed to publish to the topic.

    ``status_code`` is ``None`` when the client refused to send the request
    itself, otherwise the hub's 401 or 403 status.
    """

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)


class HubRejected(PublishError):
    """The hub answered with a non-2xx status other than 401/403."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"hub rejected update with status {status_code}")


class TransportError(PublishError):
    """The request could not be sent or the response could not be read."""
