"""Helpers for handing subscriber JWTs to web browsers as cookies.

Browsers SHOULD send the JWS in a cookie named ``mercureAuthorization``
when connecting to the hub.
"""

from __future__ import annotations

from datetime import timedelta
from http.cookies import SimpleCookie

from mercure_client.errors import InvalidMaxAge
from mercure_client.hub import WELL_KNOWN_PATH

MERCURE_AUTHORIZATION_COOKIE_NAME = "mercureAuthorization"

# RFC 6265bis, Section 5.5: user agents cap cookie lifetimes at 400 days.
MAX_AGE_LIMIT = timedelta(days=400)

_SAMESITE = frozenset({"strict", "lax", "none"})


def check_max_age(max_age: timedelta) -> timedelta:
    """Return *max_age* if it is a usable token/cookie lifetime."""
    if max_age <= timedelta(0):
        raise InvalidMaxAge("max age must be positive")
    if max_age > MAX_AGE_LIMIT:
        raise InvalidMaxAge("max age must not be more than 400 days")
    return max_age


def authorization_cookie(
    token: str,
    *,
    max_age: timedelta | None = None,
    path: str = WELL_KNOWN_PATH,
    domain: str | None = None,
    secure: bool = True,
    samesite: str = "strict",
) -> str:
    """Build a ``Set-Cookie`` header value carrying a subscriber JWT."""
    if samesite.lower() not in _SAMESITE:
        raise ValueError(f"invalid SameSite value: {samesite!r}")

    cookie: SimpleCookie = SimpleCookie()
    cookie[MERCURE_AUTHORIZATION_COOKIE_NAME] = token
    morsel = cookie[MERCURE_AUTHORIZATION_COOKIE_NAME]
    morsel["path"] = path
    morsel["httponly"] = True
    morsel["samesite"] = samesite.capitalize()
    if secure:
        morsel["secure"] = True
    if domain:
        morsel["domain"] = domain
    if max_age is not None:
        morsel["max-age"] = str(int(check_max_age(max_age).total_seconds()))
    return morsel.OutputString()
