"""Validated Mercure hub URL.

The URL of the hub MUST be the "well-known" (RFC 5785) fixed path
``/.well-known/mercure``. :class:`HubUrl` can only be obtained through its
validating constructor.
"""

from __future__ import annotations

import httpx

from mercure_client.errors import InvalidHubUrl

WELL_KNOWN_PATH = "/.well-known/mercure"

_SCHEMES = frozenset({"http", "https"})


class HubUrl:
    """An ``http(s)`` URL whose path ends with the well-known Mercure path."""

    __slots__ = ("_url",)

    def __init__(self, url: str | httpx.URL) -> None:
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as err:
            raise InvalidHubUrl(f"invalid hub URL: {err}") from err

        if parsed.scheme not in _SCHEMES:
            raise InvalidHubUrl(f"hub URL scheme must be http or https, got {parsed.scheme!r}")
        if not parsed.host:
            raise InvalidHubUrl("hub URL must have a host")
        if not parsed.path.endswith(WELL_KNOWN_PATH):
            raise InvalidHubUrl(f"hub URL path must end with {WELL_KNOWN_PATH}, got {parsed.path!r}")

        self._url = parsed

    @property
    def url(self) -> httpx.URL:
        return self._url

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_url"):
            raise AttributeError("HubUrl is immutable")
        object.__setattr__(self, name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HubUrl):
            return NotImplemented
        return self._url == other._url

    def __hash__(self) -> int:
        return hash(str(self._url))

    def __repr__(self) -> str:
        return f"HubUrl({str(self._url)!r})"

    def __str__(self) -> str:
        return str(self._url)
