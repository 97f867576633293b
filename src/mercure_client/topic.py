"""Topics: the IRIs an update is published to."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

import httpx
import uri_template

from mercure_client.errors import InvalidTopic


def check_iri(iri: str) -> str:
    """Return *iri* if it is a non-empty absolute IRI, else raise :class:`InvalidTopic`."""
    if not iri:
        raise InvalidTopic("topic IRI must not be empty")
    try:
        url = httpx.URL(iri)
    except httpx.InvalidURL as err:
        raise InvalidTopic(f"topic IRI is not a valid URL: {iri!r}") from err
    if not url.scheme:
        raise InvalidTopic(f"topic IRI must be absolute: {iri!r}")
    # httpx percent-encodes square brackets that do not enclose an IPv6 literal.
    host = url.host.upper()
    if "%5B" in host or "%5D" in host:
        raise InvalidTopic(f"topic IRI has an invalid host: {iri!r}")
    return iri


class Topic:
    """The identifiers of an updated topic.

    ``iri`` may be a URI Template, in which case it is expanded with
    ``variables``. The expanded IRI is the canonical one; ``alternates`` are
    sent after it and the hub dispatches the update to subscribers of any of
    them. Two topics are equal when their expanded IRIs are equal.
    """

    __slots__ = ("_alternates", "_expanded", "_iri", "_variables")

    def __init__(
        self,
        iri: str,
        variables: Sequence[tuple[str, str]] | Mapping[str, str] = (),
        alternates: Sequence[str] = (),
    ) -> None:
        pairs = tuple(variables.items()) if isinstance(variables, Mapping) else tuple(variables)
        self._iri = iri
        self._variables = pairs
        self._expanded = check_iri(self._expand(iri, pairs))
        self._alternates = tuple(check_iri(alt) for alt in alternates)

    @staticmethod
    def _expand(iri: str, variables: tuple[tuple[str, str], ...]) -> str:
        if "{" not in iri:
            return iri
        if not uri_template.validate(iri):
            raise InvalidTopic(f"topic IRI is not a valid URI Template: {iri!r}")
        values = dict(variables)
        missing = [
            var.key
            for var in uri_template.URITemplate(iri).variables
            if var.key not in values and var.default is None
        ]
        if missing:
            raise InvalidTopic(f"missing values for template variables {missing} in {iri!r}")
        expanded = uri_template.expand(iri, **values)
        if expanded is None:
            raise InvalidTopic(f"failed to expand topic template: {iri!r}")
        return expanded

    @property
    def iri(self) -> str:
        return self._iri

    @property
    def variables(self) -> tuple[tuple[str, str], ...]:
        return self._variables

    @property
    def expanded_iri(self) -> str:
        return self._expanded

    @property
    def alternates(self) -> tuple[str, ...]:
        return self._alternates

    @property
    def iris(self) -> tuple[str, ...]:
        """Canonical IRI followed by alternate IRIs."""
        return (self._expanded, *self._alternates)

    def __iter__(self) -> Iterator[str]:
        return iter(self.iris)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topic):
            return NotImplemented
        return self.iris == other.iris

    def __hash__(self) -> int:
        return hash(self.iris)

    def __repr__(self) -> str:
        if self._alternates:
            return f"Topic({self._expanded!r}, alternates={list(self._alternates)!r})"
        return f"Topic({self._expanded!r})"

    def __str__(self) -> str:
        return self._expanded
