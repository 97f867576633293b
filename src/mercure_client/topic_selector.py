"""Topic selectors: the patterns carried in ``mercure.publish`` / ``mercure.subscribe``.

A selector is either :class:`Wildcard` (``"*"``, every topic) or a
:class:`UriTemplate` (RFC 6570) that matches the topic IRIs it can expand to.
Templates are parsed by the ``uri-template`` package; matching is done with a
regular expression compiled from the parsed expressions, one group per
variable, so a value can only contain the characters its operator would
produce.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache

import uri_template
from uri_template.expansions import Expansion, ExpressionExpansion, Literal
from uri_template.variable import Variable

from mercure_client.errors import InvalidTemplate
from mercure_client.topic import check_iri

WILDCARD = "*"

# RFC 3986 character classes used when matching expanded values.
_UNRESERVED = r"A-Za-z0-9\-._~"
_RESERVED = r":/?#\[\]@!$&'()*+,;="
_PCT_ENCODED = r"%[0-9A-Fa-f]{2}"

# RFC 6570 level 4. uri-template also parses "{,x}" and "{,+x}", its own
# extension for partial expansion, which no hub understands.
_OPERATORS = frozenset({"", "+", "#", ".", "/", ";", "?", "&"})
_NAMED = frozenset({";", "?", "&"})
_ALLOW_RESERVED = frozenset({"+", "#"})


def _parse(template: str) -> list[Expansion]:
    if not uri_template.validate(template):
        raise InvalidTemplate(f"failed to parse URI Template: {template!r}")
    parts = uri_template.URITemplate(template).expansions
    for part in parts:
        if not isinstance(part, ExpressionExpansion):
            continue
        if part.operator not in _OPERATORS or part.trailing_joiner:
            raise InvalidTemplate(f"not an RFC 6570 expression in {template!r}: {part}")
        for var in part.vars:
            if not var.name or var.array or var.default is not None or var.key != var.name:
                raise InvalidTemplate(f"not an RFC 6570 variable in {template!r}: {var}")
    return parts


def _variable_pattern(var: Variable, operator: str, separator: str) -> str:
    chars = _UNRESERVED + (_RESERVED if operator in _ALLOW_RESERVED else "")
    char = f"(?:[{chars}]|{_PCT_ENCODED})"

    if var.explode:
        # list items or key=value pairs, each joined by the operator's separator
        key = f"{char}+" if operator in _NAMED else f"{char}*"
        item = f"{key}(?:={char}*)?"
        return f"{item}(?:{re.escape(separator)}{item})*"

    if var.max_length:
        value = f"{char}{{0,{var.max_length}}}"
    else:
        value = f"(?:{char}|,)*"
    name = re.escape(var.name)
    if operator == ";":
        return f"{name}(?:={value})?"
    if operator in _NAMED:
        return f"{name}={value}"
    return value


def _expression_pattern(expression: ExpressionExpansion) -> str:
    separator = expression.var_joiner
    groups = [_variable_pattern(var, expression.operator, separator) for var in expression.vars]

    # Undefined variables are skipped, the defined ones keep template order.
    alternatives = []
    for i, first in enumerate(groups):
        rest = "".join(f"(?:{re.escape(separator)}{g})?" for g in groups[i + 1 :])
        alternatives.append(f"{first}{rest}")
    body = "|".join(alternatives)
    return f"(?:{re.escape(expression.output_prefix)}(?:{body}))?"


@lru_cache(maxsize=256)
def _compile(template: str) -> re.Pattern[str]:
    parts: list[str] = []
    for part in _parse(template):
        if isinstance(part, ExpressionExpansion):
            parts.append(_expression_pattern(part))
        elif isinstance(part, Literal):
            parts.append(re.escape(part.value))
    return re.compile("".join(parts))


class TopicSelector(ABC):
    """An expression matched against topic IRIs for authorization purposes."""

    __slots__ = ()

    @abstractmethod
    def matches(self, topic_iri: str) -> bool:
        """Whether *topic_iri* is selected. Empty or unparseable IRIs raise ``InvalidTopic``."""

    @staticmethod
    def parse(value: str) -> TopicSelector:
        """Turn the serialized form of a selector back into a selector."""
        if value == WILDCARD:
            return Wildcard()
        return UriTemplate(value)


@dataclass(frozen=True, slots=True)
class Wildcard(TopicSelector):
    """Matches all topics."""

    def matches(self, topic_iri: str) -> bool:
        check_iri(topic_iri)
        return True

    def __str__(self) -> str:
        return WILDCARD


@dataclass(frozen=True, slots=True)
class UriTemplate(TopicSelector):
    """Matches the topics a URI Template can produce.

    Use the template in absolute form (expanding to a valid URL); this cannot
    be checked here but hubs rely on it for interoperability.
    """

    template: str

    def __post_init__(self) -> None:
        if not self.template:
            raise InvalidTemplate("URI Template must not be empty")
        if self.template == WILDCARD:
            raise InvalidTemplate("'*' is the wildcard selector, use Wildcard()")
        _compile(self.template)

    def matches(self, topic_iri: str) -> bool:
        check_iri(topic_iri)
        if topic_iri == self.template:
            return True
        return _compile(self.template).fullmatch(topic_iri) is not None

    def __str__(self) -> str:
        return self.template
