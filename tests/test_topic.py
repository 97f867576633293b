"""Tests for topics – expansion, alternates and identity."""

from __future__ import annotations

import pytest

from mercure_client.errors import InvalidTopic
from mercure_client.topic import Topic


class TestExpansion:
    def test_plain_iri(self):
        topic = Topic("https://example.com/books/1")
        assert topic.expanded_iri == "https://example.com/books/1"
        assert topic.iris == ("https://example.com/books/1",)

    def test_variables_as_pairs(self):
        topic = Topic(
            "https://example.com/users/{user_id}/books/{book_id}",
            [("user_id", "1"), ("book_id", "2")],
        )
        assert topic.expanded_iri == "https://example.com/users/1/books/2"
        assert topic.variables == (("user_id", "1"), ("book_id", "2"))

    def test_variables_as_mapping(self):
        topic = Topic("https://example.com/books/{book_id}", {"book_id": "1"})
        assert str(topic) == "https://example.com/books/1"

    def test_invalid_template(self):
        with pytest.raises(InvalidTopic):
            Topic("https://example.com/books/{book_id", [("book_id", "1")])

    def test_missing_variable(self):
        with pytest.raises(InvalidTopic):
            Topic("https://example.com/books/{book_id}")

    def test_partial_variables(self):
        with pytest.raises(InvalidTopic):
            Topic(
                "https://example.com/users/{user_id}/books/{book_id}",
                [("user_id", "1")],
            )


class TestValidation:
    def test_empty(self):
        with pytest.raises(InvalidTopic):
            Topic("")

    def test_relative(self):
        with pytest.raises(InvalidTopic):
            Topic("/books/1")

    def test_urn(self):
        assert Topic("urn:isbn:9780735218789").iris == ("urn:isbn:9780735218789",)

    def test_relative_alternate(self):
        with pytest.raises(InvalidTopic):
            Topic("https://example.com/books/1", alternates=["books/1"])


class TestIdentity:
    def test_equal_when_expanded_iris_equal(self):
        templated = Topic("https://example.com/books/{id}", [("id", "1")])
        plain = Topic("https://example.com/books/1")
        assert templated == plain
        assert hash(templated) == hash(plain)

    def test_not_equal(self):
        assert Topic("https://example.com/books/1") != Topic("https://example.com/books/2")

    def test_alternates_follow_canonical(self):
        topic = Topic(
            "https://example.com/books/1",
            alternates=["https://example.com/users/1/books/1"],
        )
        assert list(topic) == [
            "https://example.com/books/1",
            "https://example.com/users/1/books/1",
        ]
