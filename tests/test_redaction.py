from mercure_client.auth.cookie import authorization_cookie
from mercure_client.auth.jwt import PublisherJwt
from mercure_client.obs.redaction import redact_headers, redact_value
from mercure_client.topic_selector import Wildcard

TOKEN = PublisherJwt(b"!ChangeThisMercureHubJWTSecretKey!", [Wildcard()]).to_compact_token()


def test_redact_headers():
    headers = {
        "Authorization": f"Bearer {TOKEN}",
        "Cookie": f"mercureAuthorization={TOKEN}",
        "Set-Cookie": authorization_cookie(TOKEN),
        "Content-Type": "application/x-www-form-urlencoded",
        "User-Agent": "test-agent",
    }
    redacted = redact_headers(headers)

    assert redacted["Authorization"] == "[REDACTED]"
    assert redacted["Cookie"] == "[REDACTED]"
    assert redacted["Set-Cookie"] == "[REDACTED]"
    assert redacted["Content-Type"] == "application/x-www-form-urlencoded"
    assert redacted["User-Agent"] == "test-agent"

    # Test case insensitivity
    redacted_lower = redact_headers({"authorization": f"Bearer {TOKEN}"})
    assert redacted_lower["authorization"] == "[REDACTED]"


def test_redact_headers_does_not_mutate():
    headers = {"Authorization": f"Bearer {TOKEN}"}
    redact_headers(headers)
    assert headers["Authorization"] == f"Bearer {TOKEN}"


def test_redact_headers_empty():
    assert redact_headers({}) == {}


def test_redact_value():
    assert redact_value(TOKEN) == "[REDACTED]"
    assert redact_value(f"Bearer {TOKEN}") == "[REDACTED]"
    assert TOKEN not in redact_value(authorization_cookie(TOKEN))

    # Non-sensitive
    assert redact_value("hello world") == "hello world"
    assert redact_value("https://example.com/books/1") == "https://example.com/books/1"

    # Multiple secrets
    mixed = f"token: {TOKEN} and again: {TOKEN}"
    assert redact_value(mixed) == "token: [REDACTED] and again: [REDACTED]"
