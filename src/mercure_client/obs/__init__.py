"""Logging helpers – keep credentials out of log output."""

from mercure_client.obs.redaction import redact_headers, redact_value

__all__ = [
    "redact_headers",
    "redact_value",
]
