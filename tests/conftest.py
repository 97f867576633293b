"""Common test fixtures and helpers."""

from __future__ import annotations

import os
import subprocess
import sys

import httpx
import pytest

SECRET = b"!ChangeThisMercureHubJWTSecretKey!"
HUB = "https://localhost/.well-known/mercure"


def run_cli(*args: str, env_override: dict[str, str] | None = None) -> subprocess.CompletedProcess:
    """Run the CLI via ``python -m mercure_client``."""
    env = os.environ.copy()
    if env_override:
        env.update(env_override)
    return subprocess.run(
        [sys.executable, "-m", "mercure_client", *args],
        capture_output=True,
        text=True,
        env=env,
    )


class RecordingHub:
    """A ``httpx.MockTransport`` handler that records every request it sees."""

    def __init__(self, status_code: int = 200, text: str = "urn:uuid:1") -> None:
        self.status_code = status_code
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.text)


@pytest.fixture()
def hub() -> RecordingHub:
    return RecordingHub()


@pytest.fixture()
def no_mercure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("MERCURE_"):
            monkeypatch.delenv(key)
