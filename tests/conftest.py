"""
Pytest fixtures for mailhog-e2e tests.

This module provides fake HTTP sessions and MailHog message factories
used across test modules.
"""

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pytest
import requests

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from mailhog_e2e.common.config import get_settings  # noqa: E402

pytest_plugins = ["pytester"]

BASE_URL = "http://mailhog.test/api"


# =============================================================================
# Fake HTTP Session
# =============================================================================

@dataclass
class RecordedCall:
    """One request made through a FakeSession."""
    method: str
    url: str
    params: Optional[dict[str, Any]] = None
    headers: Optional[dict[str, str]] = None
    timeout: Optional[float] = None


def make_response(
    status: int = 200,
    json_body: Any = None,
    text: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    if json_body is not None:
        text = json.dumps(json_body)
    response._content = (text or "").encode("utf-8")
    response.encoding = "utf-8"
    return response


@dataclass
class FakeSession:
    """Stands in for requests.Session, answering from a queue."""
    responses: list[requests.Response] = field(default_factory=list)
    calls: list[RecordedCall] = field(default_factory=list)
    closed: bool = False

    def queue(self, status: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        self.responses.append(make_response(status, json_body, text))

    def request(self, method, url, params=None, headers=None, timeout=None):
        self.calls.append(RecordedCall(method, url, params, headers, timeout))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


# =============================================================================
# Message Factories
# =============================================================================

def build_message(
    message_id: str,
    body: str = "",
    date: Optional[str] = None,
    created: str = "2024-05-01T10:00:00.000000000Z",
    transfer_encoding: Optional[str] = None,
    subject: str = "Your sign-in code",
    to: str = "user@example.com",
) -> dict[str, Any]:
    """MailHog JSON for one captured message."""
    headers: dict[str, list[str]] = {"Subject": [subject]}
    if date is not None:
        headers["Date"] = [date]
    if transfer_encoding is not None:
        headers["Content-Transfer-Encoding"] = [transfer_encoding]

    mailbox, domain = to.split("@", 1)
    return {
        "ID": message_id,
        "From": {"Relays": None, "Mailbox": "noreply", "Domain": "app.example.com", "Params": ""},
        "To": [{"Relays": None, "Mailbox": mailbox, "Domain": domain, "Params": ""}],
        "Content": {"Headers": headers, "Body": body, "Size": len(body), "MIME": None},
        "Created": created,
        "MIME": None,
        "Raw": {
            "From": "noreply@app.example.com",
            "To": [to],
            "Data": body,
            "Helo": "app.example.com",
        },
    }


def build_search(messages: list[dict[str, Any]], total: Optional[int] = None) -> dict[str, Any]:
    """MailHog JSON for a /v2/search page."""
    return {
        "total": len(messages) if total is None else total,
        "count": len(messages),
        "start": 0,
        "items": messages,
    }


@pytest.fixture
def message() -> Callable[..., dict[str, Any]]:
    return build_message


@pytest.fixture
def search_page() -> Callable[..., dict[str, Any]]:
    return build_search


def otp_body(code: str) -> str:
    return f'<p>Your code is <code data-otp="one-time-code">{code}</code></p>'


# =============================================================================
# Environment Isolation
# =============================================================================

@pytest.fixture
def clean_env(monkeypatch):
    """Remove MailHog settings from the environment and the settings cache."""
    for name in list(os.environ):
        if name.startswith("MAILHOG_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
