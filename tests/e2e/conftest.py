"""
Pytest fixtures for live MailHog tests.

This module provides an SMTP sender pointed at MailHog, clients for the
MailHog API and an emptied inbox for every test.
"""

import os
import smtplib
import uuid
from email.message import EmailMessage
from pathlib import Path
from typing import AsyncGenerator, Callable, Generator, Optional

import pytest
import pytest_asyncio
from playwright.async_api import async_playwright

from mailhog_e2e.client.async_client import AsyncMailHogClient
from mailhog_e2e.client.http import MailHogClient
from mailhog_e2e.common.config import reload_settings
from mailhog_e2e.reporting import SoftAssertions


# =============================================================================
# Configuration
# =============================================================================

MAILHOG_URL = os.environ.get("MAILHOG_URL")
SMTP_HOST = os.environ.get("MAILHOG_SMTP_HOST", "localhost")
SMTP_PORT = int(os.environ.get("MAILHOG_SMTP_PORT", "1025"))

SENDER = "noreply@app.example.com"
E2E_DIR = Path(__file__).parent


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if MAILHOG_URL:
        return
    skip = pytest.mark.skip(reason="MAILHOG_URL is not set")
    for item in items:
        if E2E_DIR in item.path.parents:
            item.add_marker(skip)


# =============================================================================
# Mail Delivery
# =============================================================================

@pytest.fixture
def recipient() -> str:
    """Address unique to the current test."""
    return f"user-{uuid.uuid4().hex[:8]}@example.com"


@pytest.fixture
def send_email() -> Callable[..., None]:
    """Deliver a message to MailHog over SMTP."""

    def _send(
        to: str,
        subject: str = "Your sign-in code",
        html: str = "<p>Hello</p>",
        date: Optional[str] = None,
        quoted_printable: bool = False,
    ) -> None:
        message = EmailMessage()
        message["From"] = SENDER
        message["To"] = to
        message["Subject"] = subject
        if date is not None:
            message["Date"] = date
        message.set_content(
            html,
            subtype="html",
            cte="quoted-printable" if quoted_printable else "7bit",
        )
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT) as smtp:
            smtp.send_message(message)

    return _send


# =============================================================================
# MailHog Clients
# =============================================================================

@pytest.fixture
def failures() -> SoftAssertions:
    return SoftAssertions()


@pytest.fixture
def mailhog_client(failures: SoftAssertions) -> Generator[MailHogClient, None, None]:
    """requests client on an empty inbox."""
    with MailHogClient(MAILHOG_URL, reporter=failures) as client:
        client.delete_all_emails()
        yield client


@pytest_asyncio.fixture
async def async_mailhog_client(
    failures: SoftAssertions,
) -> AsyncGenerator[AsyncMailHogClient, None]:
    """Playwright client with its own request context."""
    settings = reload_settings()
    async with async_playwright() as pw:
        async with await AsyncMailHogClient.create(pw, settings, reporter=failures) as client:
            await client.delete_all_emails()
            yield client
