"""
Soft failure reporting.

"No matching email" and "no code in the email" are test failures, not
errors: the calling test keeps running with an empty result and the
failure is reported once the test finishes. A ``FailureReporter`` is the
channel those failures go through.
"""

import logging
from typing import Protocol

from .common.exceptions import SoftAssertionError

logger = logging.getLogger(__name__)


class FailureReporter(Protocol):
    """Anything that can record a test failure without raising."""

    def fail(self, message: str) -> None:
        ...


class SoftAssertions:
    """Records failures and raises them together on request."""

    def __init__(self) -> None:
        self.failures: list[str] = []

    def fail(self, message: str) -> None:
        """Record a failure; the caller keeps running."""
        logger.error("MailHog assertion failed: %s", message)
        self.failures.append(message)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def clear(self) -> list[str]:
        """Forget and return the recorded failures."""
        failures, self.failures = self.failures, []
        return failures

    def raise_for_failures(self) -> None:
        """
        Raise the recorded failures, if any.

        Raises:
            SoftAssertionError: With every recorded message. The record is
                cleared first so the same failures are reported once.
        """
        if self.failures:
            raise SoftAssertionError(self.clear())

    def __len__(self) -> int:
        return len(self.failures)

    def __repr__(self) -> str:
        return f"SoftAssertions(failures={self.failures!r})"
