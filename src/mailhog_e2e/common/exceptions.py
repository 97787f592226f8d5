"""
Custom exceptions for mailhog-e2e.

This module defines the exceptions raised by the MailHog clients, the
configuration layer and the soft assertion machinery.
"""

from typing import Any, Optional


class MailHogError(Exception):
    """Base exception for all mailhog-e2e errors."""

    def __init__(self, message: str,
                 details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(MailHogError):
    """Base exception for configuration-related errors."""


class MissingConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    def __init__(
        self, config_key: str, details: Optional[dict[str, Any]] = None
    ) -> None:
        """
        Initialize missing config error.

        Args:
            config_key: The missing configuration key.
            details: Optional dictionary with additional error details.
        """
        super().__init__(
            f"Missing required configuration: '{config_key}'", details)
        self.config_key = config_key


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        config_key: str,
        value: Any,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize invalid config error.

        Args:
            config_key: The configuration key with invalid value.
            value: The invalid value.
            reason: Optional reason why the value is invalid.
            details: Optional dictionary with additional error details.
        """
        message = f"Invalid configuration value for '{config_key}': {value}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, details)
        self.config_key = config_key
        self.value = value
        self.reason = reason


# Request Exceptions
class RequestError(MailHogError):
    """Base exception for failed calls to the MailHog API."""


class UnexpectedStatusError(RequestError):
    """Raised when MailHog answers with a non-2xx status code."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        body: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize unexpected status error.

        Args:
            method: HTTP method of the failed request.
            url: Full URL of the failed request.
            status_code: Status code returned by the server.
            body: Response body, if any, for debugging.
            details: Optional dictionary with additional error details.
        """
        super().__init__(
            f"{method} {url} returned HTTP {status_code}", details)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(RequestError):
    """Raised when a MailHog response body cannot be decoded."""

    def __init__(
        self,
        url: str,
        reason: str,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(f"Could not decode response from {url}: {reason}", details)
        self.url = url
        self.reason = reason


# Assertion Exceptions
class SoftAssertionError(MailHogError, AssertionError):
    """Raised when recorded soft assertion failures are turned into a failure."""

    def __init__(self, failures: list[str]) -> None:
        count = len(failures)
        noun = "failure" if count == 1 else "failures"
        lines = "\n".join(f"  - {failure}" for failure in failures)
        super().__init__(f"{count} MailHog assertion {noun}:\n{lines}")
        self.failures = list(failures)
