"""Configuration, exceptions and data models shared across mailhog-e2e."""

from .config import LoggingSettings, MailHogAPISettings, Settings, get_settings, reload_settings
from .exceptions import (
    ConfigurationError,
    InvalidConfigError,
    MailHogError,
    MissingConfigError,
    RequestError,
    ResponseDecodeError,
    SoftAssertionError,
    UnexpectedStatusError,
)
from .models import (
    InboxComparison,
    MailHogContent,
    MailHogFindOptions,
    MailHogItem,
    MailHogPath,
    MailHogRaw,
    MailHogSearchResult,
    SearchKind,
)

__all__ = [
    "ConfigurationError",
    "InboxComparison",
    "InvalidConfigError",
    "LoggingSettings",
    "MailHogAPISettings",
    "MailHogContent",
    "MailHogError",
    "MailHogFindOptions",
    "MailHogItem",
    "MailHogPath",
    "MailHogRaw",
    "MailHogSearchResult",
    "MissingConfigError",
    "RequestError",
    "ResponseDecodeError",
    "SearchKind",
    "Settings",
    "SoftAssertionError",
    "UnexpectedStatusError",
    "get_settings",
    "reload_settings",
]
