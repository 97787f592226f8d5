"""Version information for mailhog-e2e."""

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Release information
__title__ = "mailhog-e2e"
__description__ = "MailHog commands and assertions for end-to-end tests"
__author__ = "mailhog-e2e contributors"
__license__ = "MIT"
__copyright__ = "Copyright 2024-2026 mailhog-e2e contributors"


def get_version() -> str:
    """Return the current version string."""
    return __version__


def get_version_info() -> tuple[int, ...]:
    """Return the version as a tuple of integers."""
    return __version_info__
