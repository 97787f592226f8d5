"""
pytest plugin exposing MailHog to end-to-end tests.

Fixtures:
    mailhog_settings: Resolved settings (session scope).
    mailhog_failures: Soft failures recorded during the current test.
    mailhog: ``MailHogClient`` reporting into ``mailhog_failures``.
    clean_mailhog: ``mailhog`` after every message has been deleted.

The MailHog URL comes from ``--mailhog-url``, the ``mailhog_url`` ini key
or the ``MAILHOG_URL`` environment variable, in that order.
"""

from typing import Generator

import pytest

from .client.http import MailHogClient
from .common.config import Settings, get_settings
from .common.exceptions import SoftAssertionError
from .reporting import SoftAssertions

failures_key = pytest.StashKey[SoftAssertions]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("mailhog", "MailHog inbox access")
    group.addoption(
        "--mailhog-url",
        action="store",
        dest="mailhog_url",
        default=None,
        help="Base URL of the MailHog API, e.g. http://localhost:8025/api",
    )
    parser.addini("mailhog_url", help="Base URL of the MailHog API")


@pytest.hookimpl(wrapper=True)
def pytest_runtest_call(item: pytest.Item) -> Generator[None, None, None]:
    """Fail the test when MailHog soft assertions failed during its body."""
    result = yield
    failures = item.stash.get(failures_key, None)
    if failures is not None and failures.failed:
        pytest.fail(str(SoftAssertionError(failures.clear())), pytrace=False)
    return result


@pytest.fixture(scope="session")
def mailhog_settings(pytestconfig: pytest.Config) -> Settings:
    url = pytestconfig.getoption("mailhog_url") or pytestconfig.getini("mailhog_url")
    return get_settings().with_url(url or None)


@pytest.fixture
def mailhog_failures(request: pytest.FixtureRequest) -> SoftAssertions:
    failures = SoftAssertions()
    request.node.stash[failures_key] = failures
    return failures


@pytest.fixture
def mailhog(
    mailhog_settings: Settings, mailhog_failures: SoftAssertions
) -> Generator[MailHogClient, None, None]:
    """MailHog client for the current test; raises MissingConfigError without a URL."""
    client = MailHogClient.from_settings(mailhog_settings, reporter=mailhog_failures)
    yield client
    client.close()


@pytest.fixture
def clean_mailhog(mailhog: MailHogClient) -> MailHogClient:
    """MailHog client whose inbox was emptied before the test."""
    mailhog.delete_all_emails()
    return mailhog
