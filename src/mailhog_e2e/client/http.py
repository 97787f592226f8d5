"""
Synchronous MailHog client built on requests.

Usage:
    with MailHogClient("http://localhost:8025/api") as mailhog:
        code = mailhog.get_one_time_code("user@example.com")
"""

import logging
from typing import Any, Optional, Union

import requests

from ..common.config import Settings, get_settings
from ..common.exceptions import ResponseDecodeError
from ..common.models import (
    InboxComparison,
    MailHogItem,
    MailHogSearchResult,
    QueryOrOptions,
    SearchKind,
)
from ..reporting import FailureReporter
from .base import (
    JSON_HEADERS,
    MESSAGES_PATH,
    SEARCH_PATH,
    TEXT_JSON_HEADERS,
    BaseMailHogClient,
)
from .content import most_recent

logger = logging.getLogger(__name__)


class MailHogClient(BaseMailHogClient):
    """
    Client for the MailHog HTTP API.

    Every call is one request (two for ``get_one_time_code``); non-2xx
    answers raise ``UnexpectedStatusError`` and are never retried.
    """

    def __init__(
        self,
        base_url: Optional[str],
        reporter: Optional[FailureReporter] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(base_url, reporter)
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        reporter: Optional[FailureReporter] = None,
    ) -> "MailHogClient":
        """Build a client from ``Settings`` (the cached environment settings by default)."""
        settings = settings or get_settings()
        return cls(settings.require_url(), reporter=reporter, timeout=settings.api.timeout)

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "MailHogClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        response = self.session.request(
            method, url, params=params, headers=headers, timeout=self.timeout
        )
        self._check_status(method, url, response.status_code, response.text)
        return response

    def delete_all_emails(self) -> None:
        """Delete every message in the inbox."""
        self._request("DELETE", MESSAGES_PATH)
        logger.info("Deleted all MailHog messages")

    def delete_email(self, message_id: str) -> None:
        """Delete one message; an unknown id is reported by MailHog as a non-2xx."""
        self._request("DELETE", self._message_path(message_id))
        logger.info("Deleted MailHog message %s", message_id)

    def search(self, query_or_options: QueryOrOptions) -> MailHogSearchResult:
        """Run a search and return the whole page, ``total`` included."""
        options = self._find_options(query_or_options)
        url, payload = self._get_json(SEARCH_PATH, options.to_params())
        return self._parse_search(url, payload)

    def find_emails(self, query_or_options: QueryOrOptions) -> list[MailHogItem]:
        """
        Search the inbox.

        A bare string searches with ``kind="containing"``, ``limit=10`` and
        ``start=0``. Quoted-printable bodies are decoded. An empty list
        means nothing matched.
        """
        return self.search(query_or_options).items

    def find_most_recent_email(self, query_or_options: QueryOrOptions) -> Optional[MailHogItem]:
        """Newest matching message, or None."""
        return most_recent(self.find_emails(query_or_options))

    def get_email(self, message_id: str) -> MailHogItem:
        """
        Fetch one message by id.

        Raises:
            ResponseDecodeError: If the body is not a valid message.
        """
        path = self._message_path(message_id)
        response = self._request("GET", path, headers=TEXT_JSON_HEADERS)
        return self._parse_item_text(self._url(path), response.text)

    def get_one_time_code(self, query_or_options: QueryOrOptions) -> str:
        """
        Read the one-time code from the newest matching email and delete it.

        Expects an element like ``<code data-otp="one-time-code">123456</code>``
        in the body. A bare string searches ``kind="to"`` with ``limit=20``.
        When no email or no code is found, the failure goes to the reporter
        and an empty string is returned.
        """
        options = self._one_time_code_options(query_or_options)
        email, code = self._pick_one_time_code(self.find_emails(options))
        if email is None:
            return ""

        # Delete the email so it can't be reused
        self.delete_email(email.id)
        return code

    def count_emails(
        self,
        query: Optional[str] = None,
        kind: Union[str, SearchKind] = SearchKind.CONTAINING,
    ) -> int:
        """Number of messages matching ``query``, or in the whole inbox."""
        path, params = self._count_request(query, kind)
        url, payload = self._get_json(path, params)
        return self._parse_total(url, payload)

    def assert_inbox_count(
        self,
        query: Optional[str] = None,
        count: int = 1,
        comparison: Union[str, InboxComparison] = InboxComparison.EQUALS,
        kind: Union[str, SearchKind] = SearchKind.CONTAINING,
    ) -> bool:
        """Check how many messages match; a mismatch goes to the reporter."""
        actual = self.count_emails(query, kind)
        return self._check_inbox_count(actual, query, count, comparison)

    def _get_json(self, path: str, params: dict[str, Any]) -> tuple[str, Any]:
        response = self._request("GET", path, params=params, headers=JSON_HEADERS)
        url = self._url(path)
        try:
            return url, response.json()
        except ValueError as e:
            raise ResponseDecodeError(url, f"invalid JSON: {e}") from e
