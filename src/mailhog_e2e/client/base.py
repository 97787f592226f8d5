"""
Shared request building and response handling for the MailHog clients.

The synchronous and Playwright clients only differ in how a request is
sent; paths, parameters, status checks and decoding live here.
"""

import json
import logging
from typing import Any, Optional, Union
from urllib.parse import quote

from pydantic import ValidationError

from ..assertions import evaluate_inbox_count, inbox_count_message
from ..common.config import URL_EXAMPLE
from ..common.exceptions import (
    MissingConfigError,
    ResponseDecodeError,
    UnexpectedStatusError,
)
from ..common.models import (
    FIND_DEFAULTS,
    ONE_TIME_CODE_DEFAULTS,
    InboxComparison,
    MailHogFindOptions,
    MailHogItem,
    MailHogSearchResult,
    QueryOrOptions,
    SearchKind,
)
from ..reporting import FailureReporter, SoftAssertions
from .content import apply_transfer_decoding, extract_one_time_code, most_recent

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/v1/messages"
SEARCH_PATH = "/v2/search"
LIST_PATH = "/v2/messages"

JSON_HEADERS = {"Accept": "application/json"}
# /v1/messages/{id} answers with JSON text that is decoded explicitly.
TEXT_JSON_HEADERS = {"Accept": "text/json"}

NO_EMAILS_FOUND = "No emails found matching that query."
NO_CODE_FOUND = 'No code found in email (data-otp="one-time-code").'


class BaseMailHogClient:
    """State and helpers common to both MailHog clients."""

    def __init__(
        self,
        base_url: Optional[str],
        reporter: Optional[FailureReporter] = None,
    ) -> None:
        """
        Args:
            base_url: MailHog API root, e.g. ``http://localhost:8025/api``.
            reporter: Receives soft failures; a fresh ``SoftAssertions``
                when omitted.

        Raises:
            MissingConfigError: If ``base_url`` is empty; no request is made.
        """
        if not base_url:
            raise MissingConfigError(
                "MAILHOG_URL",
                {"expected": f"a URL to the MailHog API endpoint, e.g. {URL_EXAMPLE}"},
            )
        self.base_url = base_url.rstrip("/")
        self.reporter: FailureReporter = reporter if reporter is not None else SoftAssertions()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"

    # Request building

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _message_path(message_id: str) -> str:
        return f"{MESSAGES_PATH}/{quote(message_id, safe='')}"

    @staticmethod
    def _find_options(query_or_options: QueryOrOptions) -> MailHogFindOptions:
        return MailHogFindOptions.coerce(query_or_options, **FIND_DEFAULTS)

    @staticmethod
    def _one_time_code_options(query_or_options: QueryOrOptions) -> MailHogFindOptions:
        return MailHogFindOptions.coerce(query_or_options, **ONE_TIME_CODE_DEFAULTS)

    @staticmethod
    def _count_request(
        query: Optional[str], kind: Union[str, SearchKind]
    ) -> tuple[str, dict[str, Union[str, int]]]:
        if not query:
            return LIST_PATH, {"limit": 0}
        return SEARCH_PATH, {
            "limit": 0,
            "kind": SearchKind(kind).value,
            "query": query,
        }

    # Response handling

    @staticmethod
    def _check_status(method: str, url: str, status: int, body: Optional[str] = None) -> None:
        """
        Raises:
            UnexpectedStatusError: For anything outside 2xx.
        """
        if not 200 <= status < 300:
            raise UnexpectedStatusError(method, url, status, body)

    @staticmethod
    def _parse_search(url: str, payload: Any) -> MailHogSearchResult:
        try:
            result = MailHogSearchResult.model_validate(payload or {})
        except ValidationError as e:
            raise ResponseDecodeError(url, str(e)) from e

        for item in result.items:
            apply_transfer_decoding(item)
        return result

    @staticmethod
    def _parse_item_text(url: str, text: str) -> MailHogItem:
        try:
            item = MailHogItem.model_validate(json.loads(text))
        except json.JSONDecodeError as e:
            raise ResponseDecodeError(url, f"invalid JSON: {e}") from e
        except ValidationError as e:
            raise ResponseDecodeError(url, str(e)) from e
        return apply_transfer_decoding(item)

    @staticmethod
    def _parse_total(url: str, payload: Any) -> int:
        try:
            return int(payload["total"])
        except (KeyError, TypeError, ValueError) as e:
            raise ResponseDecodeError(url, f"missing total: {e}") from e

    # Soft assertions

    def _pick_one_time_code(self, emails: list[MailHogItem]) -> tuple[Optional[MailHogItem], str]:
        """Newest email of the batch and its code, reporting what is missing."""
        email = most_recent(emails)
        if email is None:
            self.reporter.fail(NO_EMAILS_FOUND)
            return None, ""

        code = extract_one_time_code(email.content.body)
        if code is None:
            self.reporter.fail(NO_CODE_FOUND)
            return None, ""

        logger.info("Found one-time code in MailHog message %s", email.id)
        return email, code

    def _check_inbox_count(
        self,
        actual: int,
        query: Optional[str],
        count: int,
        comparison: Union[str, InboxComparison],
    ) -> bool:
        passed = evaluate_inbox_count(actual, count, comparison)
        message = inbox_count_message(query, count, comparison)
        if passed:
            logger.debug("%s (found %d)", message, actual)
        else:
            self.reporter.fail(f"{message} (found {actual})")
        return passed
