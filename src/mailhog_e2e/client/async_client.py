"""
Awaitable MailHog client built on Playwright's APIRequestContext.

Browser tests already hold a request context (``page.request`` or
``playwright.request.new_context()``), so MailHog calls go through the
same HTTP stack as the rest of the test.

Usage:
    mailhog = AsyncMailHogClient.for_page(page, mailhog_url)
    code = await mailhog.get_one_time_code("user@example.com")
"""

import logging
from typing import Any, Optional, Union

from playwright.async_api import APIRequestContext, APIResponse, Page, Playwright

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


class AsyncMailHogClient(BaseMailHogClient):
    """Same operations as ``MailHogClient``, awaited over Playwright."""

    def __init__(
        self,
        request: APIRequestContext,
        base_url: Optional[str],
        reporter: Optional[FailureReporter] = None,
        timeout: Optional[float] = None,
        owns_request: bool = False,
    ) -> None:
        """
        Args:
            request: Playwright request context used for every call.
            base_url: MailHog API root.
            reporter: Receives soft failures.
            timeout: Per-request timeout in seconds.
            owns_request: Dispose ``request`` on ``close()``.
        """
        super().__init__(base_url, reporter)
        self.request = request
        self.timeout = timeout
        self._owns_request = owns_request

    @classmethod
    def for_page(
        cls,
        page: Page,
        base_url: Optional[str] = None,
        reporter: Optional[FailureReporter] = None,
    ) -> "AsyncMailHogClient":
        """Client sharing the page's request context (cookies, proxy, TLS options)."""
        settings = get_settings()
        return cls(
            page.request,
            base_url or settings.require_url(),
            reporter=reporter,
            timeout=settings.api.timeout,
        )

    @classmethod
    async def create(
        cls,
        playwright: Playwright,
        settings: Optional[Settings] = None,
        reporter: Optional[FailureReporter] = None,
    ) -> "AsyncMailHogClient":
        """Client with its own request context, disposed on ``close()``."""
        settings = settings or get_settings()
        base_url = settings.require_url()
        request = await playwright.request.new_context()
        return cls(
            request,
            base_url,
            reporter=reporter,
            timeout=settings.api.timeout,
            owns_request=True,
        )

    async def close(self) -> None:
        if self._owns_request:
            await self.request.dispose()

    async def __aenter__(self) -> "AsyncMailHogClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> APIResponse:
        url = self._url(path)
        logger.debug("%s %s params=%s", method, url, params)
        # Playwright timeouts are in milliseconds
        timeout = self.timeout * 1000 if self.timeout is not None else None
        response = await self.request.fetch(
            url, method=method, params=params, headers=headers, timeout=timeout
        )
        if not 200 <= response.status < 300:
            self._check_status(method, url, response.status, await response.text())
        return response

    async def _get_json(self, path: str, params: dict[str, Any]) -> tuple[str, Any]:
        response = await self._request("GET", path, params=params, headers=JSON_HEADERS)
        url = self._url(path)
        try:
            return url, await response.json()
        except ValueError as e:
            raise ResponseDecodeError(url, f"invalid JSON: {e}") from e

    async def delete_all_emails(self) -> None:
        await self._request("DELETE", MESSAGES_PATH)
        logger.info("Deleted all MailHog messages")

    async def delete_email(self, message_id: str) -> None:
        await self._request("DELETE", self._message_path(message_id))
        logger.info("Deleted MailHog message %s", message_id)

    async def search(self, query_or_options: QueryOrOptions) -> MailHogSearchResult:
        options = self._find_options(query_or_options)
        url, payload = await self._get_json(SEARCH_PATH, options.to_params())
        return self._parse_search(url, payload)

    async def find_emails(self, query_or_options: QueryOrOptions) -> list[MailHogItem]:
        return (await self.search(query_or_options)).items

    async def find_most_recent_email(
        self, query_or_options: QueryOrOptions
    ) -> Optional[MailHogItem]:
        return most_recent(await self.find_emails(query_or_options))

    async def get_email(self, message_id: str) -> MailHogItem:
        path = self._message_path(message_id)
        response = await self._request("GET", path, headers=TEXT_JSON_HEADERS)
        return self._parse_item_text(self._url(path), await response.text())

    async def get_one_time_code(self, query_or_options: QueryOrOptions) -> str:
        """See ``MailHogClient.get_one_time_code``."""
        options = self._one_time_code_options(query_or_options)
        email, code = self._pick_one_time_code(await self.find_emails(options))
        if email is None:
            return ""

        await self.delete_email(email.id)
        return code

    async def count_emails(
        self,
        query: Optional[str] = None,
        kind: Union[str, SearchKind] = SearchKind.CONTAINING,
    ) -> int:
        path, params = self._count_request(query, kind)
        url, payload = await self._get_json(path, params)
        return self._parse_total(url, payload)

    async def assert_inbox_count(
        self,
        query: Optional[str] = None,
        count: int = 1,
        comparison: Union[str, InboxComparison] = InboxComparison.EQUALS,
        kind: Union[str, SearchKind] = SearchKind.CONTAINING,
    ) -> bool:
        actual = await self.count_emails(query, kind)
        return self._check_inbox_count(actual, query, count, comparison)
