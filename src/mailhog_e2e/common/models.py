"""
Pydantic models for MailHog API payloads.

Field aliases follow MailHog's JSON (``ID``, ``Content``, ``Created``...);
Python attributes are snake case.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dates import message_timestamp

QUOTED_PRINTABLE = "quoted-printable"


class SearchKind(str, Enum):
    """Field MailHog's search endpoint matches against."""

    FROM = "from"
    TO = "to"
    CONTAINING = "containing"


class InboxComparison(str, Enum):
    """Comparison used by the inbox count assertion."""

    AT_LEAST = "atLeast"
    AT_MOST = "atMost"
    EQUALS = "equals"

    @classmethod
    def _missing_(cls, value: object) -> Optional["InboxComparison"]:
        aliases = {
            "greaterthanorequal": cls.AT_LEAST,
            "at_least": cls.AT_LEAST,
            "lessthanorequal": cls.AT_MOST,
            "at_most": cls.AT_MOST,
            "equal": cls.EQUALS,
            "equals": cls.EQUALS,
            "atleast": cls.AT_LEAST,
            "atmost": cls.AT_MOST,
        }
        if isinstance(value, str):
            return aliases.get(value.lower())
        return None


class MailHogModel(BaseModel):
    """Base model for MailHog payloads."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to MailHog's JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class MailHogPath(MailHogModel):
    """An envelope address as MailHog stores it."""

    relays: Optional[list[str]] = Field(None, alias="Relays")
    mailbox: str = Field(default="", alias="Mailbox")
    domain: str = Field(default="", alias="Domain")
    params: str = Field(default="", alias="Params")

    @property
    def address(self) -> str:
        if not self.domain:
            return self.mailbox
        return f"{self.mailbox}@{self.domain}"


class MailHogContent(MailHogModel):
    """Headers and body of a captured message."""

    headers: dict[str, list[str]] = Field(default_factory=dict, alias="Headers")
    body: str = Field(default="", alias="Body")
    size: Optional[int] = Field(None, alias="Size")

    @field_validator("headers", mode="before")
    @classmethod
    def parse_headers(cls, v: Any) -> dict[str, list[str]]:
        """Accept null and single-string header values."""
        if v is None:
            return {}
        return {
            name: [values] if isinstance(values, str) else list(values or [])
            for name, values in v.items()
        }

    @field_validator("body", mode="before")
    @classmethod
    def parse_body(cls, v: Any) -> str:
        return v or ""


class MailHogRaw(MailHogModel):
    """Raw SMTP transaction recorded by MailHog."""

    from_: str = Field(default="", alias="From")
    to: list[str] = Field(default_factory=list, alias="To")
    data: str = Field(default="", alias="Data")
    helo: str = Field(default="", alias="Helo")


class MailHogItem(MailHogModel):
    """One message captured by MailHog."""

    id: str = Field(..., alias="ID")
    from_: MailHogPath = Field(default_factory=MailHogPath, alias="From")
    to: list[MailHogPath] = Field(default_factory=list, alias="To")
    content: MailHogContent = Field(default_factory=MailHogContent, alias="Content")
    created: str = Field(default="", alias="Created")
    raw: Optional[MailHogRaw] = Field(None, alias="Raw")

    @field_validator("to", mode="before")
    @classmethod
    def parse_to(cls, v: Any) -> list[Any]:
        """Accept a single path object as well as MailHog's list."""
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v

    @field_validator("from_", mode="before")
    @classmethod
    def parse_from(cls, v: Any) -> Any:
        return v or {}

    def header(self, name: str) -> Optional[str]:
        """First value of a header, matched case-insensitively."""
        for key, values in self.content.headers.items():
            if key.lower() == name.lower():
                return values[0] if values else None
        return None

    def header_values(self, name: str) -> list[str]:
        for key, values in self.content.headers.items():
            if key.lower() == name.lower():
                return values
        return []

    @property
    def subject(self) -> str:
        return self.header("Subject") or ""

    @property
    def sender(self) -> str:
        return self.from_.address

    @property
    def recipients(self) -> list[str]:
        return [path.address for path in self.to]

    @property
    def body(self) -> str:
        return self.content.body

    @property
    def is_quoted_printable(self) -> bool:
        """Whether any Content-Transfer-Encoding value names quoted-printable."""
        return any(
            QUOTED_PRINTABLE in value.lower()
            for value in self.header_values("Content-Transfer-Encoding")
        )

    @property
    def sort_timestamp(self) -> datetime:
        """First ``Date`` header value when non-empty, else ``Created``."""
        return message_timestamp(self.header("Date"), self.created)


class MailHogSearchResult(MailHogModel):
    """Page of results from ``/v2/search`` or ``/v2/messages``."""

    total: int = 0
    count: int = 0
    start: int = 0
    items: list[MailHogItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v: Any) -> list[Any]:
        return v or []


class MailHogFindOptions(MailHogModel):
    """Search query sent to ``/v2/search``; unset fields take call defaults."""

    query: str
    kind: Optional[SearchKind] = None
    limit: Optional[int] = Field(None, ge=0)
    start: Optional[int] = Field(None, ge=0)

    def with_defaults(
        self,
        kind: SearchKind = SearchKind.CONTAINING,
        limit: int = 10,
        start: int = 0,
    ) -> "MailHogFindOptions":
        """Return a copy with every unset field filled from the defaults."""
        return MailHogFindOptions(
            query=self.query,
            kind=self.kind if self.kind is not None else kind,
            limit=self.limit if self.limit is not None else limit,
            start=self.start if self.start is not None else start,
        )

    def to_params(self) -> dict[str, Union[str, int]]:
        """Query string parameters for the search endpoint."""
        kind = self.kind or SearchKind.CONTAINING
        return {
            "limit": self.limit if self.limit is not None else 10,
            "start": self.start if self.start is not None else 0,
            "kind": SearchKind(kind).value,
            "query": self.query,
        }

    @classmethod
    def coerce(
        cls,
        query_or_options: Union[str, "MailHogFindOptions", dict[str, Any]],
        **defaults: Any,
    ) -> "MailHogFindOptions":
        """Normalize a bare query, a dict or an options object and apply defaults."""
        if isinstance(query_or_options, str):
            options = cls(query=query_or_options)
        elif isinstance(query_or_options, dict):
            options = cls.model_validate(query_or_options)
        else:
            options = query_or_options
        return options.with_defaults(**defaults)


FIND_DEFAULTS: dict[str, Any] = {
    "kind": SearchKind.CONTAINING,
    "limit": 10,
    "start": 0,
}

# There is no server-side sort, so fetch a batch and pick the newest locally.
ONE_TIME_CODE_DEFAULTS: dict[str, Any] = {
    "kind": SearchKind.TO,
    "limit": 20,
    "start": 0,
}

QueryOrOptions = Union[str, MailHogFindOptions, dict[str, Any]]
