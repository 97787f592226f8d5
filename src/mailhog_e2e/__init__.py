"""mailhog-e2e - MailHog commands and assertions for end-to-end tests."""

from mailhog_e2e.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
    __version_info__,
    get_version,
    get_version_info,
)
from mailhog_e2e.assertions import evaluate_inbox_count
from mailhog_e2e.client import (
    AsyncMailHogClient,
    MailHogClient,
    decode_quoted_printable,
    extract_one_time_code,
    most_recent,
    to_sorted_by_date,
)
from mailhog_e2e.common.models import (
    InboxComparison,
    MailHogFindOptions,
    MailHogItem,
    SearchKind,
)
from mailhog_e2e.reporting import FailureReporter, SoftAssertions

__all__ = [
    "__version__",
    "__version_info__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
    "get_version",
    "get_version_info",
    "AsyncMailHogClient",
    "FailureReporter",
    "InboxComparison",
    "MailHogClient",
    "MailHogFindOptions",
    "MailHogItem",
    "SearchKind",
    "SoftAssertions",
    "decode_quoted_printable",
    "evaluate_inbox_count",
    "extract_one_time_code",
    "most_recent",
    "to_sorted_by_date",
]
