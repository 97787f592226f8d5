"""
Message content helpers shared by the MailHog clients.

Everything here is pure: no network access, no failure reporting.
"""

import logging
import re
from typing import Optional, Sequence

from ..common.models import MailHogItem

logger = logging.getLogger(__name__)

# RFC 2045 section 6.7, rule 3: trailing whitespace on a line was added in
# transport and must be deleted.
_TRAILING_WHITESPACE_RE = re.compile(r"[\t ]+(?=\r|\n|\Z)")

# Soft line breaks. Proper quoted-printable data only uses CRLF, bare CR
# and LF are accepted too.
_SOFT_BREAK_RE = re.compile(r"=(?:\r\n?|\n|\Z)")

# =XX escapes, lowercase hex included (RFC 2045 section 6.7, note 1).
_ESCAPE_RE = re.compile(r"=([0-9A-Fa-f]{2})")

# Example snippet: <code data-otp="one-time-code">123456</code>
ONE_TIME_CODE_RE = re.compile(r'data-otp="one-time-code"\s*>([0-9]+)<', re.ASCII)


def decode_quoted_printable(content: str) -> str:
    """
    Decode a quoted-printable body.

    Each ``=XX`` escape becomes the character with code point ``XX``; no
    charset is applied, so ``caf=E9`` decodes to ``café``.
    """
    content = _TRAILING_WHITESPACE_RE.sub("", content)
    content = _SOFT_BREAK_RE.sub("", content)
    return _ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), content)


def apply_transfer_decoding(item: MailHogItem) -> MailHogItem:
    """Decode a quoted-printable body in place and return the item."""
    if item.content.body and item.is_quoted_printable:
        item.content.body = decode_quoted_printable(item.content.body)
    return item


def to_sorted_by_date(items: Sequence[MailHogItem]) -> Sequence[MailHogItem]:
    """Sort oldest first by ``sort_timestamp``; equal timestamps keep their order."""
    if len(items) == 0:
        return items
    return sorted(items, key=lambda item: item.sort_timestamp)


def most_recent(items: Sequence[MailHogItem]) -> Optional[MailHogItem]:
    """
    Newest item by ``sort_timestamp``, or None for an empty batch.

    The whole batch is scanned since MailHog cannot sort searches; on a
    tie the item MailHog returned first wins.
    """
    if not items:
        return None

    newest = items[0]
    newest_at = newest.sort_timestamp
    for item in items[1:]:
        timestamp = item.sort_timestamp
        if timestamp > newest_at:
            newest = item
            newest_at = timestamp
    return newest


def extract_one_time_code(body: str) -> Optional[str]:
    """Digits inside the ``data-otp="one-time-code"`` element, or None."""
    match = ONE_TIME_CODE_RE.search(body or "")
    if not match:
        return None
    return match.group(1)
