"""
Timestamp parsing for MailHog messages.

MailHog reports two kinds of timestamps: the RFC 5322 ``Date`` header
written by the sender, and the ``Created`` field set when MailHog received
the message (RFC 3339 with nanosecond precision).
"""

import email.utils
import logging
import re
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# Sorts before every real timestamp.
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)

_FRACTION_RE = re.compile(r"(\.\d+)")
_PAREN_TZ_RE = re.compile(r"\s*\([^)]+\)\s*$")

_ALTERNATIVE_FORMATS = [
    "%a, %d %b %Y %H:%M:%S %z",
    "%d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S",
    "%d %b %Y %H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_header_date(value: str) -> Optional[datetime]:
    """Parse an email ``Date`` header into an aware datetime, or None."""
    if not value or not value.strip():
        return None

    try:
        return _as_utc(email.utils.parsedate_to_datetime(value))
    except (ValueError, TypeError):
        pass

    # Remove parenthetical timezone name if present
    cleaned = _PAREN_TZ_RE.sub("", value).strip()

    for fmt in _ALTERNATIVE_FORMATS:
        try:
            return _as_utc(datetime.strptime(cleaned, fmt))
        except ValueError:
            continue

    return parse_created(cleaned)


def parse_created(value: str) -> Optional[datetime]:
    """
    Parse MailHog's ``Created`` timestamp into an aware datetime, or None.

    MailHog emits up to nine fractional digits and a ``Z`` suffix, e.g.
    ``2024-05-01T10:15:30.123456789Z``; fractions are cut to microseconds.
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: m.group(1)[:7], text, count=1)

    try:
        return _as_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def message_timestamp(date_header: Optional[str], created: Optional[str]) -> datetime:
    """
    Timestamp used to order messages.

    The sender's ``Date`` header wins because relays can delay delivery to
    MailHog; ``Created`` is used when the header is absent, empty or
    unparseable.
    """
    if date_header:
        parsed = parse_header_date(date_header)
        if parsed is not None:
            return parsed
        logger.warning("Failed to parse Date header %r, using Created", date_header)

    parsed = parse_created(created or "")
    if parsed is not None:
        return parsed

    logger.warning("Failed to parse Created timestamp %r", created)
    return EPOCH_MIN
