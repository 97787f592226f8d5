"""MailHog API clients and message helpers."""

from .async_client import AsyncMailHogClient
from .base import BaseMailHogClient
from .content import (
    apply_transfer_decoding,
    decode_quoted_printable,
    extract_one_time_code,
    most_recent,
    to_sorted_by_date,
)
from .http import MailHogClient

__all__ = [
    "AsyncMailHogClient",
    "BaseMailHogClient",
    "MailHogClient",
    "apply_transfer_decoding",
    "decode_quoted_printable",
    "extract_one_time_code",
    "most_recent",
    "to_sorted_by_date",
]
