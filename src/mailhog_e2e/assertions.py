"""Inbox count assertion."""

from typing import Optional, Union

from .common.models import InboxComparison


def evaluate_inbox_count(
    actual: int,
    expected: int,
    comparison: Union[str, InboxComparison] = InboxComparison.EQUALS,
) -> bool:
    """
    Compare the number of messages MailHog reports with the expected count.

    Args:
        actual: ``total`` reported by MailHog.
        expected: Expected number of messages.
        comparison: ``atLeast``, ``atMost`` or ``equals`` (default).

    Returns:
        True when the comparison holds.
    """
    comparison = InboxComparison(comparison)
    if comparison is InboxComparison.AT_LEAST:
        return actual >= expected
    if comparison is InboxComparison.AT_MOST:
        return actual <= expected
    return actual == expected


def inbox_count_message(
    query: Optional[str],
    expected: int,
    comparison: Union[str, InboxComparison] = InboxComparison.EQUALS,
) -> str:
    comparison = InboxComparison(comparison)
    return (
        f'Looking for MailHog messages containing "{query}": '
        f"{comparison.value} {expected}"
    )
