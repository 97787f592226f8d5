#!/usr/bin/env python3
"""
Command-line interface for mailhog-e2e.

Runs the same MailHog operations the test helpers use, handy when writing
or debugging an end-to-end test.

Usage:
    mailhog-e2e [OPTIONS] COMMAND [ARGS]

Commands:
    delete-all      Delete every message
    delete ID       Delete one message
    find QUERY      Search messages
    get ID          Show one message
    otp QUERY       Print and consume a one-time code
    count [QUERY]   Count messages, optionally checking the count
    decode [FILE]   Decode quoted-printable text (stdin by default)
"""

import argparse
import json
import logging
import sys
from typing import Any, Optional, Sequence

import requests

from mailhog_e2e import __version__
from mailhog_e2e.client.content import decode_quoted_printable
from mailhog_e2e.client.http import MailHogClient
from mailhog_e2e.common.config import LoggingSettings, get_settings
from mailhog_e2e.common.exceptions import ConfigurationError, MailHogError
from mailhog_e2e.common.models import InboxComparison, MailHogFindOptions, SearchKind
from mailhog_e2e.reporting import SoftAssertions

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def setup_logging(settings: LoggingSettings, debug: bool = False) -> None:
    """
    Configure logging for the command line tool.

    Args:
        settings: Logging settings (level, format, optional file).
        debug: Force debug logging.
    """
    log_level = logging.DEBUG if debug else getattr(logging, settings.level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.file:
        handlers.append(logging.FileHandler(settings.file))

    logging.basicConfig(
        level=log_level,
        format=settings.format,
        handlers=handlers,
    )

    if not debug:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="mailhog-e2e",
        description="mailhog-e2e - MailHog inbox helper for end-to-end tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Print the newest one-time code sent to a user:
        mailhog-e2e otp user@example.com

    Check the inbox holds at least two welcome emails:
        mailhog-e2e count Welcome --expect 2 --comparison atLeast

Environment Variables:
    MAILHOG_URL             Base URL of the MailHog API
    MAILHOG_TIMEOUT         Request timeout in seconds
    MAILHOG_CONFIG_FILE     TOML configuration file
    MAILHOG_LOG_LEVEL       Log level (default: INFO)
        """,
    )

    parser.add_argument("--url", help="MailHog API URL (overrides MAILHOG_URL)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"mailhog-e2e {__version__}",
    )

    kinds = [kind.value for kind in SearchKind]
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("delete-all", help="Delete every message")

    delete = commands.add_parser("delete", help="Delete one message")
    delete.add_argument("id")

    find = commands.add_parser("find", help="Search messages")
    find.add_argument("query")
    find.add_argument("--kind", choices=kinds, default=SearchKind.CONTAINING.value)
    find.add_argument("--limit", type=int, default=10)
    find.add_argument("--start", type=int, default=0)
    find.add_argument(
        "--most-recent",
        action="store_true",
        help="Only print the newest match",
    )

    get = commands.add_parser("get", help="Show one message")
    get.add_argument("id")

    otp = commands.add_parser("otp", help="Print and consume a one-time code")
    otp.add_argument("query")
    otp.add_argument("--kind", choices=kinds, default=SearchKind.TO.value)
    otp.add_argument("--limit", type=int, default=20)

    count = commands.add_parser("count", help="Count messages")
    count.add_argument("query", nargs="?")
    count.add_argument("--kind", choices=kinds, default=SearchKind.CONTAINING.value)
    count.add_argument("--expect", type=int, help="Expected number of messages")
    count.add_argument(
        "--comparison",
        choices=[c.value for c in InboxComparison],
        default=InboxComparison.EQUALS.value,
    )

    decode = commands.add_parser("decode", help="Decode quoted-printable text")
    decode.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
    )

    return parser.parse_args(argv)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_command(args: argparse.Namespace, client: MailHogClient) -> int:
    """Run one sub-command against ``client`` and return the exit code."""
    if args.command == "delete-all":
        client.delete_all_emails()
    elif args.command == "delete":
        client.delete_email(args.id)
    elif args.command == "find":
        options = MailHogFindOptions(
            query=args.query, kind=args.kind, limit=args.limit, start=args.start
        )
        if args.most_recent:
            item = client.find_most_recent_email(options)
            _print_json(item.to_dict() if item else None)
        else:
            _print_json([item.to_dict() for item in client.find_emails(options)])
    elif args.command == "get":
        _print_json(client.get_email(args.id).to_dict())
    elif args.command == "otp":
        code = client.get_one_time_code(
            MailHogFindOptions(query=args.query, kind=args.kind, limit=args.limit)
        )
        if code:
            print(code)
    elif args.command == "count":
        if args.expect is None:
            print(client.count_emails(args.query, args.kind))
        else:
            client.assert_inbox_count(args.query, args.expect, args.comparison, args.kind)

    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the mailhog-e2e command.

    Returns:
        Exit code (0 for success, 1 for failures, 2 for configuration errors).
    """
    args = parse_args(argv)

    try:
        settings = get_settings().with_url(args.url)
    except (ConfigurationError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(settings.logging, args.debug)

    if args.command == "decode":
        sys.stdout.write(decode_quoted_printable(args.file.read()))
        return EXIT_OK

    failures = SoftAssertions()
    try:
        with MailHogClient.from_settings(settings, reporter=failures) as client:
            exit_code = run_command(args, client)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG_ERROR
    except (MailHogError, requests.RequestException) as e:
        logger.error("MailHog request failed: %s", e)
        return EXIT_FAILURE

    for failure in failures.clear():
        print(f"FAILED: {failure}", file=sys.stderr)
        exit_code = EXIT_FAILURE

    return exit_code
