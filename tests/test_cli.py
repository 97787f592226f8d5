"""
Tests for the mailhog-e2e command line tool.
"""

import io
import json

import pytest

from mailhog_e2e.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_FAILURE,
    EXIT_OK,
    main,
    parse_args,
    run_command,
)
from mailhog_e2e.client.http import MailHogClient
from mailhog_e2e.reporting import SoftAssertions

from conftest import BASE_URL, build_message, build_search, otp_body


@pytest.fixture
def client(fake_session):
    return MailHogClient(BASE_URL, reporter=SoftAssertions(), session=fake_session)


# =============================================================================
# Argument Parsing Tests
# =============================================================================

class TestParseArgs:
    """Tests for parse_args."""

    def test_find_defaults(self):
        args = parse_args(["find", "user@example.com"])
        assert args.command == "find"
        assert args.kind == "containing"
        assert args.limit == 10
        assert args.start == 0
        assert not args.most_recent

    def test_otp_defaults(self):
        args = parse_args(["otp", "user@example.com"])
        assert args.kind == "to"
        assert args.limit == 20

    def test_count_options(self):
        args = parse_args(["--url", BASE_URL, "count", "Welcome", "--expect", "2", "--comparison", "atLeast"])
        assert args.url == BASE_URL
        assert args.query == "Welcome"
        assert args.expect == 2
        assert args.comparison == "atLeast"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_invalid_kind(self):
        with pytest.raises(SystemExit):
            parse_args(["find", "x", "--kind", "subject"])


# =============================================================================
# Command Tests
# =============================================================================

class TestRunCommand:
    """Tests for run_command against a fake session."""

    def test_delete_all(self, client, fake_session):
        fake_session.queue(200)
        assert run_command(parse_args(["delete-all"]), client) == EXIT_OK
        assert fake_session.calls[0].method == "DELETE"

    def test_find_prints_json(self, client, fake_session, capsys):
        fake_session.queue(json_body=build_search([build_message("m1", body="hi")]))
        run_command(parse_args(["find", "user@example.com", "--limit", "5"]), client)

        printed = json.loads(capsys.readouterr().out)
        assert [item["ID"] for item in printed] == ["m1"]
        assert fake_session.calls[0].params["limit"] == 5

    def test_find_most_recent_none(self, client, fake_session, capsys):
        fake_session.queue(json_body=build_search([]))
        run_command(parse_args(["find", "x", "--most-recent"]), client)
        assert capsys.readouterr().out.strip() == "null"

    def test_otp_prints_code(self, client, fake_session, capsys):
        fake_session.queue(json_body=build_search([build_message("m1", body=otp_body("777777"))]))
        fake_session.queue(200)

        run_command(parse_args(["otp", "user@example.com"]), client)
        assert capsys.readouterr().out.strip() == "777777"

    def test_count_prints_total(self, client, fake_session, capsys):
        fake_session.queue(json_body={"total": 4})
        run_command(parse_args(["count"]), client)
        assert capsys.readouterr().out.strip() == "4"

    def test_count_with_expectation_reports(self, client, fake_session):
        fake_session.queue(json_body={"total": 1})
        run_command(parse_args(["count", "Welcome", "--expect", "2"]), client)
        assert client.reporter.failed


# =============================================================================
# Entry Point Tests
# =============================================================================

class TestMain:
    """Tests for main."""

    def test_decode_from_stdin(self, clean_env, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("AB=3D"))
        assert main(["decode"]) == EXIT_OK
        assert capsys.readouterr().out == "AB="

    def test_decode_from_file(self, clean_env, tmp_path, capsys):
        source = tmp_path / "body.txt"
        source.write_text("soft=\nbreak")
        assert main(["decode", str(source)]) == EXIT_OK
        assert capsys.readouterr().out == "softbreak"

    def test_missing_url(self, clean_env):
        assert main(["delete-all"]) == EXIT_CONFIG_ERROR

    def test_invalid_url(self, clean_env):
        assert main(["--url", "localhost:8025", "delete-all"]) == EXIT_CONFIG_ERROR

    def test_soft_failure_exit_code(self, clean_env, fake_session, monkeypatch, capsys):
        """Test that a missing one-time code exits with a failure."""
        fake_session.queue(json_body=build_search([]))
        monkeypatch.setattr("mailhog_e2e.client.http.requests.Session", lambda: fake_session)

        assert main(["--url", BASE_URL, "otp", "nobody@example.com"]) == EXIT_FAILURE
        assert "FAILED: No emails found matching that query." in capsys.readouterr().err

    def test_http_error_exit_code(self, clean_env, fake_session, monkeypatch):
        fake_session.queue(500, text="boom")
        monkeypatch.setattr("mailhog_e2e.client.http.requests.Session", lambda: fake_session)
        assert main(["--url", BASE_URL, "delete-all"]) == EXIT_FAILURE
