"""
mailhog-e2e live tests.

These tests talk to a running MailHog instance. Messages are delivered
over MailHog's SMTP port and read back through its HTTP API, both with
the requests client and with Playwright's request context.

Running Tests:
    # Start MailHog
    docker run -p 1025:1025 -p 8025:8025 mailhog/mailhog

    # Run the live tests
    MAILHOG_URL=http://localhost:8025/api pytest tests/e2e/

Environment Variables:
    MAILHOG_URL: MailHog API URL (tests are skipped when unset)
    MAILHOG_SMTP_HOST: MailHog SMTP host (default: localhost)
    MAILHOG_SMTP_PORT: MailHog SMTP port (default: 1025)
"""
