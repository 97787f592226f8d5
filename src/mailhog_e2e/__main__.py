#!/usr/bin/env python3
"""
Allow running mailhog-e2e as a module: python -m mailhog_e2e

This enables the following usage:
    python -m mailhog_e2e [OPTIONS] COMMAND

Which is equivalent to:
    mailhog-e2e [OPTIONS] COMMAND
"""

from mailhog_e2e.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
