"""Main entry point for the link statistics experiment."""

from __future__ import annotations

import sys

from linkstats.cli import main


if __name__ == "__main__":
    sys.exit(main())
