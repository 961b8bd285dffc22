"""
Progress reporting seam for the fetch, scoring and submission steps.

Functions in this project take a ``reporter`` argument instead of printing
directly so tests can capture messages.  The default reporter prints to the
console.
"""

from __future__ import annotations

import sys


class ConsoleReporter:
    """Print progress lines; errors go to stderr."""

    def info(self, message: str) -> None:
        print(message)

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}")

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)


DEFAULT_REPORTER = ConsoleReporter()
