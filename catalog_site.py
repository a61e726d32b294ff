"""Minimal launcher for the service catalog site tool.

Its single responsibility is to provide a tiny entrypoint that delegates
execution to ``src.cli``.

Usage:
    python catalog_site.py --crawl
    python catalog_site.py --generate [--base-url URL] [--output DIR]

"""

from __future__ import annotations


def entry_point(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    The CLI is imported inside the function to avoid importing the whole
    application at module import time.
    """
    from src.cli import main

    return main(argv)


if __name__ == "__main__":
    raise SystemExit(entry_point())
