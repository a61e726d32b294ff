"""Command line interface for the service catalog site.

Two mutually exclusive run modes are offered:

``--crawl``
    Fetch the service catalog and the API directory and save them as JSON.
``--generate``
    Render the static site, ``sitemap.xml`` and ``robots.txt`` from the
    saved catalog.

Exactly one mode must be given; both or neither is a usage error. Fatal
errors (bad input, missing configuration, unreadable output tree) are logged
and end the process with status 1. Pages that fail to render are only
reported in the log and in the closing summary.

Examples
--------
>>> # In shell
>>> python -m src.cli --generate --base-url https://example.com --output html
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from src.exceptions import AppError

if TYPE_CHECKING:
    from src.pipeline.website_generator.runner import GenerationResult

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-site",
        description="Crawl the Google Cloud service catalog or generate its static site.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--crawl",
        action="store_true",
        help="Crawl service usage and the API directory and save them as JSON",
    )
    mode.add_argument(
        "--generate",
        action="store_true",
        help="Generate HTML pages from the saved services.json data",
    )
    parser.add_argument("--input", type=Path, default=None, help="Catalog JSON file")
    parser.add_argument("--output", type=Path, default=None, help="Output directory")
    parser.add_argument(
        "--base-url", default=None, help="Public site URL (overrides WEBSITE)"
    )
    parser.add_argument(
        "--clean", action="store_true", help="Remove the previous output tree first"
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="Number of page rendering threads"
    )
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments; usage errors exit with status 2."""
    return build_parser().parse_args(argv)


def print_generation_summary(
    result: GenerationResult, console: Console | None = None
) -> None:
    """Print a short table of the generation run followed by failed pages."""
    console = console or Console()
    table = Table(title="Site generation")
    table.add_column("Item")
    table.add_column("Count", justify="right")
    table.add_row("Services", str(result.record_count))
    table.add_row("Domains", str(len(result.domains)))
    table.add_row("Pages written", str(len(result.report.succeeded)))
    table.add_row("Pages failed", str(len(result.report.failed)))
    table.add_row("Sitemap URLs", str(len(result.sitemap_entries)))
    console.print(table)
    for outcome in result.report.failed:
        console.print(f"[red]failed[/red] {outcome.job.path}: {outcome.error}")


def run_generate(args: argparse.Namespace) -> int:
    from src.pipeline.website_generator.config import SiteConfig
    from src.pipeline.website_generator.runner import configure_logging, generate_site

    configure_logging(args.log_level, enable_file=not os.environ.get("DISABLE_FILE_LOGS"))
    config = SiteConfig.from_env()
    overrides: dict[str, object] = {"clean_output": bool(args.clean)}
    if args.input is not None:
        overrides["input_path"] = args.input
    if args.output is not None:
        overrides["output_dir"] = args.output
    if args.base_url:
        overrides["base_url"] = args.base_url
    config = replace(config, **overrides)
    result = generate_site(config, max_workers=max(1, args.workers))
    print_generation_summary(result)
    return 0


def run_crawl(args: argparse.Namespace) -> int:
    from src.pipeline.catalog_crawler.config import CrawlerConfig
    from src.pipeline.catalog_crawler.crawler import configure_logging, run_from_config

    configure_logging(args.log_level, enable_file=not os.environ.get("DISABLE_FILE_LOGS"))
    config = CrawlerConfig()
    if args.input is not None:
        config.services_path = args.input
    counts = run_from_config(config)
    logger.info(
        "Crawl finished: %d services, %d directory entries",
        counts["services"],
        counts["directory_items"],
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the selected mode and return the process exit status."""
    args = parse_cli_args(argv)
    try:
        if args.crawl:
            return run_crawl(args)
        return run_generate(args)
    except (AppError, OSError) as exc:
        mode = "Crawl" if args.crawl else "Generate"
        logger.error("%s failed: %s", mode, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
