"""Generate the static catalog site from ``services.json``.

This module provides the headless runner for the website generation
pipeline. It wires the stages together in a single pass:

load -> normalize -> group -> plan -> render (one job per page) -> sitemap -> robots

Input errors abort before anything is written. Per-page failures are
collected in the returned :class:`GenerationResult` and never abort the run.
The sitemap and robots post-pass runs only once every page job has finished
and fails the run if the base URL is missing or the tree cannot be read.

Usage Examples
--------------
Typical programmatic usage with environment configuration::

    from src.pipeline.website_generator.config import SiteConfig
    from src.pipeline.website_generator.runner import generate_site

    result = generate_site(SiteConfig.from_env())
    print(len(result.report.failed))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from src.config import LOG_DIR, LOG_FILENAME_GENERATE_SITE, LOG_FORMAT

from .config import SiteConfig
from .data_aggregator import group_by_domain, load_catalog, normalize_records
from .models import RenderReport, ServiceRecord, SitemapEntry
from .planner import plan_page_jobs
from .renderer import PageRenderer, copy_stylesheet, execute_jobs, prepare_output_dir
from .sitemap import write_robots, write_sitemap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Summary of one generation run."""

    record_count: int
    domains: list[str]
    report: RenderReport
    sitemap_entries: list[SitemapEntry] = field(default_factory=list)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    """Configure console and optional file logging for site generation.

    File handler creation errors are ignored so that read-only checkouts
    and tests still get console logging.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_SITE, mode="a")
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def generate_site(
    config: SiteConfig,
    records: Sequence[ServiceRecord] | None = None,
    max_workers: int = 1,
) -> GenerationResult:
    """Run the full generation pipeline.

    Parameters
    ----------
    config : SiteConfig
        Paths and the public base URL.
    records : Sequence[ServiceRecord] | None, optional
        Pre-loaded catalog records. When ``None`` the catalog is read from
        ``config.input_path``.
    max_workers : int, optional
        Rendering threads passed to :func:`execute_jobs`.

    Returns
    -------
    GenerationResult
        Counts, sorted domain labels, per-job outcomes and sitemap entries.

    Raises
    ------
    DataValidationError
        If the catalog cannot be loaded.
    ConfigurationError
        If the stylesheet is missing or no base URL is configured.
    SitemapError
        If the output tree cannot be traversed after rendering.
    """
    if records is None:
        records = load_catalog(config.input_path)
    normalized = normalize_records(records)
    domain_map, domains = group_by_domain(normalized)
    jobs = plan_page_jobs(normalized, domain_map, domains)

    output_dir = config.output_dir
    prepare_output_dir(output_dir, clean=config.clean_output)
    copy_stylesheet(config.style_path, output_dir)

    renderer = PageRenderer(config.templates_dir)
    report = execute_jobs(jobs, renderer, output_dir, max_workers=max_workers)

    site_url = config.site_url
    entries = write_sitemap(output_dir, site_url)
    write_robots(output_dir, site_url, config.disallow, renderer)

    logger.info(
        "HTML generation completed: %d pages written, %d failed, output in %s",
        len(report.succeeded),
        len(report.failed),
        output_dir,
    )
    return GenerationResult(
        record_count=len(normalized),
        domains=list(domains),
        report=report,
        sitemap_entries=entries,
    )


__all__ = ["GenerationResult", "configure_logging", "generate_site"]
