"""Website Generator Pipeline Module.

Summary
-------
Import surface of the static catalog site generator. The package turns the
flat ``services.json`` catalog into a browsable site: a home page, a full
listing, a domain index, one page per domain, one page per service, plus
``sitemap.xml`` and ``robots.txt`` derived from the rendered tree.

Submodules
----------
- ``data_aggregator``: catalog loading, record normalization, domain grouping.
- ``planner``: enumeration of page jobs and their target paths.
- ``renderer``: Jinja2 rendering, page writing, stylesheet copy.
- ``sitemap``: output tree inventory, sitemap and robots artifacts.
- ``runner``: end-to-end orchestration and logging setup.

Usage
-----
>>> from src.pipeline.website_generator import SiteConfig, generate_site
>>> result = generate_site(SiteConfig(base_url="https://example.com"))
"""

from .config import SiteConfig
from .data_aggregator import (
    derive_domain,
    file_safe_name,
    group_by_domain,
    load_catalog,
    normalize_records,
    url_safe,
)
from .models import (
    DomainGroup,
    JobOutcome,
    OutputFile,
    PageJob,
    RenderReport,
    ServiceRecord,
    SitemapEntry,
)
from .planner import plan_page_jobs
from .renderer import PageRenderer, execute_jobs
from .runner import GenerationResult, generate_site
from .sitemap import build_sitemap_entries, list_output_files, render_sitemap_xml

__all__ = [
    "DomainGroup",
    "GenerationResult",
    "JobOutcome",
    "OutputFile",
    "PageJob",
    "PageRenderer",
    "RenderReport",
    "ServiceRecord",
    "SiteConfig",
    "SitemapEntry",
    "build_sitemap_entries",
    "derive_domain",
    "execute_jobs",
    "file_safe_name",
    "generate_site",
    "group_by_domain",
    "list_output_files",
    "load_catalog",
    "normalize_records",
    "plan_page_jobs",
    "render_sitemap_xml",
    "url_safe",
]
