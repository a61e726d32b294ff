"""Catalog crawler package.

Fetches the raw inputs of the website generator: the project's service list
from the Service Usage API (written to ``services.json``) and the public API
Discovery directory (written to ``directory.json``).

Modules
-------
client
    :class:`CatalogClient`, the rate-limited aiohttp boundary.
config
    :class:`CrawlerConfig`, environment-driven settings.
crawler
    Crawl orchestration and the synchronous ``run_from_config`` entrypoint.
file_handler
    JSON persistence helpers.
"""

from __future__ import annotations

from .client import CatalogClient
from .config import CrawlerConfig
from .crawler import crawl_catalog, crawl_domain, merge_services, run_from_config
from .models import DirectoryEntry, DirectoryList

__all__ = [
    "CatalogClient",
    "CrawlerConfig",
    "DirectoryEntry",
    "DirectoryList",
    "crawl_catalog",
    "crawl_domain",
    "merge_services",
    "run_from_config",
]
