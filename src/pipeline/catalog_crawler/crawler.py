"""Crawl the Google Cloud service catalog and persist it as JSON.

Two sources are crawled:

- the Service Usage API, listing the enabled and then the disabled services
  of one project; the result becomes the canonical ``services.json``
  consumed by the website generator;
- the public API Discovery directory, saved as ``directory.json``.

A Service Usage failure (including missing credentials) is logged as a
warning and the directory crawl still runs. A directory failure fails the
crawl.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping

import aiohttp
from aiolimiter import AsyncLimiter

from src.config import (
    DEFAULT_DOMAIN_SEGMENTS,
    DOMAIN_SEGMENT_OVERRIDES,
    LOG_DIR,
    LOG_FILENAME_CRAWL,
    LOG_FORMAT,
    SERVICE_USAGE_STATES,
)
from src.exceptions import AppError, ExternalServiceError
from src.pipeline.website_generator.data_aggregator import domain_suffix
from src.pipeline.website_generator.models import ServiceRecord

from .client import CatalogClient
from .config import CrawlerConfig
from .file_handler import save_directory_json, save_services_json
from .models import DirectoryList

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    """Configure console and optional file logging for the crawler."""
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_CRAWL, mode="a")
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def crawl_domain(
    name: str, overrides: Mapping[str, int] = DOMAIN_SEGMENT_OVERRIDES
) -> str:
    """Domain recorded for a crawled service, or ``""`` if the name is too short.

    Names ending in an override suffix keep that many trailing segments;
    everything else keeps the last two.

    Examples
    --------
    >>> crawl_domain("compute.googleapis.com")
    'googleapis.com'
    >>> crawl_domain("endpoints.my-project.cloud.goog")
    'my-project.cloud.goog'
    """
    segments = DEFAULT_DOMAIN_SEGMENTS
    for suffix, override in overrides.items():
        if name.endswith(suffix):
            segments = override
            break
    return domain_suffix(name, segments) or ""


def record_from_service(service: Mapping[str, Any]) -> ServiceRecord | None:
    """Build a record from a Service Usage ``Service`` object.

    Returns ``None`` when the object carries no service name.
    """
    service_config = service.get("config") or {}
    name = str(service_config.get("name") or "")
    if not name:
        return None
    documentation = service_config.get("documentation") or {}
    state = service.get("state")
    return ServiceRecord(
        name=name,
        title=str(service_config.get("title") or ""),
        documentation=str(documentation.get("summary") or ""),
        domain=crawl_domain(name),
        enabled=(state == "ENABLED") if state else None,
    )


def merge_services(batches: Iterable[Iterable[Mapping[str, Any]]]) -> list[ServiceRecord]:
    """Keep the first record seen for each service name, sorted by name."""
    services: dict[str, ServiceRecord] = {}
    for batch in batches:
        for service in batch:
            record = record_from_service(service)
            if record is None or record.name in services:
                continue
            services[record.name] = record
    return sorted(services.values(), key=lambda record: record.name)


async def crawl_service_usage(
    client: CatalogClient, session: aiohttp.ClientSession, config: CrawlerConfig
) -> list[ServiceRecord]:
    """List the project's services in every state and write ``services.json``.

    Raises
    ------
    ConfigurationError
        If the project id or access token is missing.
    ExternalServiceError
        If any Service Usage page request fails.
    """
    project_id, access_token = config.require_service_usage_credentials()
    batches: list[list[dict[str, Any]]] = []
    for state in SERVICE_USAGE_STATES:
        ok, services, error = await client.list_services(
            session, project_id, access_token, state
        )
        if not ok:
            raise ExternalServiceError(
                f"Failed to get {state.lower()} services",
                context={"state": state, **(error or {})},
            )
        batches.append(services)
    records = merge_services(batches)
    save_services_json(records, config.services_path)
    logger.info("Service catalog saved to %s", config.services_path)
    return records


async def crawl_api_directory(
    client: CatalogClient, session: aiohttp.ClientSession, config: CrawlerConfig
) -> DirectoryList:
    """Fetch the API Discovery directory and write ``directory.json``.

    Raises
    ------
    ExternalServiceError
        If the directory cannot be fetched or decoded.
    """
    ok, data, error = await client.fetch_json(session, config.directory_url)
    if not ok or data is None:
        raise ExternalServiceError(
            "API directory request failed",
            context={"url": config.directory_url, **(error or {})},
        )
    directory = DirectoryList.from_dict(data)
    save_directory_json(directory, config.directory_path)
    logger.info("API directory saved to %s", config.directory_path)
    return directory


async def crawl_catalog(config: CrawlerConfig) -> dict[str, int]:
    """Crawl both sources and return counts of what was saved.

    Returns
    -------
    dict[str, int]
        ``services`` (``0`` when the Service Usage step failed) and
        ``directory_items``.
    """
    client = CatalogClient(config, AsyncLimiter(config.target_rpm, 60))
    async with aiohttp.ClientSession() as session:
        services: list[ServiceRecord] = []
        try:
            services = await crawl_service_usage(client, session, config)
        except AppError as exc:
            logger.warning("Warning: service usage crawl failed: %s", exc)
        directory = await crawl_api_directory(client, session, config)
    return {"services": len(services), "directory_items": len(directory.items)}


def run_from_config(config: CrawlerConfig | None = None) -> dict[str, int]:
    """Synchronous entrypoint used by the CLI."""
    return asyncio.run(crawl_catalog(config or CrawlerConfig()))
