"""Configuration and environment loader for the catalog crawler.

This module provides :class:`CrawlerConfig`, which loads the settings the
crawler needs to reach the Service Usage API and the Google API Discovery
directory. Values come from environment variables and an optional project
``.env`` file.

Examples
--------
>>> from src.pipeline.catalog_crawler.config import CrawlerConfig
>>> cfg = CrawlerConfig()
>>> cfg.target_rpm > 0
True
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

import src.config as _project_config
from src.config import (
    API_DIRECTORY_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TARGET_RPM,
    DIRECTORY_JSON_PATH,
    SERVICE_USAGE_ENDPOINT,
    SERVICE_USAGE_PAGE_SIZE,
    SERVICES_JSON_PATH,
)
from src.exceptions import ConfigurationError


class CrawlerConfig:
    r"""Crawler settings read from the environment.

    Attributes
    ----------
    project_id : str | None
        Project whose enabled and disabled services are listed
        (``GCP_PROJECT_ID``).
    access_token : str | None
        OAuth bearer token for the Service Usage API (``GCP_ACCESS_TOKEN``).
    service_usage_endpoint : str
        Base URL of the Service Usage REST API.
    directory_url : str
        URL of the API Discovery directory listing.
    page_size : int
        Services requested per Service Usage page.
    request_timeout : int
        Timeout in seconds for a single HTTP request (``REQUEST_TIMEOUT``).
    target_rpm : int
        Request budget per minute (``TARGET_RPM``).
    services_path : Path
        Where the service catalog is written (``SERVICES_JSON``).
    directory_path : Path
        Where the API directory is written (``DIRECTORY_JSON``).

    Notes
    -----
    Only the Service Usage step needs the project id and token; the
    directory crawl is anonymous, so missing credentials are reported by
    :meth:`require_service_usage_credentials` rather than at construction.
    """

    def __init__(self) -> None:
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
        self.project_id: str | None = os.getenv("GCP_PROJECT_ID") or None
        self.access_token: str | None = os.getenv("GCP_ACCESS_TOKEN") or None
        self.service_usage_endpoint: str = os.getenv(
            "SERVICE_USAGE_ENDPOINT", SERVICE_USAGE_ENDPOINT
        ).rstrip("/")
        self.directory_url: str = os.getenv("API_DIRECTORY_URL", API_DIRECTORY_URL)
        self.page_size = int(os.getenv("SERVICE_USAGE_PAGE_SIZE", SERVICE_USAGE_PAGE_SIZE))
        self.request_timeout = int(os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        self.target_rpm = int(os.getenv("TARGET_RPM", DEFAULT_TARGET_RPM))
        services_path = os.getenv("SERVICES_JSON")
        directory_path = os.getenv("DIRECTORY_JSON")
        self.services_path: Path = (
            Path(services_path) if services_path else SERVICES_JSON_PATH
        )
        self.directory_path: Path = (
            Path(directory_path) if directory_path else DIRECTORY_JSON_PATH
        )

    def require_service_usage_credentials(self) -> tuple[str, str]:
        """Return ``(project_id, access_token)`` or raise.

        Raises
        ------
        ConfigurationError
            If either value is missing.
        """
        if not self.project_id:
            raise ConfigurationError(
                "GCP_PROJECT_ID environment variable is required",
                context={"setting": "GCP_PROJECT_ID"},
            )
        if not self.access_token:
            raise ConfigurationError(
                "GCP_ACCESS_TOKEN environment variable is required",
                context={"setting": "GCP_ACCESS_TOKEN"},
            )
        return self.project_id, self.access_token
