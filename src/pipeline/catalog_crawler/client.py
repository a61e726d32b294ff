"""catalog_crawler.client module.

This module defines :class:`CatalogClient`, the asynchronous networking
boundary of the crawler. It issues GET requests against the Service Usage
API and the API Discovery directory and returns parsed JSON or a structured
error description. Requests are throttled by an :class:`aiolimiter.AsyncLimiter`
shared across all calls of a crawl. There is no retry logic: a failed request
is reported once and the caller decides whether that is fatal.

The client never raises for HTTP or network failures. Like the rest of the
pipeline's network code it returns ``(ok, data, error)`` tuples; callers
escalate to :class:`~src.exceptions.ExternalServiceError`.

Examples
--------
>>> import aiohttp
>>> from src.pipeline.catalog_crawler.client import CatalogClient
>>> async def main(config):
...     async with aiohttp.ClientSession() as session:
...         client = CatalogClient(config)
...         ok, data, error = await client.fetch_json(session, config.directory_url)
>>> # import asyncio; asyncio.run(main(CrawlerConfig()))
"""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from aiolimiter import AsyncLimiter

logger = logging.getLogger(__name__)

JsonResult = tuple[bool, dict[str, Any] | None, dict[str, Any] | None]


class CatalogClient:
    r"""Asynchronous JSON client for the catalog sources.

    Parameters
    ----------
    config : Any
        Object exposing ``request_timeout``, ``target_rpm``,
        ``service_usage_endpoint`` and ``page_size`` (normally a
        :class:`~.config.CrawlerConfig`).
    rate_limiter : AsyncLimiter | None, optional
        Limiter shared by all requests; built from ``config.target_rpm``
        when omitted.
    """

    def __init__(self, config: Any, rate_limiter: AsyncLimiter | None = None) -> None:
        self.config = config
        self.rate_limiter = rate_limiter or AsyncLimiter(
            getattr(config, "target_rpm", 120), 60
        )

    async def fetch_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> JsonResult:
        r"""GET ``url`` and decode the JSON body.

        Returns
        -------
        tuple[bool, dict | None, dict | None]
            ``(True, data, None)`` on HTTP 200 with a JSON object body,
            otherwise ``(False, None, error)`` where ``error`` carries an
            ``error_type`` and, for HTTP failures, ``status_code`` and
            ``error_body``.
        """
        try:
            async with self.rate_limiter:
                async with session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(
                        total=getattr(self.config, "request_timeout", 60)
                    ),
                ) as response:
                    status = response.status
                    text = await response.text()
        except aiohttp.ClientError as e:
            return False, None, {"error_type": "ClientError", "message": str(e)}
        except TimeoutError:
            return False, None, {"error_type": "TimeoutError", "url": url}

        if status != 200:
            return (
                False,
                None,
                {"error_type": "HTTPError", "status_code": status, "error_body": text},
            )
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return False, None, {"error_type": "JSONDecodeError", "raw_response_text": text}
        if not isinstance(data, dict):
            return False, None, {"error_type": "UnexpectedPayload", "raw_response_text": text}
        return True, data, None

    async def list_services(
        self,
        session: aiohttp.ClientSession,
        project_id: str,
        access_token: str,
        state: str,
    ) -> tuple[bool, list[dict[str, Any]], dict[str, Any] | None]:
        r"""List every service of ``project_id`` in ``state``, following pages.

        Returns
        -------
        tuple[bool, list[dict], dict | None]
            Success flag, the service objects gathered so far and the error
            of the failing page (``None`` on success).
        """
        url = f"{self.config.service_usage_endpoint}/projects/{project_id}/services"
        headers = {"Authorization": f"Bearer {access_token}"}
        services: list[dict[str, Any]] = []
        page_token = ""
        while True:
            params = {
                "filter": f"state:{state}",
                "pageSize": str(getattr(self.config, "page_size", 200)),
            }
            if page_token:
                params["pageToken"] = page_token
            ok, data, error = await self.fetch_json(
                session, url, params=params, headers=headers
            )
            if not ok or data is None:
                return False, services, error
            services.extend(data.get("services") or [])
            page_token = data.get("nextPageToken") or ""
            if not page_token:
                return True, services, None
            logger.debug("Fetching next %s services page for %s", state, project_id)
