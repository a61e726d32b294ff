"""Tests for crawl orchestration and catalog persistence."""

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from src.exceptions import ConfigurationError, ExternalServiceError
from src.pipeline.catalog_crawler import crawler
from src.pipeline.catalog_crawler.config import CrawlerConfig
from src.pipeline.website_generator.data_aggregator import load_catalog


def test_crawl_domain_overrides():
    assert crawler.crawl_domain("compute.googleapis.com") == "googleapis.com"
    assert crawler.crawl_domain("endpoints.my-proj.cloud.goog") == "my-proj.cloud.goog"
    assert crawler.crawl_domain("x.cloud.goog") == "x.cloud.goog"
    assert crawler.crawl_domain("cloud.goog") == "cloud.goog"
    assert crawler.crawl_domain("single") == ""


def test_merge_services_first_seen_wins_and_sorted():
    enabled = [
        {"config": {"name": "storage.googleapis.com", "title": "Cloud Storage",
                    "documentation": {"summary": "Stores objects."}}, "state": "ENABLED"},
        {"config": {"name": "compute.googleapis.com", "title": "Compute Engine"}, "state": "ENABLED"},
    ]
    disabled = [
        {"config": {"name": "storage.googleapis.com", "title": "Duplicate"}, "state": "DISABLED"},
        {"config": {"name": "bigquery.googleapis.com", "title": "BigQuery"}, "state": "DISABLED"},
        {"config": {}},
    ]
    records = crawler.merge_services([enabled, disabled])
    assert [r.name for r in records] == [
        "bigquery.googleapis.com",
        "compute.googleapis.com",
        "storage.googleapis.com",
    ]
    storage = records[2]
    assert storage.title == "Cloud Storage"
    assert storage.documentation == "Stores objects."
    assert storage.enabled is True
    assert records[0].enabled is False
    assert records[0].domain == "googleapis.com"


class StubClient:
    def __init__(self, services=None, directory=None):
        self.services = services or {}
        self.directory = directory

    async def list_services(self, session, project_id, access_token, state):
        if state not in self.services:
            return False, [], {"error_type": "HTTPError", "status_code": 403}
        return True, self.services[state], None

    async def fetch_json(self, session, url, **kwargs):
        if self.directory is None:
            return False, None, {"error_type": "ClientError", "message": "down"}
        return True, self.directory, None


def make_config(tmp_path: Path, **overrides):
    values = dict(
        project_id="proj",
        access_token="tok",
        directory_url="https://directory.invalid/apis",
        services_path=tmp_path / "services.json",
        directory_path=tmp_path / "directory.json",
        target_rpm=60,
    )
    values.update(overrides)
    cfg = SimpleNamespace(**values)
    cfg.require_service_usage_credentials = lambda: CrawlerConfig.require_service_usage_credentials(cfg)
    return cfg


DIRECTORY = {
    "kind": "discovery#directoryList",
    "discoveryVersion": "v1",
    "items": [
        {
            "kind": "discovery#directoryItem",
            "id": "storage:v1",
            "name": "storage",
            "version": "v1",
            "title": "Cloud Storage JSON API",
            "discoveryRestUrl": "https://storage.googleapis.com/$discovery/rest?version=v1",
            "icons": {"x16": "a.png", "x32": "b.png"},
            "preferred": True,
        }
    ],
}


@pytest.mark.asyncio
async def test_crawl_service_usage_writes_loadable_catalog(tmp_path: Path):
    cfg = make_config(tmp_path)
    client = StubClient(
        services={
            "ENABLED": [{"config": {"name": "compute.googleapis.com", "title": "Compute Engine"}, "state": "ENABLED"}],
            "DISABLED": [{"config": {"name": "abc.endpoints.p.cloud.goog", "title": "Endpoint"}, "state": "DISABLED"}],
        }
    )
    records = await crawler.crawl_service_usage(client, None, cfg)
    assert [r.name for r in records] == ["abc.endpoints.p.cloud.goog", "compute.googleapis.com"]
    saved = json.loads(cfg.services_path.read_text(encoding="utf-8"))
    assert saved[0] == {
        "name": "abc.endpoints.p.cloud.goog",
        "title": "Endpoint",
        "domain": "p.cloud.goog",
        "enabled": False,
    }
    assert [r.name for r in load_catalog(cfg.services_path)] == [r.name for r in records]


@pytest.mark.asyncio
async def test_crawl_service_usage_failure_raises(tmp_path: Path):
    cfg = make_config(tmp_path)
    client = StubClient(services={"ENABLED": []})
    with pytest.raises(ExternalServiceError):
        await crawler.crawl_service_usage(client, None, cfg)
    assert not cfg.services_path.exists()


@pytest.mark.asyncio
async def test_crawl_service_usage_requires_credentials(tmp_path: Path):
    cfg = make_config(tmp_path, project_id=None)
    with pytest.raises(ConfigurationError):
        await crawler.crawl_service_usage(StubClient(), None, cfg)


@pytest.mark.asyncio
async def test_crawl_api_directory(tmp_path: Path):
    cfg = make_config(tmp_path)
    directory = await crawler.crawl_api_directory(StubClient(directory=DIRECTORY), None, cfg)
    assert directory.items[0].discovery_rest_url.startswith("https://storage")
    saved = json.loads(cfg.directory_path.read_text(encoding="utf-8"))
    assert saved["discoveryVersion"] == "v1"
    assert saved["items"][0]["preferred"] is True
    assert saved["items"][0]["icons"] == {"x16": "a.png", "x32": "b.png"}


@pytest.mark.asyncio
async def test_crawl_api_directory_failure(tmp_path: Path):
    cfg = make_config(tmp_path)
    with pytest.raises(ExternalServiceError):
        await crawler.crawl_api_directory(StubClient(), None, cfg)


class FakeClientSession:
    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


@pytest.mark.asyncio
async def test_crawl_catalog_continues_when_service_usage_fails(monkeypatch, tmp_path: Path):
    cfg = make_config(tmp_path, access_token=None)
    monkeypatch.setattr(crawler.aiohttp, "ClientSession", FakeClientSession)
    monkeypatch.setattr(crawler, "CatalogClient", lambda config, limiter: StubClient(directory=DIRECTORY))
    counts = await crawler.crawl_catalog(cfg)
    assert counts == {"services": 0, "directory_items": 1}
    assert cfg.directory_path.exists()
    assert not cfg.services_path.exists()


@pytest.mark.asyncio
async def test_crawl_catalog_directory_failure_is_fatal(monkeypatch, tmp_path: Path):
    cfg = make_config(tmp_path)
    monkeypatch.setattr(crawler.aiohttp, "ClientSession", FakeClientSession)
    monkeypatch.setattr(
        crawler,
        "CatalogClient",
        lambda config, limiter: StubClient(services={"ENABLED": [], "DISABLED": []}),
    )
    with pytest.raises(ExternalServiceError):
        await crawler.crawl_catalog(cfg)
