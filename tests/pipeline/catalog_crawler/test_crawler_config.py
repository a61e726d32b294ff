"""Tests for environment-driven crawler configuration."""

from pathlib import Path

import pytest

from src.exceptions import ConfigurationError
from src.pipeline.catalog_crawler.config import CrawlerConfig

CRAWLER_VARS = (
    "GCP_PROJECT_ID",
    "GCP_ACCESS_TOKEN",
    "REQUEST_TIMEOUT",
    "TARGET_RPM",
    "SERVICES_JSON",
    "DIRECTORY_JSON",
    "SERVICE_USAGE_ENDPOINT",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    import src.config as project_config

    monkeypatch.setattr(project_config, "PROJECT_ROOT", tmp_path)
    for name in CRAWLER_VARS:
        # registered so values loaded from .env are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


def test_crawler_config_reads_environment(clean_env, tmp_path: Path):
    clean_env.setenv("GCP_PROJECT_ID", "proj")
    clean_env.setenv("GCP_ACCESS_TOKEN", "tok")
    clean_env.setenv("TARGET_RPM", "30")
    clean_env.setenv("SERVICES_JSON", str(tmp_path / "s.json"))
    clean_env.setenv("SERVICE_USAGE_ENDPOINT", "https://su.invalid/v1/")
    cfg = CrawlerConfig()
    assert cfg.target_rpm == 30
    assert cfg.services_path == tmp_path / "s.json"
    assert cfg.service_usage_endpoint == "https://su.invalid/v1"
    assert cfg.require_service_usage_credentials() == ("proj", "tok")


def test_crawler_config_missing_credentials(clean_env):
    cfg = CrawlerConfig()
    with pytest.raises(ConfigurationError) as excinfo:
        cfg.require_service_usage_credentials()
    assert excinfo.value.context["setting"] == "GCP_PROJECT_ID"
    cfg.project_id = "proj"
    with pytest.raises(ConfigurationError, match="GCP_ACCESS_TOKEN"):
        cfg.require_service_usage_credentials()


def test_crawler_config_loads_dotenv(clean_env, tmp_path: Path):
    (tmp_path / ".env").write_text("GCP_PROJECT_ID=from-dotenv\n", encoding="utf-8")
    cfg = CrawlerConfig()
    assert cfg.project_id == "from-dotenv"

