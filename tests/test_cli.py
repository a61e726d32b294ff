"""Tests for the command line entrypoint."""

import json
from pathlib import Path

import pytest
from rich.console import Console

from src import cli
from src.pipeline.website_generator.models import JobOutcome, PageJob, RenderReport
from src.pipeline.website_generator.runner import GenerationResult


def write_catalog(path: Path) -> Path:
    path.write_text(
        json.dumps(
            [
                {"name": "compute.googleapis.com", "title": "Compute Engine"},
                {"name": "storage.googleapis.com", "title": "Cloud Storage"},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.mark.parametrize("argv", [[], ["--crawl", "--generate"]])
def test_mode_flags_are_mutually_exclusive_and_required(argv):
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_cli_args(argv)
    assert excinfo.value.code == 2


def test_generate_mode_writes_site(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("WEBSITE", raising=False)
    catalog = write_catalog(tmp_path / "services.json")
    out = tmp_path / "html"
    code = cli.main(
        [
            "--generate",
            "--input",
            str(catalog),
            "--output",
            str(out),
            "--base-url",
            "https://catalog.example.com/",
            "--log-level",
            "WARNING",
        ]
    )
    assert code == 0
    assert (out / "index.html").exists()
    assert (out / "service" / "compute.googleapis.com.html").exists()
    assert "https://catalog.example.com/sitemap.xml" in (out / "robots.txt").read_text(
        encoding="utf-8"
    )


def test_generate_mode_missing_catalog_fails(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("WEBSITE", raising=False)
    code = cli.main(
        [
            "--generate",
            "--input",
            str(tmp_path / "missing.json"),
            "--output",
            str(tmp_path / "html"),
            "--base-url",
            "https://catalog.example.com",
        ]
    )
    assert code == 1
    assert not (tmp_path / "html").exists()


def test_generate_mode_without_base_url_fails(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("WEBSITE", raising=False)
    catalog = write_catalog(tmp_path / "services.json")
    code = cli.main(
        ["--generate", "--input", str(catalog), "--output", str(tmp_path / "html")]
    )
    assert code == 1
    assert not (tmp_path / "html" / "sitemap.xml").exists()


def test_crawl_mode_uses_run_from_config(monkeypatch, tmp_path: Path):
    import src.pipeline.catalog_crawler.crawler as crawler

    seen = {}

    def fake_run(config):
        seen["services_path"] = config.services_path
        return {"services": 3, "directory_items": 7}

    monkeypatch.setattr(crawler, "run_from_config", fake_run)
    assert cli.main(["--crawl", "--input", str(tmp_path / "s.json")]) == 0
    assert seen["services_path"] == tmp_path / "s.json"


def test_print_generation_summary_lists_failures():
    failed = PageJob(path="service/bad.html", template="service.html", kind="service")
    good = PageJob(path="index.html", template="index.html", kind="home")
    result = GenerationResult(
        record_count=1,
        domains=["googleapis.com"],
        report=RenderReport(
            outcomes=(
                JobOutcome(job=good, ok=True),
                JobOutcome(job=failed, ok=False, error="RuntimeError: boom"),
            )
        ),
        sitemap_entries=[],
    )
    console = Console(record=True, width=120)
    cli.print_generation_summary(result, console=console)
    text = console.export_text()
    assert "Pages written" in text
    assert "service/bad.html: RuntimeError: boom" in text
