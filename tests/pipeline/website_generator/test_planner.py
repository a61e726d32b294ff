"""Tests for page job planning."""

from collections import Counter

from src.pipeline.website_generator.data_aggregator import (
    group_by_domain,
    normalize_records,
)
from src.pipeline.website_generator.models import DomainSummary, ServiceRecord
from src.pipeline.website_generator.planner import plan_page_jobs


def plan(records):
    normalized = normalize_records(records)
    domain_map, domains = group_by_domain(normalized)
    return normalized, plan_page_jobs(normalized, domain_map, domains)


def test_two_services_plan(two_services):
    normalized, jobs = plan(two_services)
    assert [job.path for job in jobs] == [
        "index.html",
        "services.html",
        "bydomain.html",
        "domain/domain-googleapis.com.html",
        "service/compute.googleapis.com.html",
        "service/storage.googleapis.com.html",
    ]
    by_path = {job.path: job for job in jobs}
    assert by_path["index.html"].data == {"total_services": 2}
    assert by_path["services.html"].data["services"] == normalized
    assert by_path["bydomain.html"].data["domains"] == [
        DomainSummary("googleapis.com", 2, "domain/domain-googleapis.com.html")
    ]
    domain_job = by_path["domain/domain-googleapis.com.html"]
    assert domain_job.template == "domain.html"
    assert domain_job.data["domain"] == "googleapis.com"
    assert [s.name for s in domain_job.data["services"]] == [
        "compute.googleapis.com",
        "storage.googleapis.com",
    ]
    assert by_path["service/storage.googleapis.com.html"].data["service"].title == "Cloud Storage"


def test_job_counts_and_templates():
    records = [
        ServiceRecord(name="a.googleapis.com"),
        ServiceRecord(name="b.cloud.goog"),
        ServiceRecord(name="c"),
    ]
    _, jobs = plan(records)
    kinds = Counter(job.kind for job in jobs)
    assert kinds == {"home": 1, "services": 1, "bydomain": 1, "domain": 3, "service": 3}
    templates = {job.kind: job.template for job in jobs}
    assert templates == {
        "home": "index.html",
        "services": "services.html",
        "bydomain": "bydomain.html",
        "domain": "domain.html",
        "service": "service.html",
    }
    assert len({job.path for job in jobs}) == len(jobs)


def test_domain_slug_in_path():
    _, jobs = plan([ServiceRecord(name="x", domain="Cloud Storage")])
    assert "domain/domain-cloud-storage.html" in [job.path for job in jobs]


def test_domain_index_follows_sorted_labels_regardless_of_input_order():
    records = [
        ServiceRecord(name="b.zeta.io"),
        ServiceRecord(name="a.alpha.io"),
        ServiceRecord(name="c.mid.io"),
    ]
    _, jobs_a = plan(records)
    _, jobs_b = plan(list(reversed(records)))
    rows_a = [row.domain for row in jobs_a[2].data["domains"]]
    rows_b = [row.domain for row in jobs_b[2].data["domains"]]
    assert rows_a == rows_b == ["alpha.io", "mid.io", "zeta.io"]


def test_services_listing_keeps_catalog_order():
    records = [ServiceRecord(name="z.a.com"), ServiceRecord(name="a.z.com")]
    _, jobs = plan(records)
    assert [s.name for s in jobs[1].data["services"]] == ["z.a.com", "a.z.com"]


def test_colliding_file_names_share_a_path():
    _, jobs = plan(
        [ServiceRecord(name="a/b.example.com"), ServiceRecord(name="a-b.example.com")]
    )
    service_paths = [job.path for job in jobs if job.kind == "service"]
    assert service_paths == ["service/a-b.example.com.html"] * 2


def test_empty_catalog_still_plans_index_pages():
    _, jobs = plan([])
    assert [job.path for job in jobs] == ["index.html", "services.html", "bydomain.html"]
    assert jobs[0].data == {"total_services": 0}
