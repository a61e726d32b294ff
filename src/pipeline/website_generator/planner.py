"""Page job planning for the static catalog site.

Turns normalized records and their domain grouping into the complete list of
documents to produce. Planning is pure: no template is loaded and nothing is
written here. Each planned :class:`~.models.PageJob` carries its target path
(relative to the output root), the template that renders it and the data it
binds.

Output layout
-------------
- ``index.html`` - home page, bound to the total record count.
- ``services.html`` - every record in catalog order.
- ``bydomain.html`` - one summary row per domain, sorted by label.
- ``domain/domain-<slug>.html`` - one page per domain.
- ``service/<file-name>.html`` - one page per record.

Target paths are unique by construction except when two service names map to
the same file name; in that case the later job overwrites the earlier page.
"""

from __future__ import annotations

import logging
from typing import Sequence

from src.config import (
    BY_DOMAIN_PAGE,
    BY_DOMAIN_TEMPLATE,
    DOMAIN_TEMPLATE,
    HOME_PAGE,
    HOME_TEMPLATE,
    SERVICE_SUBDIR,
    SERVICE_TEMPLATE,
    SERVICES_PAGE,
    SERVICES_TEMPLATE,
)

from .data_aggregator import build_domain_groups
from .models import DomainGroup, DomainSummary, PageJob, ServiceRecord

logger = logging.getLogger(__name__)


def plan_home_page(records: Sequence[ServiceRecord]) -> PageJob:
    return PageJob(
        path=HOME_PAGE,
        template=HOME_TEMPLATE,
        data={"total_services": len(records)},
        kind="home",
    )


def plan_services_page(records: Sequence[ServiceRecord]) -> PageJob:
    return PageJob(
        path=SERVICES_PAGE,
        template=SERVICES_TEMPLATE,
        data={"services": list(records)},
        kind="services",
    )


def summarize_domains(groups: Sequence[DomainGroup]) -> list[DomainSummary]:
    """Build the rows of the domain index, keeping the order of ``groups``."""
    return [
        DomainSummary(domain=group.domain, count=group.count, link=group.link)
        for group in groups
    ]


def plan_domain_index_page(groups: Sequence[DomainGroup]) -> PageJob:
    return PageJob(
        path=BY_DOMAIN_PAGE,
        template=BY_DOMAIN_TEMPLATE,
        data={"domains": summarize_domains(groups)},
        kind="bydomain",
    )


def plan_domain_page(group: DomainGroup) -> PageJob:
    return PageJob(
        path=group.link,
        template=DOMAIN_TEMPLATE,
        data={"domain": group.domain, "services": list(group.services)},
        kind="domain",
    )


def service_page_path(record: ServiceRecord) -> str:
    """Relative path of the detail page for a normalized record."""
    return f"{SERVICE_SUBDIR}/{record.file_name}.html"


def plan_service_page(record: ServiceRecord) -> PageJob:
    return PageJob(
        path=service_page_path(record),
        template=SERVICE_TEMPLATE,
        data={"service": record},
        kind="service",
    )


def plan_page_jobs(
    records: Sequence[ServiceRecord],
    domain_map: dict[str, list[ServiceRecord]],
    domains: Sequence[str],
) -> list[PageJob]:
    """Enumerate every page of the site.

    Parameters
    ----------
    records : Sequence[ServiceRecord]
        Normalized records in catalog order.
    domain_map : dict[str, list[ServiceRecord]]
        Domain label to member records, as returned by ``group_by_domain``.
    domains : Sequence[str]
        Sorted domain labels; governs the order of the domain index and of
        the per-domain jobs.

    Returns
    -------
    list[PageJob]
        Home, full listing and domain index jobs first, followed by one job
        per domain and one job per record.

    Examples
    --------
    >>> from src.pipeline.website_generator.data_aggregator import (
    ...     group_by_domain, normalize_records)
    >>> records = normalize_records([ServiceRecord(name="compute.googleapis.com")])
    >>> jobs = plan_page_jobs(records, *group_by_domain(records))
    >>> [job.path for job in jobs]  # doctest: +NORMALIZE_WHITESPACE
    ['index.html', 'services.html', 'bydomain.html',
     'domain/domain-googleapis.com.html', 'service/compute.googleapis.com.html']
    """
    groups = build_domain_groups(domain_map, domains)
    jobs = [
        plan_home_page(records),
        plan_services_page(records),
        plan_domain_index_page(groups),
    ]
    jobs.extend(plan_domain_page(group) for group in groups)
    jobs.extend(plan_service_page(record) for record in records)
    logger.debug(
        "Planned %d page jobs (%d domains, %d services)",
        len(jobs),
        len(groups),
        len(records),
    )
    return jobs
