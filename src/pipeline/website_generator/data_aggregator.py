"""data_aggregator.py: Load, normalize and group catalog records for site generation.

This module forms the data-oriented half of the website generation pipeline.
It reads the canonical ``services.json`` catalog, fills in the derived fields
of every record (domain classification and file-safe name) and partitions the
records by domain. It contains no rendering logic and performs no writes.

Design Principles
-----------------
- Loading is the only step with I/O; malformed input raises
  :class:`~src.exceptions.DataValidationError` before anything is written.
- Normalization and grouping are pure and preserve input order; ordering
  that matters to the output is imposed explicitly by sorting.

Usage
-----
>>> from pathlib import Path
>>> records = normalize_records(load_catalog(Path("services.json")))
>>> domain_map, domains = group_by_domain(records)
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from src.config import DEFAULT_DOMAIN_SEGMENTS, DOMAIN_SUBDIR, MISC_DOMAIN
from src.exceptions import DataValidationError

from .models import DomainGroup, ServiceRecord

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "name",
    "title",
    "documentation",
    "domain",
    "enabled",
    "preferred",
    "version",
    "description",
]


def read_catalog_json(json_path: Path) -> pd.DataFrame:
    """Read the canonical catalog into a DataFrame with a fixed column set.

    Parameters
    ----------
    json_path : Path
        Path to a JSON document holding an array of service objects.

    Returns
    -------
    pd.DataFrame
        One row per catalog entry in file order, with every column of
        ``CATALOG_COLUMNS`` present (missing values are NaN). Unknown keys
        are dropped.

    Raises
    ------
    DataValidationError
        If the file is missing, is not valid JSON, is not an array of
        objects, or lacks the ``name`` field.

    Examples
    --------
    >>> df = read_catalog_json(Path("services.json"))  # doctest: +SKIP
    >>> list(df.columns)[:2]
    ['name', 'title']
    """
    if not json_path.is_file():
        raise DataValidationError(
            f"Catalog file not found: {json_path}", context={"path": str(json_path)}
        )
    try:
        dataframe = pd.read_json(
            json_path, orient="records", dtype=False, convert_dates=False
        )
    except ValueError as exc:
        raise DataValidationError(
            f"Failed to parse catalog JSON: {exc}", context={"path": str(json_path)}
        ) from exc
    if dataframe.empty and len(dataframe.columns) == 0:
        return pd.DataFrame(columns=CATALOG_COLUMNS)
    if "name" not in dataframe.columns:
        raise DataValidationError(
            "Catalog entries must carry a 'name' field",
            context={"path": str(json_path), "columns": list(dataframe.columns)},
        )
    return dataframe.reindex(columns=CATALOG_COLUMNS)


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _text(value: Any) -> str:
    return "" if _is_missing(value) else str(value)


def _flag(value: Any) -> bool | None:
    """Return JSON booleans as ``bool``; any other value counts as missing."""
    if pd.api.types.is_bool(value):
        return bool(value)
    return None


def records_from_frame(dataframe: pd.DataFrame) -> list[ServiceRecord]:
    """Convert catalog rows into typed :class:`ServiceRecord` objects.

    Row order is preserved. Duplicate names are kept as separate records.

    Raises
    ------
    DataValidationError
        If a row has no service name.
    """
    records: list[ServiceRecord] = []
    for position, row in enumerate(dataframe.to_dict(orient="records")):
        name = _text(row.get("name"))
        if not name:
            raise DataValidationError(
                "Catalog entry without a service name", context={"index": position}
            )
        records.append(
            ServiceRecord(
                name=name,
                title=_text(row.get("title")),
                documentation=_text(row.get("documentation")),
                domain=_text(row.get("domain")),
                enabled=_flag(row.get("enabled")),
                preferred=_flag(row.get("preferred")),
                version=_text(row.get("version")),
                description=_text(row.get("description")),
            )
        )
    return records


def load_catalog(json_path: Path) -> list[ServiceRecord]:
    """Load the canonical catalog as typed records (file order)."""
    records = records_from_frame(read_catalog_json(json_path))
    logger.info("Loaded %d service records from %s", len(records), json_path)
    return records


def domain_suffix(name: str, segments: int = DEFAULT_DOMAIN_SEGMENTS) -> str | None:
    """Return the last ``segments`` dot-separated parts of ``name``.

    Returns ``None`` when the name has fewer parts than requested.

    Examples
    --------
    >>> domain_suffix("compute.googleapis.com")
    'googleapis.com'
    >>> domain_suffix("foo") is None
    True
    """
    parts = name.split(".")
    if len(parts) < segments:
        return None
    return ".".join(parts[-segments:])


def derive_domain(name: str) -> str:
    """Domain of a service whose record does not carry one."""
    return domain_suffix(name, DEFAULT_DOMAIN_SEGMENTS) or MISC_DOMAIN


def file_safe_name(name: str) -> str:
    """Stem of the service detail page: every ``/`` becomes ``-``."""
    return name.replace("/", "-")


def normalize_records(records: Iterable[ServiceRecord]) -> list[ServiceRecord]:
    """Populate ``domain`` (when empty) and ``file_name`` on every record.

    The returned list keeps the input order. Records are not deduplicated,
    so two names that collide after slash substitution share a file name.
    """
    return [
        replace(
            record,
            domain=record.domain or derive_domain(record.name),
            file_name=file_safe_name(record.name),
        )
        for record in records
    ]


def url_safe(value: str) -> str:
    """Lowercase ``value`` and replace each space with a hyphen.

    No other character is escaped.

    Examples
    --------
    >>> url_safe("Cloud Storage")
    'cloud-storage'
    """
    return value.replace(" ", "-").lower()


def domain_link(domain: str) -> str:
    """Site-relative path of the detail page for ``domain``."""
    return f"{DOMAIN_SUBDIR}/domain-{url_safe(domain)}.html"


def group_by_domain(
    records: Sequence[ServiceRecord],
) -> tuple[dict[str, list[ServiceRecord]], list[str]]:
    """Partition normalized records by domain.

    Returns
    -------
    tuple[dict[str, list[ServiceRecord]], list[str]]
        Mapping of domain label to its members in first-seen order, and the
        distinct labels sorted by code point (the same order as sorting
        their UTF-8 bytes), independent of input order.
    """
    domain_map: dict[str, list[ServiceRecord]] = {}
    for record in records:
        domain_map.setdefault(record.domain, []).append(record)
    return domain_map, sorted(domain_map)


def build_domain_groups(
    domain_map: dict[str, list[ServiceRecord]], domains: Sequence[str]
) -> list[DomainGroup]:
    """Materialize :class:`DomainGroup` objects in the order of ``domains``."""
    return [
        DomainGroup(
            domain=domain,
            services=tuple(domain_map[domain]),
            link=domain_link(domain),
        )
        for domain in domains
    ]
