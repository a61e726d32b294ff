"""Typed records flowing through the website generation pipeline.

Every object here is created fresh per run from the canonical catalog JSON.
Nothing is persisted back except the fields of :class:`ServiceRecord`
returned by :meth:`ServiceRecord.to_dict` (the crawler uses it when writing
``services.json``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping


@dataclass(frozen=True)
class ServiceRecord:
    """One catalog entry describing a cloud service.

    ``domain`` may arrive empty; the normalizer fills it. ``file_name`` is
    always derived and never written back to the catalog.
    """

    name: str
    title: str = ""
    documentation: str = ""
    domain: str = ""
    enabled: bool | None = None
    preferred: bool | None = None
    version: str = ""
    description: str = ""
    file_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the persisted JSON shape, omitting empty optional fields."""
        payload: dict[str, Any] = {"name": self.name, "title": self.title}
        if self.documentation:
            payload["documentation"] = self.documentation
        if self.domain:
            payload["domain"] = self.domain
        if self.enabled is not None:
            payload["enabled"] = self.enabled
        if self.preferred is not None:
            payload["preferred"] = self.preferred
        if self.version:
            payload["version"] = self.version
        if self.description:
            payload["description"] = self.description
        return payload


@dataclass(frozen=True)
class DomainGroup:
    """A domain label together with its member records in first-seen order."""

    domain: str
    services: tuple[ServiceRecord, ...]
    link: str

    @property
    def count(self) -> int:
        return len(self.services)


@dataclass(frozen=True)
class DomainSummary:
    """Row of the domain index page."""

    domain: str
    count: int
    link: str


@dataclass(frozen=True)
class PageJob:
    """A planned unit of output.

    Attributes
    ----------
    path : str
        Target path relative to the output root, always forward-slash separated.
    template : str
        Name of the template used to render the page.
    data : Mapping[str, Any]
        Context bound to the template.
    kind : str
        Page category (``home``, ``services``, ``bydomain``, ``domain`` or
        ``service``); used for logging and reporting only.
    """

    path: str
    template: str
    data: Mapping[str, Any] = field(default_factory=dict)
    kind: str = ""


@dataclass(frozen=True)
class JobOutcome:
    """Result of executing one :class:`PageJob`."""

    job: PageJob
    ok: bool
    error: str | None = None


@dataclass(frozen=True)
class OutputFile:
    """A regular file found under the output root after rendering."""

    relative_path: str
    modified: datetime


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: str | None = None


@dataclass(frozen=True)
class RenderReport:
    """Outcomes of a rendering batch, in job order."""

    outcomes: tuple[JobOutcome, ...] = ()

    @property
    def succeeded(self) -> list[JobOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> list[JobOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]
