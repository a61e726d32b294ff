"""Page rendering and file output for the static catalog site.

This module executes planned page jobs: each job is rendered with Jinja2
against a named template and written below the output root. It also owns the
small HTML helpers used by the templates (Markdown documentation summaries
rendered with ``markdown2``) and the verbatim stylesheet copy.

System Boundaries
-----------------
- Accepts only planned :class:`~.models.PageJob` objects; knows nothing
  about how records were loaded or grouped.
- A failing job (template error, unwritable file) is logged and recorded as
  a failed :class:`~.models.JobOutcome`; the batch always continues.
- ``execute_jobs`` returns only after every job has finished, so the
  sitemap post-pass sees the complete tree.

Example
-------
>>> from src.pipeline.website_generator import renderer
>>> page_renderer = renderer.PageRenderer(Path("templates"))
>>> report = renderer.execute_jobs(jobs, page_renderer, Path("html"))
>>> len(report.failed)
0
"""

from __future__ import annotations

import concurrent.futures
import logging
import re
import shutil
from pathlib import Path
from typing import Any, Mapping, Sequence

import markdown2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from src.config import DOMAIN_SUBDIR, SERVICE_SUBDIR, STYLE_SHEET_NAME
from src.exceptions import ConfigurationError

from .models import JobOutcome, PageJob, RenderReport

logger = logging.getLogger(__name__)


def clean_html_output(html_content: str) -> str:
    r"""Perform lightweight normalization and cleaning of generated HTML strings.

    Cleans HTML produced from Markdown by removing empty paragraphs,
    redundant breaks and excess whitespace between tags.

    Parameters
    ----------
    html_content : str
        Raw HTML string.

    Returns
    -------
    str
        Cleaned HTML string.

    Raises
    ------
    TypeError
        If input is not str.

    Examples
    --------
    >>> clean_html_output("<p></p><h1>Hi</h1><p>&nbsp;</p><br><br>")
    '<h1>Hi</h1><br>'
    """
    if not isinstance(html_content, str):
        raise TypeError("Input must be a string.")
    html_content = re.sub(r"<p>\s*</p>", "", html_content)
    html_content = re.sub(r"<p>&nbsp;</p>", "", html_content)
    html_content = re.sub(r"<p><br\s*/?>\s*</p>", "", html_content)
    html_content = re.sub(r"(<br\s*/?>\s*){2,}", "<br>", html_content)
    html_content = re.sub(r"\n\s*\n\s*\n+", "\n\n", html_content)
    html_content = re.sub(r">\s+<", "><", html_content)
    return html_content.strip()


def documentation_html(summary: str | None) -> Markup:
    """Render a documentation summary written in Markdown to safe HTML.

    Raw HTML inside the summary is escaped rather than passed through.
    Registered as the ``markdown`` template filter.
    """
    if not summary:
        return Markup("")
    html = str(
        markdown2.markdown(
            summary, extras=["tables", "fenced-code-blocks"], safe_mode="escape"
        )
    )
    return Markup(clean_html_output(html))


def root_prefix(page_path: str) -> str:
    """Relative prefix from a page back to the output root (``""`` or ``"../"``)."""
    return "../" * page_path.count("/")


class PageRenderer:
    """Render named templates from a template directory.

    The renderer is a pure function of ``(template name, data)``; it never
    touches the output tree. Undefined template variables raise, so a page
    bound to incomplete data fails instead of rendering blanks.

    Parameters
    ----------
    templates_dir : Path
        Directory containing the page templates.
    """

    def __init__(self, templates_dir: Path) -> None:
        self.templates_dir = Path(templates_dir)
        self.environment = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.environment.filters["markdown"] = documentation_html
        self.environment.globals.update(
            domain_dir=DOMAIN_SUBDIR,
            service_dir=SERVICE_SUBDIR,
            stylesheet=STYLE_SHEET_NAME,
        )

    def render(self, template_name: str, data: Mapping[str, Any]) -> str:
        template = self.environment.get_template(template_name)
        return template.render(**data)


def write_html_output(html_content: str, output_file: Path) -> None:
    """Write ``html_content`` to ``output_file``, creating parent directories.

    An existing file is truncated and overwritten. I/O errors propagate.
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding="utf-8")


def execute_job(job: PageJob, renderer: PageRenderer, output_dir: Path) -> JobOutcome:
    """Render and write a single page job, capturing any failure.

    The page is rendered to memory first, so a template error never leaves
    a truncated file behind.
    """
    target = output_dir / job.path
    context = {"root": root_prefix(job.path), **job.data}
    try:
        html = renderer.render(job.template, context)
        write_html_output(html, target)
    except Exception as exc:
        logger.error("Failed to generate %s page %s: %s", job.kind, target, exc)
        return JobOutcome(job=job, ok=False, error=f"{type(exc).__name__}: {exc}")
    logger.info("Generated %s page: %s", job.kind, target)
    return JobOutcome(job=job, ok=True)


def execute_jobs(
    jobs: Sequence[PageJob],
    renderer: PageRenderer,
    output_dir: Path,
    max_workers: int = 1,
) -> RenderReport:
    """Execute every job and collect one outcome per job, in job order.

    Parameters
    ----------
    jobs : Sequence[PageJob]
        Planned jobs. When two jobs share a target path the later one wins,
        which is only guaranteed when rendering sequentially.
    renderer : PageRenderer
        Template renderer shared by all jobs.
    output_dir : Path
        Output root the job paths are relative to.
    max_workers : int, optional
        Number of rendering threads. ``1`` renders sequentially.

    Returns
    -------
    RenderReport
        Outcomes for all jobs. The function returns only after every write
        has completed.
    """
    if max_workers <= 1 or len(jobs) <= 1:
        outcomes = [execute_job(job, renderer, output_dir) for job in jobs]
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(
                pool.map(lambda job: execute_job(job, renderer, output_dir), jobs)
            )
    report = RenderReport(outcomes=tuple(outcomes))
    if report.failed:
        logger.warning(
            "%d of %d page jobs failed", len(report.failed), len(report.outcomes)
        )
    return report


def copy_stylesheet(source: Path, output_dir: Path) -> Path:
    """Copy the site stylesheet verbatim into the output root.

    Raises
    ------
    ConfigurationError
        If the stylesheet cannot be read or copied.
    """
    destination = output_dir / STYLE_SHEET_NAME
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        raise ConfigurationError(
            f"Error copying {source.name}: {exc}", context={"source": str(source)}
        ) from exc
    return destination


def prepare_output_dir(output_dir: Path, clean: bool = False) -> None:
    """Create the output root and its page subdirectories.

    With ``clean`` the previous tree is removed first, so pages of records
    that left the catalog do not linger in the sitemap.
    """
    if clean and output_dir.exists():
        logger.info("Removing previous output tree %s", output_dir)
        shutil.rmtree(output_dir)
    for directory in (output_dir, output_dir / DOMAIN_SUBDIR, output_dir / SERVICE_SUBDIR):
        directory.mkdir(parents=True, exist_ok=True)
