"""Sitemap and robots policy built from the rendered output tree.

The sitemap reflects what actually exists on disk after rendering, not the
planned jobs, so pages whose job failed are simply absent. The inventory
step (:func:`list_output_files`) is separate from the pure URL mapping
(:func:`build_sitemap_entries`), which lets tests feed a fixed file list
without depending on filesystem traversal order.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from src.config import (
    HOME_PAGE,
    ROBOTS_FILENAME,
    ROBOTS_TEMPLATE,
    SITEMAP_DATE_FORMAT,
    SITEMAP_FILENAME,
    SITEMAP_NAMESPACE,
)
from src.exceptions import ConfigurationError, SitemapError

from .models import OutputFile, SitemapEntry
from .renderer import PageRenderer

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


def list_output_files(output_dir: Path) -> list[OutputFile]:
    """Inventory every regular file below ``output_dir``.

    Parameters
    ----------
    output_dir : Path
        Root of the rendered tree.

    Returns
    -------
    list[OutputFile]
        Files with forward-slash relative paths and modification times, in
        traversal order.

    Raises
    ------
    SitemapError
        If the root is missing or any directory cannot be read.
    """
    if not output_dir.is_dir():
        raise SitemapError(
            f"Output directory {str(output_dir)!r} does not exist",
            context={"path": str(output_dir)},
        )
    files: list[OutputFile] = []
    try:
        for dirpath, _dirnames, filenames in os.walk(
            output_dir, onerror=_raise_walk_error
        ):
            for filename in filenames:
                path = Path(dirpath) / filename
                if not path.is_file():
                    continue
                files.append(
                    OutputFile(
                        relative_path=path.relative_to(output_dir).as_posix(),
                        modified=datetime.fromtimestamp(path.stat().st_mtime),
                    )
                )
    except OSError as exc:
        raise SitemapError(
            f"Error walking the path {str(output_dir)!r}: {exc}",
            context={"path": str(output_dir)},
        ) from exc
    return files


def page_url(site_url: str, relative_path: str) -> str:
    """Map a page path to its public URL; the home page maps to ``<base>/``."""
    if relative_path == HOME_PAGE:
        return f"{site_url}/"
    return f"{site_url}/{relative_path}"


def build_sitemap_entries(
    files: Iterable[OutputFile], site_url: str
) -> list[SitemapEntry]:
    """Select ``.html`` files and convert them to sorted sitemap entries.

    Parameters
    ----------
    files : Iterable[OutputFile]
        Inventory of the output tree.
    site_url : str
        Public base URL; trailing slashes are ignored.

    Returns
    -------
    list[SitemapEntry]
        One entry per HTML file, sorted by URL.

    Raises
    ------
    ConfigurationError
        If ``site_url`` is empty.

    Examples
    --------
    >>> from datetime import datetime
    >>> files = [OutputFile("service/a.html", datetime(2024, 5, 1)),
    ...          OutputFile("index.html", datetime(2024, 5, 2))]
    >>> [e.loc for e in build_sitemap_entries(files, "https://example.com/")]
    ['https://example.com/', 'https://example.com/service/a.html']
    """
    site_url = (site_url or "").rstrip("/")
    if not site_url:
        raise ConfigurationError("Base site URL is required to build the sitemap")
    entries = [
        SitemapEntry(
            loc=page_url(site_url, output_file.relative_path),
            lastmod=output_file.modified.strftime(SITEMAP_DATE_FORMAT),
        )
        for output_file in files
        if Path(output_file.relative_path).suffix == ".html"
    ]
    entries.sort(key=lambda entry: entry.loc)
    return entries


def render_sitemap_xml(entries: Sequence[SitemapEntry]) -> bytes:
    """Serialize entries as a sitemap ``urlset`` document with XML declaration."""
    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for entry in entries:
        url_el = ET.SubElement(urlset, "url")
        ET.SubElement(url_el, "loc").text = entry.loc
        if entry.lastmod:
            ET.SubElement(url_el, "lastmod").text = entry.lastmod
        if entry.changefreq:
            ET.SubElement(url_el, "changefreq").text = entry.changefreq
        if entry.priority:
            ET.SubElement(url_el, "priority").text = entry.priority
    tree = ET.ElementTree(urlset)
    ET.indent(tree, space="  ", level=0)
    return ET.tostring(urlset, encoding="UTF-8", xml_declaration=True)


def write_sitemap(output_dir: Path, site_url: str) -> list[SitemapEntry]:
    """Inventory ``output_dir`` and write ``sitemap.xml`` into it.

    Returns the entries that were written.
    """
    entries = build_sitemap_entries(list_output_files(output_dir), site_url)
    (output_dir / SITEMAP_FILENAME).write_bytes(render_sitemap_xml(entries))
    logger.info("%s generated successfully (%d URLs).", SITEMAP_FILENAME, len(entries))
    return entries


def render_robots_txt(
    site_url: str, disallow: Sequence[str], renderer: PageRenderer
) -> str:
    site_url = site_url.rstrip("/")
    return renderer.render(
        ROBOTS_TEMPLATE,
        {"sitemap_url": f"{site_url}/{SITEMAP_FILENAME}", "disallow": list(disallow)},
    )


def write_robots(
    output_dir: Path, site_url: str, disallow: Sequence[str], renderer: PageRenderer
) -> Path:
    robots_path = output_dir / ROBOTS_FILENAME
    robots_path.write_text(
        render_robots_txt(site_url, disallow, renderer), encoding="utf-8"
    )
    logger.info("%s generated successfully.", ROBOTS_FILENAME)
    return robots_path
