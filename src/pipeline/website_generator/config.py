"""Configuration for the website generation pipeline.

This module provides :class:`SiteConfig`, the explicit settings object passed
into the runner and the sitemap builder. Core logic never reads the
environment itself; :meth:`SiteConfig.from_env` is the single place where
environment variables (and an optional project ``.env`` file) are consulted.

Environment variables
---------------------
``WEBSITE``
    Public base URL of the site. Required for ``sitemap.xml`` and
    ``robots.txt``; there is no default.
``OUTPUT_DIR``
    Output root for the generated tree. Defaults to ``html`` under the
    project root.
``SERVICES_JSON``
    Canonical catalog input. Defaults to ``services.json`` under the
    project root.

Examples
--------
>>> from pathlib import Path
>>> from src.pipeline.website_generator.config import SiteConfig
>>> cfg = SiteConfig(base_url="https://example.com/", output_dir=Path("out"))
>>> cfg.site_url
'https://example.com'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

import src.config as _project_config
from src.config import (
    DEFAULT_OUTPUT_DIR,
    ROBOTS_DISALLOW,
    SERVICES_JSON_PATH,
    STYLE_SHEET_PATH,
    TEMPLATES_DIR,
)
from src.exceptions import ConfigurationError


@dataclass(frozen=True)
class SiteConfig:
    """Settings consumed by the generation pipeline.

    Attributes
    ----------
    base_url : str | None
        Public site URL. Only the sitemap/robots post-pass needs it.
    output_dir : Path
        Root of the generated tree.
    input_path : Path
        Canonical ``services.json`` catalog.
    templates_dir : Path
        Directory holding the page templates.
    style_path : Path
        Stylesheet copied verbatim into the output root.
    disallow : tuple[str, ...]
        Path prefixes disallowed in ``robots.txt``.
    clean_output : bool
        Remove the previous output tree before rendering.
    """

    base_url: str | None = None
    output_dir: Path = DEFAULT_OUTPUT_DIR
    input_path: Path = SERVICES_JSON_PATH
    templates_dir: Path = TEMPLATES_DIR
    style_path: Path = STYLE_SHEET_PATH
    disallow: tuple[str, ...] = field(default=ROBOTS_DISALLOW)
    clean_output: bool = False

    @property
    def site_url(self) -> str:
        """Return the base URL without trailing slashes.

        Raises
        ------
        ConfigurationError
            If no base URL was configured.
        """
        website = (self.base_url or "").strip().rstrip("/")
        if not website:
            raise ConfigurationError(
                "Base site URL is not set (environment variable 'WEBSITE')",
                context={"setting": "WEBSITE"},
            )
        return website

    @classmethod
    def from_env(cls) -> "SiteConfig":
        """Build a config from the process environment and project ``.env``.

        Values already present in the environment win over the ``.env`` file.
        Cosmetic settings fall back to project defaults; the base URL is left
        unset when absent so the sitemap step can fail loudly.
        """
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
        output_dir = os.getenv("OUTPUT_DIR")
        input_path = os.getenv("SERVICES_JSON")
        return cls(
            base_url=os.getenv("WEBSITE") or None,
            output_dir=Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR,
            input_path=Path(input_path) if input_path else SERVICES_JSON_PATH,
        )
