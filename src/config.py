"""Global configuration constants for the project.

Defines paths, filenames and fixed values used across the site generator
and the catalog crawler.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
SRC_DIR: Path = PROJECT_ROOT / "src"
LOG_DIR: Path = PROJECT_ROOT / "logs"

# Bundled site resources
SITE_RESOURCES_DIR: Path = SRC_DIR / "pipeline" / "website_generator"
TEMPLATES_DIR: Path = SITE_RESOURCES_DIR / "templates"
STYLE_SHEET_PATH: Path = SITE_RESOURCES_DIR / "assets" / "style.css"

# Canonical input / crawler output files
SERVICES_JSON_PATH: Path = PROJECT_ROOT / "services.json"
DIRECTORY_JSON_PATH: Path = PROJECT_ROOT / "directory.json"

# Output tree layout
DEFAULT_OUTPUT_DIR: Path = PROJECT_ROOT / "html"
DOMAIN_SUBDIR: str = "domain"
SERVICE_SUBDIR: str = "service"
HOME_PAGE: str = "index.html"
SERVICES_PAGE: str = "services.html"
BY_DOMAIN_PAGE: str = "bydomain.html"
STYLE_SHEET_NAME: str = "style.css"
SITEMAP_FILENAME: str = "sitemap.xml"
ROBOTS_FILENAME: str = "robots.txt"

# Template names
HOME_TEMPLATE: str = "index.html"
SERVICES_TEMPLATE: str = "services.html"
BY_DOMAIN_TEMPLATE: str = "bydomain.html"
DOMAIN_TEMPLATE: str = "domain.html"
SERVICE_TEMPLATE: str = "service.html"
ROBOTS_TEMPLATE: str = "robots.txt"

# Domain derivation
MISC_DOMAIN: str = "misc"
DEFAULT_DOMAIN_SEGMENTS: int = 2
DOMAIN_SEGMENT_OVERRIDES: dict[str, int] = {".cloud.goog": 3}

# Sitemap / robots
SITEMAP_NAMESPACE: str = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_DATE_FORMAT: str = "%Y-%m-%d"
ROBOTS_DISALLOW: tuple[str, ...] = ("/snippets/",)

# Crawler endpoints and defaults
SERVICE_USAGE_ENDPOINT: str = "https://serviceusage.googleapis.com/v1"
API_DIRECTORY_URL: str = "https://www.googleapis.com/discovery/v1/apis"
SERVICE_USAGE_STATES: tuple[str, ...] = ("ENABLED", "DISABLED")
SERVICE_USAGE_PAGE_SIZE: int = 200
DEFAULT_REQUEST_TIMEOUT: int = 60
DEFAULT_TARGET_RPM: int = 120

# Logging
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME_GENERATE_SITE: str = "generate_site.log"
LOG_FILENAME_CRAWL: str = "crawl_catalog.log"
