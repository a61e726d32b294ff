"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides small catalog fixtures shared by the website generator tests.
"""

import os
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from src.pipeline.website_generator.models import ServiceRecord  # noqa: E402


@pytest.fixture
def two_services():
    """The two-record catalog used by the end-to-end checks."""
    return [
        ServiceRecord(name="compute.googleapis.com", title="Compute Engine"),
        ServiceRecord(name="storage.googleapis.com", title="Cloud Storage"),
    ]


@pytest.fixture
def site_config(tmp_path):
    """SiteConfig writing into a temporary output root."""
    from src.pipeline.website_generator.config import SiteConfig

    return SiteConfig(
        base_url="https://catalog.example.com",
        output_dir=tmp_path / "html",
        input_path=tmp_path / "services.json",
    )
