"""File handling utilities for the catalog crawler.

This module persists crawl results as pretty-printed JSON. It performs only
file I/O and does not contact external services.
"""

import json
from pathlib import Path
from typing import Any, Sequence

from src.pipeline.website_generator.models import ServiceRecord

from .models import DirectoryList


def write_json(payload: Any, output_path: Path) -> None:
    """Write ``payload`` as 2-space indented UTF-8 JSON, creating parents."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def save_services_json(records: Sequence[ServiceRecord], output_path: Path) -> None:
    """Persist the service catalog in the canonical ``services.json`` shape.

    Parameters
    ----------
    records : Sequence[ServiceRecord]
        Crawled services, already sorted by name.
    output_path : Path
        Destination file.
    """
    write_json([record.to_dict() for record in records], output_path)


def save_directory_json(directory: DirectoryList, output_path: Path) -> None:
    write_json(directory.to_dict(), output_path)
