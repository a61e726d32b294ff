"""Google Cloud service catalog site package.

This module is the root of the catalog site package, which crawls the list
of Google Cloud services (Service Usage API and the public API Discovery
directory) and turns the saved catalog into a static, search-indexable HTML
website with a sitemap and robots file.

Package Structure
-----------------
- `pipeline/`:
    `catalog_crawler` (asynchronous, rate-limited crawl to JSON) and
    `website_generator` (catalog loading, domain grouping, page planning,
    Jinja2 rendering, sitemap and robots output).
- `cli.py`: The ``--crawl`` / ``--generate`` command line entrypoint.
- `config.py`: All configuration constants (paths, names, limits), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import src
>>> # Run ``python catalog_site.py --generate`` or the ``catalog-site`` script.

"""
