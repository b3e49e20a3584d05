# domain_crawler/__init__.py
"""
domain_crawler package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from .engine import start_crawl  # noqa: E402
