# File: domain_crawler/report/__init__.py
"""domain_crawler.report: JSON-отчёты, используемые CLI и тестами."""

from .json_report import render_all_links, render_links_by_page, write_reports

__all__ = ["render_all_links", "render_links_by_page", "write_reports"]
