"""Report rendering for release provenance."""

from deploytracker.reporting.console import build_table, render_console
from deploytracker.reporting.export import write_csv, write_json
from deploytracker.reporting.html_report import render_html, write_html

__all__ = [
    "build_table",
    "render_console",
    "write_csv",
    "write_json",
    "render_html",
    "write_html",
]
