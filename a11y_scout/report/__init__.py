# File: a11y_scout/report/__init__.py
"""a11y_scout.report: Генерация отчётов (HTML и JSON-сводка) по результатам аудита."""

from a11y_scout.report.html_report import build_view, render_html, write_html
from a11y_scout.report.json_report import render_json

__all__ = ["build_view", "render_html", "write_html", "render_json"]
