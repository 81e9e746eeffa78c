"""linkcount.report: сохранение отчёта обхода в JSON и HTML."""

from .html_report import DEFAULT_TEMPLATE_DIR, render_html
from .json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
