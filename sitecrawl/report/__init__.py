# File: sitecrawl/report/__init__.py
"""sitecrawl.report: Утилиты для генерации отчётов (CSV, JSON и HTML) используемые CLI и тестами."""

from sitecrawl.report.csv_report import write_csv_report
from sitecrawl.report.html_report import render_html
from sitecrawl.report.json_report import pages_to_dict, render_json

__all__ = ["write_csv_report", "render_json", "render_html", "pages_to_dict"]
