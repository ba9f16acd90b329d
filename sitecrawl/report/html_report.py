# File: sitecrawl/report/html_report.py
"""sitecrawl.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from sitecrawl.crawler.models import PageRecord

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    pages: Mapping[str, PageRecord],
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        pages: словарь нормализованный URL -> PageRecord.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с ``report.html.j2``; по умолчанию шаблон из пакета.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "pages": [(url, page) for url, page in sorted(pages.items())],
        "total": len(pages),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
