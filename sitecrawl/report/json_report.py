# sitecrawl/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteCrawl.

Сериализация словаря ``{url: PageRecord}`` в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict, Mapping

from sitecrawl.crawler.models import PageRecord


def pages_to_dict(pages: Mapping[str, PageRecord]) -> Dict[str, Dict[str, Any]]:
    return {url: page.as_dict() for url, page in pages.items()}


def render_json(pages: Mapping[str, PageRecord], output_path: Path | str) -> Path:
    """
    Сохраняет результаты обхода в формате JSON по указанному пути.

    :param pages: словарь нормализованный URL -> PageRecord
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(pages_to_dict(pages), f, ensure_ascii=False, indent=2)

    return output
