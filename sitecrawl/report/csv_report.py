# File: sitecrawl/report/csv_report.py
"""sitecrawl.report.csv_report: CSV-отчёт по обойдённым страницам."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Mapping, Union

from sitecrawl.crawler.models import PageRecord
from sitecrawl.logger import get_logger

log = get_logger("report")

CSV_HEADERS = ("page_url", "h1", "first_paragraph", "outgoing_link_urls", "image_urls")


def write_csv_report(
    pages: Mapping[str, PageRecord], output_path: Union[Path, str] = "report.csv"
) -> Path:
    """Записывает по одной строке на страницу; списки URL склеиваются через ``;``.

    Поля с запятой, кавычкой или переводом строки берутся в кавычки,
    кавычки внутри удваиваются.
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for url, page in pages.items():
            writer.writerow(
                (
                    url,
                    page.h1,
                    page.first_paragraph,
                    ";".join(page.outgoing_links),
                    ";".join(page.image_urls),
                )
            )

    log.info("CSV report written to %s", output.resolve())
    return output
