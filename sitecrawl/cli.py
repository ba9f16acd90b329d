# === FILE: sitecrawl/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawl через командную строку.

Команды:
  crawl BASE_URL [MAX_CONCURRENCY] [MAX_PAGES]   Обойти сайт и вывести/сохранить отчёты
  config                                         Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязательно)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)

Команда crawl опции:
  --csv PATH          Сохранить CSV-отчёт в файл
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --timeout SEC       Таймаут одного запроса (секунд)
  --run-timeout SEC   Страховочный таймаут всего обхода (секунд)

Пример:
  sitecrawl crawl https://blog.boot.dev 3 25 --csv report.csv
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from sitecrawl import __version__
from sitecrawl.config import CrawlConfig, read_config_file
from sitecrawl.errors import ConfigurationError
from sitecrawl.logger import init_logging
from sitecrawl.report import render_html, render_json, write_csv_report
from sitecrawl.session import build_config, crawl_with_config

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(ctx: click.Context, **cli_values) -> CrawlConfig:
    """Файл конфигурации + значения из командной строки (последние важнее)."""
    data = dict(ctx.obj.get('file_config', {}))
    data.update({k: v for k, v in cli_values.items() if v is not None})
    base_url = data.pop('base_url', None)
    if base_url is None:
        raise ConfigurationError('base URL is required (argument or "base_url" in config)')
    return build_config(
        base_url,
        data.pop('max_concurrency', CrawlConfig.model_fields['max_concurrency'].default),
        data.pop('max_pages', CrawlConfig.model_fields['max_pages'].default),
        **data,
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawl, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Группа команд SiteCrawl CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    ctx.ensure_object(dict)
    file_config = {}
    if config_path is not None:
        try:
            file_config = read_config_file(config_path)
        except (OSError, ValueError, TypeError) as e:
            print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.obj['file_config'] = file_config


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.argument('max_concurrency', type=int, required=False)
@click.argument('max_pages', type=int, required=False)
@click.option('--csv', 'csv_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить CSV-отчёт в файл')
@click.option('--json', '-j', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить JSON-отчёт в файл')
@click.option('--html', 'html_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить HTML-отчёт в файл')
@click.option('--timeout', 'timeout', type=float, default=None,
              help='Таймаут одного запроса (секунд)')
@click.option('--run-timeout', 'run_timeout', type=float, default=None,
              help='Страховочный таймаут всего обхода (секунд)')
@click.pass_context
def crawl(ctx, base_url, max_concurrency, max_pages, csv_output, json_output, html_output,
          timeout, run_timeout):
    """Обойти сайт начиная с BASE_URL и сгенерировать отчёты."""
    try:
        cfg = _resolve_config(
            ctx,
            base_url=base_url,
            max_concurrency=max_concurrency,
            max_pages=max_pages,
            timeout=timeout,
            run_timeout=run_timeout,
        )
    except ConfigurationError as e:
        print_error(f'Ошибка конфигурации: {e}')

    click.echo(f'Starting crawler at: {cfg.base_url}', err=True)
    pages = asyncio.run(crawl_with_config(cfg))

    if not (csv_output or json_output or html_output):
        for url, page in sorted(pages.items()):
            click.echo(f'{url}\t{page.h1}')
        click.echo(f'{len(pages)} pages crawled', err=True)
        return

    try:
        if csv_output:
            click.echo(f'CSV report: {write_csv_report(pages, csv_output)}')
        if json_output:
            click.echo(f'JSON report: {render_json(pages, json_output)}')
        if html_output:
            click.echo(f'HTML report: {render_html(pages, html_output)}')
    except OSError as e:
        print_error(f'Ошибка при сохранении отчёта: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.pass_context
def show_config(ctx, base_url):
    """Показать итоговую конфигурацию в JSON."""
    try:
        cfg = _resolve_config(ctx, base_url=base_url)
    except ConfigurationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    click.echo(json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
