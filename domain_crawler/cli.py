# === FILE: domain_crawler/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера через командную строку.

Аргументы:
  SEED_URL            Начальный URL; обходится только его домен

Опции:
  --stdout            Печатать JSON в stdout вместо записи файлов
  --output-dir DIR    Папка для all_links.json и links_by_page.json (default: .)
  --config PATH       Путь к YAML/JSON-конфигу (необязателен)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --version, -v       Показать версию

Пример:
  domain-crawler https://example.com --output-dir reports
"""
import asyncio
import sys
import time
from pathlib import Path

import click

from domain_crawler import __version__
from domain_crawler.config import load_config
from domain_crawler.engine import start_crawl
from domain_crawler.errors import InvalidURLError, SharedStateError
from domain_crawler.logger import init_logging
from domain_crawler.report.json_report import render_all_links, render_links_by_page, write_reports
from domain_crawler.utils import root_domain

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='domain_crawler, version %(version)s')
@click.argument('seed_url')
@click.option(
    '--stdout', 'to_stdout',
    is_flag=True,
    help='Печатать JSON в stdout вместо записи файлов'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default='.',
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Папка для JSON-отчётов'
)
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
def cli(seed_url, to_stdout, output_dir, config_path, log_level, log_file):
    """Обойти все страницы домена SEED_URL и сохранить найденные ссылки."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        root_domain(seed_url)
    except InvalidURLError as e:
        print_error(f'Некорректный URL: {e}')

    click.echo(f'Starting crawl: {seed_url}', err=True)
    start = time.perf_counter()
    try:
        results = asyncio.run(start_crawl(seed_url, cfg))
    except SharedStateError as e:
        print_error(f'Ошибка общего состояния: {e}')
    elapsed = time.perf_counter() - start
    click.echo(f'Time elapsed: {elapsed:.2f}s', err=True)

    if to_stdout:
        click.echo(render_all_links(results))
        click.echo(render_links_by_page(results))
        return

    try:
        all_links, by_page = write_reports(results, output_dir, cfg)
    except OSError as e:
        print_error(f'Ошибка при сохранении JSON: {e}')
    click.echo(f'All links: {all_links}', err=True)
    click.echo(f'Links by page: {by_page}', err=True)


if __name__ == "__main__":
    cli()
