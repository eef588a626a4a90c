# === FILE: asset_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера AssetScout через командную строку.

Команды:
  crawl     Обойти сайт от стартового URL и сохранить найденные PDF
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --url, -u URL       Стартовый URL (override seed_url)
  --allow HOST        Шаблон разрешённого хоста, можно повторять (`*.example.org`)
  --concurrency INT   Макс. число одновременных запросов
  --timeout SEC       Таймаут одного запроса (секунд)
  --retry-times INT   Число повторов при 5xx/429 и сетевых ошибках
  --user-agent STR    Заголовок User-Agent
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --assets-out PATH   Файл со списком документов (default: pdf_urls.txt)
  --ledger-out PATH   Файл со снимком журнала (default: visited_urls.json)
  --pretty            Преформатировать JSON-отчёт (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Дополнительно:
  --version, -v       Показать версию AssetScout

Пример:
  asset_scout -u https://www.gadoe.org/ --allow gadoe.org --allow www.gadoe.org crawl --pretty
"""
import asyncio
import sys
from pathlib import Path

import click

from asset_scout import __version__
from asset_scout.config import load_config
from asset_scout.engine import start_crawl
from asset_scout.errors import TransportError
from asset_scout.logger import DEFAULT_FORMAT, init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='AssetScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--url', '-u', 'seed_url', default=None, help='Стартовый URL обхода.')
@click.option(
    '--allow', '-a', 'allowed_hosts',
    multiple=True,
    help='Шаблон разрешённого хоста (можно повторять).'
)
@click.option('--concurrency', type=int, default=None, help='Макс. число одновременных запросов.')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд).')
@click.option('--retry-times', type=int, default=None, help='Число повторов при ошибках.')
@click.option('--user-agent', default=None, help='Заголовок User-Agent.')
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
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, seed_url, allowed_hosts, concurrency, timeout, retry_times,
        user_agent, log_level, log_file, log_format):
    """Группа команд AssetScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    overrides = {
        'seed_url': seed_url,
        'allowed_hosts': allowed_hosts,
        'concurrency': concurrency,
        'timeout': timeout,
        'retry_times': retry_times,
        'user_agent': user_agent,
    }
    try:
        cfg = load_config(config_path, overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--assets-out', 'assets_out',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Файл со списком найденных документов'
)
@click.option(
    '--ledger-out', 'ledger_out',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Файл со снимком журнала посещений (JSON)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-отчёт (отступ 2)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, assets_out, ledger_out, pretty, crawl_timeout):
    """Обойти сайт и сохранить найденные документы."""
    cfg = ctx.obj['config']
    update = {}
    if assets_out is not None:
        update['assets_file'] = assets_out
    if ledger_out is not None:
        update['ledger_file'] = ledger_out
    if update:
        cfg = cfg.model_copy(update=update)

    click.echo(f'Starting crawl from: {cfg.seed_url}', err=True)
    try:
        if crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            report = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except TransportError as e:
        print_error(f'Стартовый URL недоступен: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    click.echo(report.json(pretty=pretty))
    click.echo(f'Assets: {cfg.assets_file}', err=True)
    click.echo(f'Ledger: {cfg.ledger_file}', err=True)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
