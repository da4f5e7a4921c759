# === FILE: a11y_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа A11yScout для командной строки.

Команды:
  audit URL       Проверить все страницы из sitemap (или одну страницу) и собрать отчёт
  report RUN_DIR  Пересобрать отчёт из уже сохранённых JSON-результатов запуска
  config          Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --limit INT         Макс. число проверяемых страниц (override max_pages)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Пример:
  a11y-scout audit https://example.com/sitemap.xml
"""
import asyncio
import sys
from pathlib import Path

import click

from a11y_scout import __version__
from a11y_scout.config import load_config
from a11y_scout.engine import Engine
from a11y_scout.errors import A11yScoutError
from a11y_scout.logger import init_logging
from a11y_scout.storage import Run

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='A11yScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для аудита (override max_pages)'
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """Группа команд A11yScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if limit is not None:
        cfg = cfg.model_copy(update={'max_pages': limit})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('audit', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def audit(ctx, url):
    """Проверить страницы sitemap (URL на .xml) или одну страницу и собрать отчёт."""
    cfg = ctx.obj['config']
    click.echo(f'Starting audit: {url}')
    engine = Engine(cfg)
    try:
        summary = asyncio.run(engine.start_audit(url))
    except (A11yScoutError, OSError) as e:
        print_error(f'Ошибка: {e}')

    failed = [o for o in summary.outcomes if not o.ok]
    for outcome in failed:
        click.secho(f'FAILED {outcome.url}: {outcome.error.reason}', fg='yellow', err=True)
    for error in summary.sitemap_errors:
        click.secho(f'SKIPPED {error}', fg='yellow', err=True)

    report = summary.built.report
    click.echo(f'Pages audited: {len(summary.outcomes) - len(failed)}/{len(summary.outcomes)}')
    click.echo(f'Average score: {report.site_average * 100:.2f}%')
    click.echo(f'HTML report: {summary.built.html_path}')


@cli.command('report', context_settings=CONTEXT_SETTINGS)
@click.argument('run_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    '--site', '-s', 'site_url',
    default=None,
    help='URL сайта для заголовка отчёта (по умолчанию берётся из результатов)'
)
@click.pass_context
def report(ctx, run_dir, site_url):
    """Пересобрать отчёт из JSON-результатов существующего каталога запуска."""
    cfg = ctx.obj['config']
    run = Run.open(run_dir)
    engine = Engine(cfg)
    if site_url is None:
        site_url = _site_from_results(run)
    try:
        built = engine.build_report(run, site_url)
    except A11yScoutError as e:
        print_error(f'Ошибка: {e}')

    for error in built.skipped_files:
        click.secho(f'SKIPPED {error}', fg='yellow', err=True)
    click.echo(f'Average score: {built.report.site_average * 100:.2f}%')
    click.echo(f'HTML report: {built.html_path}')


def _site_from_results(run: Run) -> str:
    for raw in run.load_results().results:
        url = raw.get('requestedUrl') or raw.get('finalUrl')
        if url:
            return str(url)
    return ''


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
