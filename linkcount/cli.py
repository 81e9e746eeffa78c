# === FILE: linkcount/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера linkcount через командную строку.

Команды:
  crawl     Обойти сайты начиная с SEED... и вывести самые упоминаемые адреса
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (необязательно)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --top N             Сколько адресов выводить (default 10)
  --concurrency N     Число одновременных загрузок
  --timeout SEC       Таймаут соединения
  --read-timeout SEC  Таймаут чтения ответа
  --max-pages N       Лимит загружаемых страниц
  --max-depth N       Лимит глубины
  --crawl-timeout SEC Остановить обход через SEC секунд (как по Ctrl-C)
  --links             Сохранять граф ссылок
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)

Обход идёт до Ctrl-C (или исчерпания ссылок), затем печатается рейтинг.

Пример:
  linkcount crawl http://example.com/ --top 20 --max-pages 500
"""
import asyncio
import sys
from pathlib import Path

import click

from linkcount import __version__
from linkcount.config import apply_overrides, load_config
from linkcount.engine import start_crawl
from linkcount.errors import FatalArgumentError
from linkcount.logger import DEFAULT_FORMAT, init_logging
from linkcount.report.html_report import render_html
from linkcount.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='linkcount, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
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
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд linkcount CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('seeds', nargs=-1)
@click.option('--top', '-n', 'top_n', type=click.IntRange(min=1), default=None,
              help='Сколько адресов выводить [10]')
@click.option('--concurrency', type=click.IntRange(min=1), default=None,
              help='Число одновременных загрузок [16]')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Таймаут соединения, секунд [5]')
@click.option('--read-timeout', 'read_timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Таймаут чтения ответа, секунд [30]')
@click.option('--max-pages', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Лимит загружаемых страниц')
@click.option('--max-depth', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Лимит глубины обхода')
@click.option('--crawl-timeout', 'crawl_timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Остановить обход через указанное число секунд')
@click.option('--links', 'keep_links', is_flag=True, default=False,
              help='Сохранять граф ссылок (попадает в JSON/HTML-отчёт)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def crawl(ctx, seeds, top_n, concurrency, timeout, read_timeout, max_pages, max_depth,
          crawl_timeout, keep_links, json_output, html_output, template_dir, pretty):
    """Обойти сайты начиная с SEED... и вывести самые упоминаемые адреса."""
    cfg = apply_overrides(
        ctx.obj['config'],
        top_n=top_n,
        concurrency=concurrency,
        timeout=timeout,
        read_timeout=read_timeout,
        max_pages=max_pages,
        max_depth=max_depth,
        keep_links=keep_links or None,
    )
    if not seeds and not cfg.seeds:
        raise click.UsageError('Needs url to start crawler', ctx=ctx)

    try:
        report = asyncio.run(start_crawl(cfg, list(seeds) or None, crawl_timeout=crawl_timeout))
    except FatalArgumentError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    for line in report.lines():
        click.echo(line)

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
