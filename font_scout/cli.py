#!/usr/bin/env python3
"""
Command line entry point of FontScout.

Commands:
  discover  Rank the same-site pages worth analysing next to URL
  metadata  Read provenance and licensing metadata from font files
  match     Reconcile a page snapshot's active fonts with its font files
  config    Show the effective configuration

Common options:
  --config PATH       YAML or JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string
  --version, -v       Show the FontScout version

Example:
  fontscout discover https://example.com --max-pages 5 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from font_scout import __version__
from font_scout.aggregator import reconcile_fonts
from font_scout.config import DiscoveryConfig, load_config
from font_scout.discovery.crawler import discover_pages
from font_scout.fonts.css import parse_font_face_rules
from font_scout.fonts.errors import FontMetadataError
from font_scout.fonts.metadata import extract_metadata
from font_scout.fonts.models import ActiveFont, DownloadedFontFile, FontFaceDeclaration
from font_scout.logger import init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _dumps(data, pretty: bool) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='FontScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """FontScout command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--max-pages', '-n', 'max_pages', type=int, default=None, help='Override max_pages')
@click.option('--timeout', 'timeout', type=float, default=None, help='Navigation timeout (seconds)')
@click.option('--include-subdomains', is_flag=True, help='Accept links to subdomains')
@click.option('--pretty', is_flag=True, help='Indent the JSON output')
@click.pass_context
def discover(ctx, url, max_pages, timeout, include_subdomains, pretty):
    """Discover the pages of URL's site, best first."""
    cfg = ctx.obj['config']
    overrides = {
        'max_pages': max_pages,
        'timeout': timeout,
        'include_subdomains': include_subdomains or None,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        try:
            cfg = DiscoveryConfig.model_validate({**cfg.model_dump(), **overrides})
        except ValidationError as e:
            print_error(f'Invalid option: {e}')
    try:
        pages = asyncio.run(discover_pages(url, cfg))
    except Exception as e:
        print_error(f'Discovery failed: {e}')
    click.echo(_dumps([p.to_dict() for p in pages], pretty))


@cli.command('metadata', context_settings=CONTEXT_SETTINGS)
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--pretty', is_flag=True, help='Indent the JSON output')
def metadata(files, pretty):
    """Extract embedded metadata from font FILES."""
    results = []
    for path in files:
        entry = {'file': str(path)}
        try:
            entry['metadata'] = extract_metadata(path.read_bytes(), str(path)).to_dict()
        except FontMetadataError as e:
            entry['error'] = e.to_dict()
        results.append(entry)
    click.echo(_dumps(results, pretty))


@cli.command('match', context_settings=CONTEXT_SETTINGS)
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--pretty', is_flag=True, help='Indent the JSON output')
def match(snapshot, pretty):
    """Reconcile the fonts of a page SNAPSHOT (JSON) with its downloaded files."""
    try:
        data = json.loads(snapshot.read_text(encoding='utf-8'))
        active = [ActiveFont.model_validate(f) for f in data.get('activeFonts', [])]
        downloaded = [DownloadedFontFile.model_validate(f) for f in data.get('downloadedFonts', [])]
        declarations = [FontFaceDeclaration.model_validate(d) for d in data.get('fontFaceDeclarations', [])]
    except (json.JSONDecodeError, AttributeError, ValidationError) as e:
        print_error(f'Invalid snapshot {snapshot}: {e}')
    if data.get('css'):
        declarations.extend(parse_font_face_rules(data['css']))
    report = reconcile_fonts(active, downloaded, declarations)
    click.echo(report.json(pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
