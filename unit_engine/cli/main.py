"""Main CLI interface"""

import json
import logging

import click

from ..config.engine_config import EngineConfiguration
from ..core.data_structures import ConversionRequest
from ..core.exceptions import UnitEngineError
from ..infrastructure.logging.engine_logger import setup_logging, shutdown_logging

logger = logging.getLogger('UnitEngine.cli')

# Rows shown by the reference table unless --limit says otherwise
TABLE_ROWS = 8


def _service(ctx):
    return ctx.obj['service']


@click.group()
@click.version_option(package_name='unit-engine')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False),
              help='JSON engine configuration file')
@click.option('--log-file', type=click.Path(dir_okay=False), help='Write a log to this file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.pass_context
def cli(ctx, config, log_file, verbose):
    """Unit Engine - convert between units of measurement"""

    if log_file:
        setup_logging(log_file, verbose=verbose)
        ctx.call_on_close(shutdown_logging)

    try:
        config_obj = EngineConfiguration.from_file(config) if config else EngineConfiguration()
        service = config_obj.build_service()
    except UnitEngineError as e:
        raise click.ClickException(str(e))

    if config:
        logger.info(f"Loaded configuration from {config}")

    ctx.ensure_object(dict)
    ctx.obj['service'] = service


@cli.command()
@click.pass_context
def categories(ctx):
    """List measurement categories"""
    for category in _service(ctx).list_categories():
        click.echo(f"{category['id']:<12} {category['icon']}  {category['name']}")


@cli.command()
@click.argument('category')
@click.pass_context
def units(ctx, category):
    """List the units of CATEGORY"""
    try:
        unit_list = _service(ctx).list_units(category)
    except UnitEngineError as e:
        raise click.ClickException(str(e))

    for unit in unit_list:
        click.echo(f"{unit['id']:<20} {unit['symbol']:<12} {unit['name']}")


@cli.command(context_settings={'ignore_unknown_options': True})
@click.argument('category')
@click.argument('from_unit')
@click.argument('to_unit')
@click.argument('value')
@click.option('--json', 'as_json', is_flag=True, help='Print {value, display} as JSON')
@click.pass_context
def convert(ctx, category, from_unit, to_unit, value, as_json):
    """Convert VALUE from FROM_UNIT to TO_UNIT within CATEGORY"""
    logger.info(f"convert {category}: {value} {from_unit} -> {to_unit}")

    try:
        result = _service(ctx).convert(category, from_unit, to_unit, value)
    except UnitEngineError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict()))
    else:
        click.echo(result.display)


@cli.command(context_settings={'ignore_unknown_options': True})
@click.argument('category')
@click.argument('unit')
@click.option('--value', default='1', show_default=True, help='Amount of UNIT')
@click.option('--limit', type=click.IntRange(min=0), default=TABLE_ROWS, show_default=True,
              help='Maximum number of rows')
@click.pass_context
def table(ctx, category, unit, value, limit):
    """Show VALUE of UNIT expressed in every other unit of CATEGORY"""
    try:
        rows = _service(ctx).conversion_table(category, unit, value, limit)
    except UnitEngineError as e:
        raise click.ClickException(str(e))

    for row in rows:
        click.echo(f"{row.name:<24} {row.display} {row.symbol}")


@cli.command()
@click.argument('category')
@click.pass_context
def quick(ctx, category):
    """Run the preset conversions of CATEGORY"""
    try:
        results = _service(ctx).quick_conversions(category)
    except UnitEngineError as e:
        raise click.ClickException(str(e))

    for result in results:
        click.echo(f"{result.label:<20} = {result.display}")


@cli.command()
@click.argument('requests_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def batch(ctx, requests_file):
    """
    Run the conversions listed in a JSON file

    The file holds a list of objects with keys category, from_unit,
    to_unit and value.
    """
    try:
        with open(requests_file, 'r', encoding='utf-8') as f:
            requests = [ConversionRequest.from_dict(item) for item in json.load(f)]
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise click.ClickException(f"Cannot read requests from {requests_file}: {e}")

    report = _service(ctx).convert_batch(requests)
    summary = report['errors']

    for request, result in zip(requests, report['results']):
        shown = result.display if result is not None else 'error'
        click.echo(f"{request.value} {request.from_unit} -> {request.to_unit}: {shown}")

    logger.info(f"Batch of {len(requests)} requests finished with {summary['total_errors']} errors")

    if summary['total_errors']:
        for detail in summary['error_details']:
            click.echo(f"{detail['type']}: {detail['message']}", err=True)
        ctx.exit(1)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
