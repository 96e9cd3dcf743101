"""CLI entry point for the SMBIOS BIOS Information decoder."""

import sys
import configparser
import json
import logging
from pathlib import Path
from typing import List, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from smbios_decoder.shared import ConfigManager, LogManager
from smbios_decoder.discovery.table_reader import RawTable, read_tables, table_type_name
from smbios_decoder.discovery.bios_information import DecodeError, decode_all
from smbios_decoder.discovery.characteristics import VECTORS, render_flags
from smbios_decoder.rendering.summary import summarize
from smbios_decoder.rendering.export import to_dict

__version__ = "0.1.0"

console = Console()
err_console = Console(stderr=True)


def _fail(logger: logging.Logger, message: str) -> NoReturn:
    err_console.print(f"[red]✗ {escape(message)}[/red]")
    logger.error(message)
    sys.exit(1)


def _load_tables(ctx: click.Context, dump: str) -> List[RawTable]:
    """Read a raw DMI table from ``dump`` (or the configured path) and split it."""
    config: ConfigManager = ctx.obj["config"]
    logger: logging.Logger = ctx.obj["logger"]
    path = Path(dump) if dump else Path(config.dmi_path)

    logger.info(f"Reading SMBIOS table from {path}")
    try:
        blob = path.read_bytes()
    except OSError as e:
        _fail(logger, f"Cannot read {path}: {e}")

    try:
        tables = read_tables(blob)
    except ValueError as e:
        _fail(logger, f"Malformed SMBIOS table in {path}: {e}")
    logger.info(f"Found {len(tables)} structures")
    return tables


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="INI configuration file (default: configs/smbios_decoder.ini)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
@click.pass_context
def cli(ctx, config_path, debug):
    """SMBIOS decoder - inspect the BIOS Information structure of a DMI table."""
    config = ConfigManager(Path(config_path) if config_path else None)
    try:
        config.load()
    except configparser.Error as e:
        _fail(logging.getLogger('smbios_decoder'), f"Invalid config file {config.config_path}: {e}")

    log_level = "DEBUG" if debug else config.get('logging', 'log_level', 'WARNING')
    log_dir = config.get('logging', 'log_dir', '')
    log_mgr = LogManager('smbios_decoder', log_dir, log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["logger"] = log_mgr.get_logger()


@cli.command()
@click.argument("dump", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print JSON instead of text (overrides [output] format)",
)
@click.pass_context
def show(ctx, dump, as_json):
    """Decode and print the BIOS Information structure(s) found in DUMP."""
    config: ConfigManager = ctx.obj["config"]
    logger: logging.Logger = ctx.obj["logger"]
    tables = _load_tables(ctx, dump)

    try:
        infos = decode_all(tables)
    except DecodeError as e:
        _fail(logger, f"Failed to decode BIOS Information: {e}")

    if not infos:
        err_console.print("[yellow]⚠️  No BIOS Information structure found[/yellow]")
        sys.exit(1)

    if as_json or config.output_format == "json":
        click.echo(json.dumps([to_dict(info) for info in infos], indent=2))
        return

    click.echo("\n\n".join(summarize(info) for info in infos))


@cli.command(name="list")
@click.argument("dump", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def list_tables(ctx, dump):
    """List every structure in DUMP."""
    tables = _load_tables(ctx, dump)

    table = Table(title="SMBIOS structures")
    table.add_column("Handle", style="cyan")
    table.add_column("Type", justify="right")
    table.add_column("Name")
    table.add_column("Length", justify="right")
    for t in tables:
        table.add_row(f"0x{t.handle:04X}", str(t.type), table_type_name(t.type), str(t.length))
    console.print(table)


@cli.command()
@click.argument("value")
@click.option(
    "--vector",
    type=click.Choice(sorted(VECTORS)),
    default="primary",
    show_default=True,
    help="Which characteristics vector VALUE holds",
)
def flags(value, vector):
    """Render a characteristics VALUE (decimal or 0x-prefixed hex)."""
    try:
        number = int(value, 0)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not an integer", param_hint="VALUE")
    if number < 0:
        raise click.BadParameter("must not be negative", param_hint="VALUE")

    lines = render_flags(number, VECTORS[vector])
    if not lines:
        err_console.print("[yellow]No defined characteristics set[/yellow]")
        return
    for line in lines:
        click.echo(line)


def main():
    """Entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
