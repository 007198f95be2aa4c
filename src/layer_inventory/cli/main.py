"""
Layer Inventory CLI — installed-package inventory of filesystem layers.

Usage:
    layer-inventory scan ./rootfs
    layer-inventory scan base.tar app.tar.gz --format json --output-dir ./out
    layer-inventory detectors
"""

import asyncio
import logging

import click

from layer_inventory.detectors.registry import default_registry


@click.group()
@click.version_option(package_name="layer-inventory")
def cli():
    """Layer Inventory — installed-package inventory of filesystem layers."""
    pass


@cli.command()
@click.argument("layers", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--detector",
    "-d",
    "detectors",
    multiple=True,
    type=click.Choice(default_registry().names()),
    help="Detectors to run (default: all).",
)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json", "sqlite"]),
    default="table",
    envvar="LAYER_INVENTORY_FORMAT",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(),
    default="./inventory_output",
    envvar="LAYER_INVENTORY_OUTPUT_DIR",
    help="Output directory for json/sqlite exports.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
def scan(layers, detectors, fmt, output_dir, verbose):
    """Scan layer directories or tar archives for installed packages."""
    from pathlib import Path

    from rich.console import Console
    from rich.table import Table

    from layer_inventory.core.scanner import LayerScanner
    from layer_inventory.exporters import get_exporter

    # Configure logging
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    registry = default_registry()
    if detectors:
        registry = registry.subset(list(detectors))

    exporters = [] if fmt == "table" else [get_exporter(fmt, output_dir)]
    scanner = LayerScanner(registry=registry, exporters=exporters)

    result = asyncio.run(scanner.run([Path(p) for p in layers]))

    if fmt == "table":
        table = Table(title="Installed packages")
        table.add_column("Name", style="cyan")
        table.add_column("Version")
        for package in result.packages:
            table.add_row(package.name, package.version_string)
        Console().print(table)

    if result.failures:
        raise SystemExit(1)


@cli.command()
def detectors():
    """List the available detectors and the files they read."""
    for detector in default_registry():
        click.echo(f"{detector.name}: {', '.join(detector.required_files())}")


if __name__ == "__main__":
    cli()
