"""
Layer Scanner — runs the registered detectors over a set of layers.

Orchestrates a scan with:
- Concurrent, bounded layer loading
- Per-layer detection through the detector registry
- Order-preserving merge with de-duplication by package key
- Pluggable export backends and a rich progress display
"""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from layer_inventory.core.errors import InventoryError
from layer_inventory.core.layer import load_layer
from layer_inventory.detectors.registry import DetectorRegistry
from layer_inventory.exporters.base import Exporter
from layer_inventory.models.package import Package

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of scanning a list of layers."""

    layers: dict[str, list[Package]] = field(default_factory=dict)
    packages: list[Package] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)


def merge_packages(groups: list[list[Package]]) -> list[Package]:
    """Union package lists by key; the first occurrence wins. Sorted by name, then version."""
    merged: dict[str, Package] = {}
    for group in groups:
        for package in group:
            merged.setdefault(package.key(), package)
    return sorted(merged.values(), key=lambda p: (p.name, p.version_string))


class LayerScanner:
    """
    Extracts the package inventory of one or more filesystem layers.

    Layers are loaded concurrently, but results are merged in the order the
    layers were given so output does not depend on scheduling.
    """

    def __init__(
        self,
        registry: DetectorRegistry,
        exporters: list[Exporter] | None = None,
        concurrency: int = 4,
    ):
        self.registry = registry
        self.exporters = exporters or []
        self.concurrency = concurrency

    def scan_data(self, data: Mapping[str, bytes]) -> list[Package]:
        """Detect packages in one in-memory layer snapshot."""
        return self.registry.detect(data)

    async def scan_layers(self, paths: list[Path], progress: Progress | None = None, task_id=None) -> ScanResult:
        """Load and scan every layer, collecting failures instead of raising them."""
        required = self.registry.required_files()
        sem = asyncio.Semaphore(self.concurrency)
        result = ScanResult()

        async def scan_one(path: Path) -> list[Package] | None:
            async with sem:
                try:
                    data = await load_layer(path, required)
                except (InventoryError, OSError) as e:
                    logger.error(f"Failed to load layer {path}: {e}")
                    result.failures[str(path)] = str(e)
                    return None
                finally:
                    if progress is not None:
                        progress.advance(task_id)
            packages = self.scan_data(data)
            logger.info(f"{path}: {len(packages)} packages")
            return packages

        per_layer = await asyncio.gather(*(scan_one(Path(p)) for p in paths))

        for path, packages in zip(paths, per_layer):
            if packages is not None:
                result.layers[str(path)] = packages
        result.packages = merge_packages(list(result.layers.values()))
        return result

    async def run(self, paths: list[Path], console: Console | None = None) -> ScanResult:
        """Scan layers with a progress display, export the merged inventory and print a summary."""
        console = console or Console(stderr=True)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task_id = progress.add_task("[green]Scanning layers...[/green]", total=len(paths))
            result = await self.scan_layers(paths, progress, task_id)

        for exporter in self.exporters:
            for package in result.packages:
                await exporter.export(package)

        for exporter in self.exporters:
            try:
                await exporter.finalize()
            except Exception as e:
                logger.error(f"Exporter finalization error: {e}")

        self._print_summary(console, result, len(paths))
        return result

    def _print_summary(self, console: Console, result: ScanResult, total_layers: int) -> None:
        console.print(
            f"[bold green][DONE][/bold green] Layers: {total_layers} | "
            f"Scanned: {len(result.layers)} | Failed: {len(result.failures)} | "
            f"Packages: {len(result.packages)}"
        )
        for path, error in result.failures.items():
            console.print(f"  [red]{path}[/red]: {error}")
