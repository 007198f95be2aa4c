"""
JSON Exporter — Writes the inventory as a single JSON document.
"""

import json
import logging
from pathlib import Path

import aiofiles

from layer_inventory.models.package import Package

logger = logging.getLogger(__name__)


class JSONExporter:
    """
    Collects packages and writes ``{"packages": [...]}`` on finalize.

    Each entry is ``Package.to_dict()``: name and canonical version string.
    """

    def __init__(self, output_path: Path):
        self.output_path = output_path
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.packages: list[Package] = []

    @property
    def count(self) -> int:
        return len(self.packages)

    async def export(self, package: Package) -> None:
        """Queue a package for the output document."""
        self.packages.append(package)
        logger.debug(f"[JSON] Queued {package.key()}")

    async def finalize(self) -> None:
        """Write the document."""
        document = {"packages": [p.to_dict() for p in self.packages]}
        async with aiofiles.open(self.output_path, "w") as f:
            await f.write(json.dumps(document, indent=2))
        logger.info(f"[JSON] Export complete: {self.count} packages exported to {self.output_path}")
